#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the Almanac toolkit.

Exception Hierarchy:
    Exception (built-in)
    ├── ValidationError - Front-matter value validation failures
    ├── PostParseError - Post file could not be read or split/parsed
    └── CorpusError - Posts directory missing or unreadable

Usage:
    from almanac.core.exceptions import PostParseError

    try:
        post = Post.from_file(path)
    except PostParseError as e:
        logger.log_error(e, {"file": str(path)})
"""


class ValidationError(Exception):
    """
    Exception for front-matter value failures.

    Raised by DataValidator when a required field is missing or empty; the
    markdown validator turns it into an issue.

    Examples:
        >>> raise ValidationError("Required field 'title' missing")
    """

    pass


class PostParseError(Exception):
    """
    Exception for post parsing failures.

    Raised when reading a post from disk or text fails:
    - Front matter opened with '---' but never closed
    - YAML syntax errors
    - Front matter that is not a mapping
    - Encoding and I/O errors

    Attributes:
        line_number: 1-indexed line in the source file, when known

    Examples:
        >>> raise PostParseError("Front matter is not terminated")
        >>> raise PostParseError("Invalid YAML syntax", line_number=3)
    """

    def __init__(self, message: str, line_number: int | None = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class CorpusError(Exception):
    """
    Exception for corpus-level failures.

    Examples:
        >>> raise CorpusError("Posts directory not found: _posts")
    """

    pass
