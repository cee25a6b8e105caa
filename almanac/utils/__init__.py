"""
Utilities package for almanac.

- md: Front matter splitting, body offsets, summaries
- fs: File discovery and the YYYY-MM-DD-title.md convention
- slugify: Filename-safe slugs

Import commonly-used utilities directly from this package:
    from almanac.utils import split_frontmatter, parse_post_filename
"""

from .md import (
    split_frontmatter,
    body_start_line,
    first_paragraph,
)

from .fs import (
    find_markdown_files,
    parse_post_filename,
    date_to_filename,
)

from .slugify import slugify

__all__ = [
    "split_frontmatter",
    "body_start_line",
    "first_paragraph",
    "find_markdown_files",
    "parse_post_filename",
    "date_to_filename",
    "slugify",
]
