#!/usr/bin/env python3
"""
post.py
-------------------
Dataclass representing a blog post with YAML front matter.

A Post is the read-only, in-memory form of one Markdown file in the corpus:

    ---
    title: "Hello, World"
    date: "2024-01-15"
    tags: [meta, intro]
    excerpt: "Why this blog exists."
    ---

    Body in Markdown...

Loading is lenient about value types (a scalar ``tags`` becomes a list, a
malformed ``date`` becomes None) so a corpus can always be listed; strict
checks are the job of ``almanac.validators.md``. Only structural failures
(unterminated front matter, invalid YAML, non-mapping front matter) raise.
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import logging
from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional

# --- Third party imports ---
import yaml

# --- Local imports ---
from almanac.core.exceptions import PostParseError
from almanac.core.validators import DataValidator
from almanac.utils.fs import parse_post_filename
from almanac.utils.md import first_paragraph, split_frontmatter

logger = logging.getLogger(__name__)

WORDS_PER_MINUTE = 260

KNOWN_FIELDS = ("title", "date", "tags", "excerpt")


@dataclass
class Post:
    """
    One blog post: front matter fields plus the Markdown body.

    Attributes:
        title: Post title, None when absent
        date: Publication date, None when absent or malformed
        tags: Ordered tag list
        excerpt: Author-provided excerpt, None when absent
        body: Markdown body text
        path: Source file, None for posts built from text
        extra: Front matter keys other than the known fields
        has_frontmatter: Whether the file carried a front matter block
    """

    title: Optional[str] = None
    date: Optional[date] = None
    tags: List[str] = field(default_factory=list)
    excerpt: Optional[str] = None
    body: str = ""
    path: Optional[Path] = None
    extra: Dict[str, Any] = field(default_factory=dict)
    has_frontmatter: bool = False

    # ----- Construction -----
    @classmethod
    def from_text(cls, content: str, path: Optional[Path] = None) -> Post:
        """
        Build a Post from the full text of a Markdown file.

        Args:
            content: File content
            path: Optional source path (used for slug and filename date)

        Returns:
            Parsed Post

        Raises:
            PostParseError: If front matter is unterminated, is not valid
                YAML, or is not a mapping
        """
        frontmatter_text, body_lines = split_frontmatter(content)
        body = "\n".join(body_lines)

        if frontmatter_text is None:
            return cls(body=body, path=path, has_frontmatter=False)

        try:
            metadata = yaml.safe_load(frontmatter_text)
        except yaml.YAMLError as e:
            mark = getattr(e, "problem_mark", None)
            # +2: 0-indexed mark, plus the opening '---' line
            line_number = mark.line + 2 if mark is not None else None
            raise PostParseError(
                f"Invalid YAML in front matter: {e}", line_number=line_number
            ) from e

        if metadata is None:
            metadata = {}
        if not isinstance(metadata, dict):
            raise PostParseError(
                f"Front matter must be a mapping, got {type(metadata).__name__}",
                line_number=2,
            )

        return cls(
            title=DataValidator.normalize_string(metadata.get("title")),
            date=DataValidator.normalize_date(metadata.get("date")),
            tags=DataValidator.normalize_tags(metadata.get("tags")),
            excerpt=DataValidator.normalize_string(metadata.get("excerpt")),
            body=body,
            path=path,
            extra={k: v for k, v in metadata.items() if k not in KNOWN_FIELDS},
            has_frontmatter=True,
        )

    @classmethod
    def from_file(cls, file_path: Path) -> Post:
        """
        Read and parse a post file.

        Raises:
            PostParseError: If the file cannot be read as UTF-8 or parsed
        """
        file_path = Path(file_path)
        try:
            content = file_path.read_text(encoding="utf-8")
        except UnicodeDecodeError as e:
            raise PostParseError(f"File is not valid UTF-8: {file_path.name}") from e
        except OSError as e:
            raise PostParseError(f"Cannot read {file_path}: {e}") from e

        logger.debug("Parsing post %s", file_path)
        return cls.from_text(content, path=file_path)

    # ----- Filename convention -----
    @property
    def slug(self) -> Optional[str]:
        """Slug from a YYYY-MM-DD-title.md filename, else the file stem."""
        if self.path is None:
            return None
        try:
            return parse_post_filename(self.path)[1]
        except ValueError:
            return self.path.stem

    @property
    def filename_date(self) -> Optional[date]:
        """Date encoded in the filename, None if the name is unconventional."""
        if self.path is None:
            return None
        try:
            return parse_post_filename(self.path)[0]
        except ValueError:
            return None

    @property
    def sort_key(self) -> str:
        """Display-order key: the filename, falling back to the ISO date."""
        if self.path is not None:
            return self.path.name
        return self.date.isoformat() if self.date else ""

    # ----- Derived content -----
    @property
    def summary(self) -> str:
        """The excerpt, or the first paragraph of the body."""
        return self.excerpt or first_paragraph(self.body)

    @property
    def word_count(self) -> int:
        return len(self.body.split())

    @property
    def reading_time(self) -> float:
        """Estimated reading time in minutes."""
        return round(self.word_count / WORDS_PER_MINUTE, 1)

    def has_tag(self, tag: str) -> bool:
        """Case-insensitive tag membership."""
        wanted = tag.strip().lower()
        return any(t.lower() == wanted for t in self.tags)

    def to_dict(self) -> Dict[str, Any]:
        """Metadata view for JSON output (the body is left out)."""
        return {
            "slug": self.slug,
            "title": self.title,
            "date": self.date.isoformat() if self.date else None,
            "tags": list(self.tags),
            "excerpt": self.excerpt,
            "summary": self.summary,
            "word_count": self.word_count,
            "reading_time": self.reading_time,
            "path": str(self.path) if self.path else None,
        }
