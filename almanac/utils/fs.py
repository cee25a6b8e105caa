#!/usr/bin/env python3
"""
fs.py
-------------------
Filesystem utilities for post discovery and the filename convention.

Posts are named ``YYYY-MM-DD-title.md``; the date prefix gives the display
order and the remainder is the post's slug.

Functions:
    find_markdown_files: Discover markdown files by glob pattern
    parse_post_filename: Split a conventional filename into (date, slug)
    date_to_filename: Build the conventional filename for a date and title

Usage:
    from almanac.utils.fs import find_markdown_files, parse_post_filename

    files = find_markdown_files(Path("_posts"))
    post_date, slug = parse_post_filename(Path("2024-01-15-hello-world.md"))
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
from datetime import date
from pathlib import Path
from typing import List, Tuple

# --- Local imports ---
from .slugify import slugify

POST_FILENAME_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})-(.+)\.md$")


def find_markdown_files(directory: Path, pattern: str = "**/*.md") -> List[Path]:
    """Find all markdown files matching pattern, sorted by path."""
    if not directory.exists():
        return []
    # directories named *.md are not posts
    return sorted(p for p in directory.glob(pattern) if p.is_file())


def parse_post_filename(path: Path) -> Tuple[date, str]:
    """
    Parse a post filename formatted as ``YYYY-MM-DD-title.md``.

    Args:
        path: Path object or filename of the post.

    Returns:
        Tuple of (date, slug)

    Raises:
        ValueError: If the filename does not follow the convention or the
            date is not a real calendar day.

    Examples:
        >>> parse_post_filename(Path("2024-01-15-hello-world.md"))
        (datetime.date(2024, 1, 15), 'hello-world')
    """
    name = Path(path).name
    match = POST_FILENAME_RE.match(name)
    if not match:
        raise ValueError(f"Filename does not match YYYY-MM-DD-title.md: {name}")

    year, month, day, slug = match.groups()
    try:
        return date(int(year), int(month), int(day)), slug
    except ValueError as e:
        raise ValueError(f"Invalid date in filename: {name}") from e


def date_to_filename(post_date: date, title: str) -> str:
    """
    Build the conventional filename for a post.

    Examples:
        >>> date_to_filename(date(2024, 1, 15), "Hello, World!")
        '2024-01-15-hello-world.md'
    """
    slug = slugify(title) or "untitled"
    return f"{post_date.isoformat()}-{slug}.md"
