#!/usr/bin/env python3
"""
md.py
-------------------
Markdown-specific utilities for blog posts.

Provides functions for splitting Markdown files into YAML front matter and
body, and pulling a plain-text summary out of a body.

This module handles Markdown structure only; YAML parsing and type
normalization live in the Post dataclass and DataValidator.
"""
from __future__ import annotations

# --- Standard library imports ---
import re
from typing import List, Optional

# --- Local imports ---
from almanac.core.exceptions import PostParseError

FRONTMATTER_DELIMITER = "---"
BOM = "\ufeff"


# ----- YAML Front Matter Parsing -----
def split_frontmatter(content: str) -> tuple[Optional[str], List[str]]:
    """
    Split markdown content into YAML front matter and body.

    Expected format:
        ---
        yaml: content
        ---

        Body content here...

    Front matter only counts when the very first line is ``---``.

    Args:
        content: Full markdown file content

    Returns:
        Tuple of (frontmatter_text, body_lines)
        - frontmatter_text: YAML content as string, None if the file has no
          front matter block ("" for an empty block)
        - body_lines: List of body content lines

    Raises:
        PostParseError: If the opening ``---`` is never closed

    Examples:
        >>> fm, body = split_frontmatter("---\\ntitle: Hi\\n---\\n\\nBody text")
        >>> fm
        'title: Hi'
        >>> body
        ['Body text']
        >>> split_frontmatter("Just text")
        (None, ['Just text'])
    """
    if content.startswith(BOM):
        content = content[len(BOM):]

    lines = content.splitlines()

    if not lines or lines[0].rstrip() != FRONTMATTER_DELIMITER:
        return None, lines

    frontmatter_end = None
    for i, line in enumerate(lines[1:], 1):
        if line.rstrip() == FRONTMATTER_DELIMITER:
            frontmatter_end = i
            break

    if frontmatter_end is None:
        raise PostParseError(
            "Front matter opened with '---' but never closed", line_number=1
        )

    frontmatter_lines = lines[1:frontmatter_end]
    body_lines = lines[frontmatter_end + 1 :]

    while body_lines and body_lines[0].strip() == "":
        body_lines.pop(0)

    return "\n".join(frontmatter_lines), body_lines


def body_start_line(content: str) -> int:
    """
    Return the 1-indexed file line where the body text begins.

    Used to translate body-relative line numbers back to the source file.
    """
    try:
        _, body_lines = split_frontmatter(content)
    except PostParseError:
        return 1
    total = len(content.lstrip(BOM).splitlines())
    return total - len(body_lines) + 1


# ----- Summaries -----
_MARKUP_RE = re.compile(r"[*`]|!?\[([^\]]*)\]\([^)]*\)")


def first_paragraph(body: str) -> str:
    """
    Return the first prose paragraph of a Markdown body.

    Headings, fenced code and blank lines are skipped; inline emphasis and
    link targets are stripped so the result reads as plain text.

    Examples:
        >>> first_paragraph("# Title\\n\\nFirst *para*\\ncontinues.\\n\\nSecond.")
        'First para continues.'
    """
    paragraph: List[str] = []
    in_fence = False
    for line in body.splitlines():
        stripped = line.strip()
        if stripped.startswith(("```", "~~~")):
            in_fence = not in_fence
            if paragraph:
                break
            continue
        if in_fence:
            continue
        if not stripped:
            if paragraph:
                break
            continue
        if stripped.startswith("#") and not paragraph:
            continue
        paragraph.append(stripped)

    text = " ".join(paragraph)
    return _MARKUP_RE.sub(lambda m: m.group(1) or "", text).strip()

