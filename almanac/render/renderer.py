#!/usr/bin/env python3
"""
renderer.py
-----------
markdown-it-py helpers used to check that post bodies render.

The external publishing platform owns rendering for display; this module
only pushes bodies through a standard CommonMark renderer to catch bodies
that would fail there, and walks the token stream to find links.

Usage:
    from almanac.render.renderer import build_renderer, check_renders

    md = build_renderer()
    problem = check_renders(post.body, md)
    if problem:
        print(f"Body does not render: {problem}")

Dependencies:
    - markdown-it-py >= 3.0.0
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from typing import List, Optional, Tuple

# --- Third-party imports ---
from markdown_it import MarkdownIt


def build_renderer() -> MarkdownIt:
    """Return a CommonMark renderer with GFM tables and strikethrough."""
    return MarkdownIt("commonmark").enable(["table", "strikethrough"])


def render_body(body: str, md: Optional[MarkdownIt] = None) -> str:
    """
    Render a Markdown body to HTML.

    Args:
        body: Markdown text
        md: Renderer to reuse; a fresh one is built when omitted

    Returns:
        HTML string
    """
    md = md or build_renderer()
    return md.render(body)


def check_renders(body: str, md: Optional[MarkdownIt] = None) -> Optional[str]:
    """
    Check that a body renders without raising.

    Returns:
        None on success, otherwise "<ErrorType>: <message>"
    """
    try:
        render_body(body, md)
    except Exception as e:
        return f"{type(e).__name__}: {e}"
    return None


def extract_links(body: str, md: Optional[MarkdownIt] = None) -> List[Tuple[str, int]]:
    """
    Extract link and image targets from a Markdown body.

    Links inside code spans and fenced code are not tokens, so they are
    naturally skipped.

    Args:
        body: Markdown text
        md: Renderer to reuse; a fresh one is built when omitted

    Returns:
        List of (target, line_number) with 1-indexed body line numbers
    """
    md = md or build_renderer()
    links: List[Tuple[str, int]] = []

    for token in md.parse(body):
        if token.type != "inline" or not token.children:
            continue
        line_number = token.map[0] + 1 if token.map else 1
        for child in token.children:
            # the inline token starts at its block's first line
            if child.type in ("softbreak", "hardbreak"):
                line_number += 1
            elif child.type == "link_open":
                href = child.attrGet("href")
                if href:
                    links.append((str(href), line_number))
            elif child.type == "image":
                src = child.attrGet("src")
                if src:
                    links.append((str(src), line_number))

    return links
