#!/usr/bin/env python3
"""
validators
----------
Validation tools for the blog corpus.

- md.py: per-file front matter, filename, body and render checks, plus
  corpus-wide link and ordering checks
- cli.py: the ``almanac validate`` command group

Usage:
    # Through CLI
    almanac validate all
    almanac validate frontmatter _posts/2024-01-15-hello-world.md

    # Direct import for programmatic use
    from almanac.validators.md import MarkdownValidator
"""

__all__ = ["md", "cli"]
