#!/usr/bin/env python3
"""
slugify.py
----------
String slugification for post filenames.

Key Features:
    - Lowercase transformation
    - Accent/diacritic normalization (Café → cafe)
    - Space to hyphen conversion
    - Maximum length enforcement

Usage:
    from almanac.utils.slugify import slugify

    slug = slugify("Notes on Café Culture")  # "notes-on-cafe-culture"
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
import re
import unicodedata


def slugify(text: str, max_length: int = 200) -> str:
    """
    Convert text to filesystem-safe slug.

    Args:
        text: Input text to slugify
        max_length: Maximum slug length (default 200)

    Returns:
        Slugified string safe for filenames

    Examples:
        >>> slugify("Hello, World!")
        'hello-world'
        >>> slugify("What's new in 2024?")
        'whats-new-in-2024'
        >>> slugify("Rust & Python")
        'rust-and-python'
    """
    if not text:
        return ""

    # Decompose accents, then keep only ASCII
    text = unicodedata.normalize('NFKD', text)
    text = text.encode('ascii', 'ignore').decode('ascii')

    text = text.lower()
    text = text.replace("'", "")
    text = re.sub(r'[(){}\[\]]', ' ', text)
    text = text.replace('&', 'and')
    text = text.replace('/', '-')
    text = re.sub(r'[\s_]+', '-', text)
    text = re.sub(r'[^a-z0-9-]', '', text)
    text = re.sub(r'-+', '-', text)
    text = text.strip('-')

    if len(text) > max_length:
        text = text[:max_length].rstrip('-')

    return text
