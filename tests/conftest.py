"""
conftest.py
-----------
Shared pytest fixtures for almanac tests.

Provides fixtures for:
- Temporary directories and the fixture corpus
- Sample post content
- A factory that writes posts into a temporary posts directory
"""
import shutil
import pytest
from pathlib import Path
from tempfile import TemporaryDirectory


# ----- Path Fixtures -----

@pytest.fixture
def test_data_dir():
    """Path to test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def sample_posts_dir(test_data_dir):
    """Path to the read-only fixture corpus."""
    return test_data_dir / "sample_posts"


@pytest.fixture
def tmp_dir():
    """Create a temporary directory for test file operations."""
    with TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def posts_dir(tmp_dir):
    """Empty posts directory inside the temporary directory."""
    path = tmp_dir / "_posts"
    path.mkdir()
    return path


@pytest.fixture
def copied_posts_dir(sample_posts_dir, tmp_dir):
    """Writable copy of the fixture corpus."""
    target = tmp_dir / "_posts"
    shutil.copytree(sample_posts_dir, target)
    return target


@pytest.fixture
def log_dir(tmp_dir):
    """Log directory for CLI runs."""
    return tmp_dir / "logs"


@pytest.fixture
def write_post(posts_dir):
    """Factory writing a post file into ``posts_dir`` and returning its path."""
    def _write(name: str, content: str) -> Path:
        path = posts_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


# ----- Sample Markdown Content Fixtures -----

@pytest.fixture
def minimal_post_content():
    """Minimal valid post with only the required fields."""
    return """---
title: "Minimal"
date: "2024-01-15"
---

A minimal post body.
"""


@pytest.fixture
def complete_post_content():
    """Post with every front matter field populated."""
    return """---
title: "Complete Post"
date: "2024-01-15"
tags: [python, yaml]
excerpt: "Everything filled in."
---

# Complete Post

First paragraph of the body.

Second paragraph.
"""
