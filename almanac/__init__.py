"""
Almanac
=======

Toolkit for a corpus of blog posts written as Markdown files with YAML
front matter (title, date, tags, excerpt), named YYYY-MM-DD-title.md.

The posts themselves are rendered by an external publishing platform; this
package only loads them read-only and checks the authoring conventions.

Main Components:
    - dataclasses: The Post dataclass
    - corpus: Loading and querying the posts directory
    - validators: Front matter, filename, link, order and render checks
    - render: markdown-it-py render checks
    - core: Logging, exceptions, paths, CLI helpers
    - utils: Front matter splitting, filename convention, slugs

Primary Interfaces:
    - almanac.cli: Command line entry point
    - almanac.corpus.PostCorpus: Programmatic access to the posts

Example Usage:
    >>> from almanac import PostCorpus, POSTS_DIR
    >>> corpus = PostCorpus(POSTS_DIR)
    >>> [post.title for post in corpus.by_tag("python")]
"""

__version__ = "1.0.0"

from almanac.core.paths import LOG_DIR, POSTS_DIR
from almanac.corpus.collection import PostCorpus
from almanac.dataclasses.post import Post

__all__ = [
    "Post",
    "PostCorpus",
    "POSTS_DIR",
    "LOG_DIR",
]
