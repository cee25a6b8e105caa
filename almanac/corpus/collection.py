#!/usr/bin/env python3
"""
collection.py
-------------
The post corpus: every Markdown post under a posts directory.

Posts are independent documents. The only relationships the corpus
computes are the display order (filename sort) and the tag index, both
derived on demand from the files.

Usage:
    from almanac.corpus import PostCorpus

    corpus = PostCorpus(Path("_posts"), logger)
    for post in corpus:
        print(post.date, post.title)

    python_posts = corpus.by_tag("python")
"""
# --- Annotations ---
from __future__ import annotations

# --- Standard library imports ---
from collections import Counter
from datetime import date
from pathlib import Path
from typing import Iterator, List, Optional, Tuple

# --- Local imports ---
from almanac.core.exceptions import CorpusError, PostParseError
from almanac.core.logging_manager import AlmanacLogger, safe_logger
from almanac.dataclasses.post import Post
from almanac.utils.fs import find_markdown_files

EXCLUDED_NAMES = {"README.md"}


class PostCorpus:
    """
    Read-only view over the posts in a directory.

    Attributes:
        posts_dir: Directory holding the posts
        failures: (path, error) for each file that could not be parsed
    """

    def __init__(
        self,
        posts_dir: Path,
        logger: Optional[AlmanacLogger] = None,
    ) -> None:
        self.posts_dir = Path(posts_dir)
        self.logger = safe_logger(logger)
        self.failures: List[Tuple[Path, PostParseError]] = []
        self._posts: Optional[List[Post]] = None

    def post_files(self) -> List[Path]:
        """
        Markdown files in the corpus, in filename order.

        Raises:
            CorpusError: If the posts directory does not exist
        """
        if not self.posts_dir.is_dir():
            raise CorpusError(f"Posts directory not found: {self.posts_dir}")
        files = [
            f for f in find_markdown_files(self.posts_dir)
            if f.name not in EXCLUDED_NAMES
        ]
        return sorted(files, key=lambda f: f.name)

    def load(self) -> List[Post]:
        """
        Parse every post, recording parse failures instead of aborting.

        Returns:
            Posts sorted in display order (by filename)

        Raises:
            CorpusError: If the posts directory does not exist
        """
        self.failures = []
        posts: List[Post] = []

        for file_path in self.post_files():
            try:
                posts.append(Post.from_file(file_path))
            except PostParseError as e:
                self.failures.append((file_path, e))
                self.logger.log_error(e, {"file": str(file_path)})

        posts.sort(key=lambda p: p.sort_key)
        self._posts = posts
        self.logger.log_operation(
            "load_corpus",
            {
                "posts_dir": str(self.posts_dir),
                "posts": len(posts),
                "failures": len(self.failures),
            },
        )
        return posts

    @property
    def posts(self) -> List[Post]:
        """Loaded posts (loads on first access)."""
        if self._posts is None:
            self.load()
        return self._posts or []

    def __len__(self) -> int:
        return len(self.posts)

    def __iter__(self) -> Iterator[Post]:
        return iter(self.posts)

    # ----- Queries -----
    def find(self, slug: str) -> Optional[Post]:
        """Find a post by slug or by filename stem."""
        for post in self.posts:
            if post.slug == slug or (post.path is not None and post.path.stem == slug):
                return post
        return None

    def by_tag(self, tag: str) -> List[Post]:
        """Posts carrying ``tag`` (case-insensitive), in display order."""
        return [post for post in self.posts if post.has_tag(tag)]

    def tag_counts(self) -> Counter:
        """
        Number of posts per tag.

        Tags are folded to lowercase, matching ``by_tag``; a tag repeated
        within one post counts once.
        """
        counts: Counter = Counter()
        for post in self.posts:
            counts.update({tag.lower() for tag in post.tags})
        return counts

    def ordering_issues(self) -> List[Tuple[Post, Post]]:
        """
        Adjacent posts whose dates go backwards in filename order.

        Undated posts are skipped; each pair is (previous, out_of_order).
        """
        issues: List[Tuple[Post, Post]] = []
        previous: Optional[Post] = None
        for post in self.posts:
            if post.date is None:
                continue
            if previous is not None and previous.date is not None and post.date < previous.date:
                issues.append((previous, post))
            previous = post
        return issues

    def date_range(self) -> Optional[Tuple[date, date]]:
        """(earliest, latest) post dates, None when no post is dated."""
        dates = [post.date for post in self.posts if post.date is not None]
        if not dates:
            return None
        return min(dates), max(dates)
