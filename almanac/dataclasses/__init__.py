"""
dataclasses package
-------------------
Dataclass definitions for blog posts.

- Post: Markdown post with YAML front matter
"""
from almanac.dataclasses.post import Post

__all__ = ["Post"]
