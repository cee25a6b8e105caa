"""
corpus package
--------------
Loading and querying the post corpus.
"""
from almanac.corpus.collection import PostCorpus

__all__ = ["PostCorpus"]
