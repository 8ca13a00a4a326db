"""
Post

This module provides the blog post record, its JSON mapping and repository.
"""

from blogapi.post.models import Author, BlogPost, to_api
from blogapi.post.repository import PostRepository

__all__ = ["Author", "BlogPost", "PostRepository", "to_api"]
