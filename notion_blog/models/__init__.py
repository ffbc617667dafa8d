"""
Data models module.

Defines data structures for posts, blocks and rich-text runs.
"""

from notion_blog.models.post import BlogPost, notion_url
from notion_blog.models.block import Block, RichText

__all__ = [
    "BlogPost",
    "Block",
    "RichText",
    "notion_url",
]
