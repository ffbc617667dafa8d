"""
Notion module.

API client and the property mapping that turns Notion pages into posts.
"""

from notion_blog.notion.client import NotionClient, NotionAPIError
from notion_blog.notion.properties import FIELD_ALIASES, extract_post, slugify

__all__ = [
    "NotionClient",
    "NotionAPIError",
    "FIELD_ALIASES",
    "extract_post",
    "slugify",
]
