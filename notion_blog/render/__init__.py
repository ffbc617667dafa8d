"""
Rendering module.

Converts Notion block trees to Markdown and HTML.
"""

from notion_blog.render.markdown import (
    blocks_to_markdown,
    block_to_markdown,
    rich_text_to_markdown,
)
from notion_blog.render.html import render_blocks, rich_text_to_html

__all__ = [
    "blocks_to_markdown",
    "block_to_markdown",
    "rich_text_to_markdown",
    "render_blocks",
    "rich_text_to_html",
]
