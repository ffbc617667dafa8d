"""
Markdown conversion for Notion blocks.

Flat conversion: only the blocks passed in are rendered, children are not
descended into. Unsupported block types render as an empty string.

Rich-text styles are applied in a fixed order: bold, italic, code,
strikethrough, then the link wraps everything. A run "x" with every flag
and href "h" therefore becomes:

    [~~`***x***`~~](h)
"""

from typing import List

from notion_blog.models.block import Block, RichText


HEADING_PREFIXES = {
    "heading_1": "# ",
    "heading_2": "## ",
    "heading_3": "### ",
}

LINE_PREFIXES = {
    "paragraph": "",
    "bulleted_list_item": "- ",
    "numbered_list_item": "1. ",
    "quote": "> ",
    **HEADING_PREFIXES,
}


def rich_text_to_markdown(runs: List[RichText]) -> str:
    """Render a list of runs, each styled independently, joined without separator."""
    parts = []
    for run in runs:
        content = run.plain_text
        if run.bold:
            content = f"**{content}**"
        if run.italic:
            content = f"*{content}*"
        if run.code:
            content = f"`{content}`"
        if run.strikethrough:
            content = f"~~{content}~~"
        if run.href:
            content = f"[{content}]({run.href})"
        parts.append(content)
    return "".join(parts)


def block_to_markdown(block: Block) -> str:
    """
    Convert one block to a Markdown fragment.

    Args:
        block: The block to convert.

    Returns:
        Markdown text, or "" for block types without a mapping.
    """
    if block.type in LINE_PREFIXES:
        return LINE_PREFIXES[block.type] + rich_text_to_markdown(block.rich_text)

    if block.type == "code":
        language = block.language or "text"
        return f"```{language}\n{rich_text_to_markdown(block.rich_text)}\n```"

    if block.type == "divider":
        return "---"

    if block.type == "image":
        caption = rich_text_to_markdown(block.caption)
        return f"![{caption}]({block.url or ''})"

    return ""


def blocks_to_markdown(blocks: List[Block]) -> str:
    """Convert blocks and join them with a blank line."""
    return "\n\n".join(block_to_markdown(block) for block in blocks)
