"""
HTML rendering for Notion block trees.

Used by the post page. Unlike the Markdown converter this walks children:
consecutive list items are grouped into one <ul>/<ol>, nested blocks are
rendered inside their parent, and tables are built from their row children.

All text is escaped with markupsafe; the result is a Markup string that
Jinja inserts as-is.
"""

from typing import Callable, Dict, List

from markupsafe import Markup, escape

from notion_blog.models.block import Block, RichText, plain_text


LIST_TAGS = {
    "bulleted_list_item": "ul",
    "numbered_list_item": "ol",
}


def rich_text_to_html(runs: List[RichText]) -> Markup:
    """Render runs with the same style precedence as the Markdown converter."""
    parts = []
    for run in runs:
        content = escape(run.plain_text)
        if run.bold:
            content = Markup("<strong>{}</strong>").format(content)
        if run.italic:
            content = Markup("<em>{}</em>").format(content)
        if run.code:
            content = Markup("<code>{}</code>").format(content)
        if run.strikethrough:
            content = Markup("<s>{}</s>").format(content)
        if run.underline:
            content = Markup("<u>{}</u>").format(content)
        if run.href:
            content = Markup('<a href="{}" target="_blank" rel="noopener noreferrer">{}</a>').format(
                run.href, content
            )
        parts.append(content)
    return Markup("").join(parts)


def _children_html(block: Block) -> Markup:
    return render_blocks(block.children) if block.children else Markup("")


def _text_block(tag: str) -> Callable[[Block], Markup]:
    def render(block: Block) -> Markup:
        return Markup("<{tag}>{text}</{tag}>{children}").format(
            tag=Markup(tag), text=rich_text_to_html(block.rich_text), children=_children_html(block)
        )
    return render


def _list_item(block: Block) -> Markup:
    return Markup("<li>{}{}</li>").format(rich_text_to_html(block.rich_text), _children_html(block))


def _to_do(block: Block) -> Markup:
    checked = Markup(" checked") if block.checked else Markup("")
    return Markup('<div class="todo"><input type="checkbox" disabled{}> {}</div>{}').format(
        checked, rich_text_to_html(block.rich_text), _children_html(block)
    )


def _toggle(block: Block) -> Markup:
    return Markup("<details><summary>{}</summary>{}</details>").format(
        rich_text_to_html(block.rich_text), _children_html(block)
    )


def _code(block: Block) -> Markup:
    language = block.language or "text"
    return Markup('<pre><code class="language-{}">{}</code></pre>').format(language, block.text)


def _quote(block: Block) -> Markup:
    return Markup("<blockquote>{}{}</blockquote>").format(
        rich_text_to_html(block.rich_text), _children_html(block)
    )


def _callout(block: Block) -> Markup:
    icon = (block.raw.get("callout") or {}).get("icon") or {}
    emoji = icon.get("emoji", "") if icon.get("type") == "emoji" else ""
    return Markup('<aside class="callout"><span class="callout-icon">{}</span><div>{}{}</div></aside>').format(
        emoji, rich_text_to_html(block.rich_text), _children_html(block)
    )


def _divider(block: Block) -> Markup:
    return Markup("<hr>")


def _image(block: Block) -> Markup:
    caption_text = plain_text(block.caption)
    figcaption = (
        Markup("<figcaption>{}</figcaption>").format(rich_text_to_html(block.caption))
        if block.caption else Markup("")
    )
    return Markup('<figure><img src="{}" alt="{}" loading="lazy">{}</figure>').format(
        block.url or "", caption_text, figcaption
    )


def _table(block: Block) -> Markup:
    settings = block.raw.get("table") or {}
    rows = [child for child in block.children if child.type == "table_row"]
    html_rows = []
    for index, row in enumerate(rows):
        cell_tag = Markup("th") if index == 0 and settings.get("has_column_header") else Markup("td")
        cells = Markup("").join(
            Markup("<{tag}>{text}</{tag}>").format(tag=cell_tag, text=rich_text_to_html(cell))
            for cell in row.cells
        )
        html_rows.append(Markup("<tr>{}</tr>").format(cells))
    return Markup("<table>{}</table>").format(Markup("").join(html_rows))


def _link_block(block: Block) -> Markup:
    url = (block.raw.get(block.type) or {}).get("url") or ""
    if not url:
        return Markup("")
    return Markup('<p class="bookmark"><a href="{url}" target="_blank" rel="noopener noreferrer">{url}</a></p>').format(
        url=url
    )


BLOCK_RENDERERS: Dict[str, Callable[[Block], Markup]] = {
    "paragraph": _text_block("p"),
    "heading_1": _text_block("h1"),
    "heading_2": _text_block("h2"),
    "heading_3": _text_block("h3"),
    "to_do": _to_do,
    "toggle": _toggle,
    "code": _code,
    "quote": _quote,
    "callout": _callout,
    "divider": _divider,
    "image": _image,
    "table": _table,
    "bookmark": _link_block,
    "embed": _link_block,
}


def render_block(block: Block) -> Markup:
    """Render a single non-list block. Unknown types render as nothing."""
    renderer = BLOCK_RENDERERS.get(block.type)
    return renderer(block) if renderer else Markup("")


def render_blocks(blocks: List[Block]) -> Markup:
    """
    Render a list of sibling blocks.

    Runs of consecutive list items of the same kind share one list element.
    """
    parts = []
    index = 0
    while index < len(blocks):
        block = blocks[index]
        list_tag = LIST_TAGS.get(block.type)

        if list_tag:
            items = []
            while index < len(blocks) and blocks[index].type == block.type:
                items.append(_list_item(blocks[index]))
                index += 1
            parts.append(Markup("<{tag}>{items}</{tag}>").format(
                tag=Markup(list_tag), items=Markup("").join(items)
            ))
            continue

        parts.append(render_block(block))
        index += 1

    return Markup("\n").join(parts)
