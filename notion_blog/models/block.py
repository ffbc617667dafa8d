"""
Block models for Notion Blog.

Notion returns page content as a tree of typed blocks. Each block keeps its
type-specific payload under a key named after the type, e.g.

    {"id": "...", "type": "heading_2", "has_children": false,
     "heading_2": {"rich_text": [...], "color": "default"}}

Block.from_api() lifts the parts the renderers care about out of that payload.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class RichText:
    """A styled run of text with independent formatting flags."""

    plain_text: str
    bold: bool = False
    italic: bool = False
    code: bool = False
    strikethrough: bool = False
    underline: bool = False
    color: str = "default"
    href: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "RichText":
        annotations = raw.get("annotations") or {}
        return cls(
            plain_text=raw.get("plain_text") or "",
            bold=bool(annotations.get("bold")),
            italic=bool(annotations.get("italic")),
            code=bool(annotations.get("code")),
            strikethrough=bool(annotations.get("strikethrough")),
            underline=bool(annotations.get("underline")),
            color=annotations.get("color") or "default",
            href=raw.get("href"),
        )


def rich_text_list(raw_runs: Optional[List[Dict[str, Any]]]) -> List[RichText]:
    """Convert a Notion rich_text array, tolerating None."""
    return [RichText.from_api(run) for run in raw_runs or []]


def plain_text(runs: List[RichText]) -> str:
    """Concatenate the unstyled text of a list of runs."""
    return "".join(run.plain_text for run in runs)


def file_url(payload: Dict[str, Any]) -> str:
    """Resolve a Notion file object to its URL (hosted file first, then external)."""
    if payload.get("file"):
        return payload["file"].get("url") or ""
    if payload.get("external"):
        return payload["external"].get("url") or ""
    return ""


@dataclass
class Block:
    """
    A node in a page's content tree.

    Attributes:
        id: Block id.
        type: Notion block type ("paragraph", "heading_1", "code", ...).
        has_children: Whether Notion reports nested blocks under this one.
        rich_text: Text runs of the block (empty for divider, image, ...).
        children: Resolved child blocks, in source order.
        language: Code block language.
        checked: to_do state.
        url: Resolved image URL.
        caption: Image caption runs.
        cells: Table row cells, each a list of runs.
        raw: The untouched API payload.
    """

    id: str
    type: str
    has_children: bool = False
    rich_text: List[RichText] = field(default_factory=list)
    children: List["Block"] = field(default_factory=list)
    language: Optional[str] = None
    checked: Optional[bool] = None
    url: Optional[str] = None
    caption: List[RichText] = field(default_factory=list)
    cells: List[List[RichText]] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict, repr=False)

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "Block":
        """
        Build a Block from a Notion block object.

        Unknown block types are kept with an empty payload so renderers
        can skip them.
        """
        block_type = raw.get("type") or "unsupported"
        payload = raw.get(block_type) or {}

        block = cls(
            id=raw.get("id", ""),
            type=block_type,
            has_children=bool(raw.get("has_children")),
            rich_text=rich_text_list(payload.get("rich_text")),
            raw=raw,
        )

        if block_type == "code":
            block.language = payload.get("language")
        elif block_type == "to_do":
            block.checked = bool(payload.get("checked"))
        elif block_type == "image":
            block.url = file_url(payload)
            block.caption = rich_text_list(payload.get("caption"))
        elif block_type == "table_row":
            block.cells = [rich_text_list(cell) for cell in payload.get("cells") or []]

        return block

    @property
    def text(self) -> str:
        return plain_text(self.rich_text)

    def walk(self):
        """Yield this block and all descendants, depth first, in source order."""
        stack = [self]
        while stack:
            block = stack.pop()
            yield block
            stack.extend(reversed(block.children))

    def __repr__(self) -> str:
        return f"Block(id={self.id!r}, type={self.type!r}, children={len(self.children)})"
