"""
Post model for Notion Blog.

Defines the BlogPost dataclass: the fixed record every Notion page is
normalized into, whatever property names its database happens to use.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional


NOTION_PAGE_URL = "https://notion.so/{compact_id}"


@dataclass
class BlogPost:
    """
    A blog post derived from a Notion page.

    Posts are built fresh on every request and never written back.

    Attributes:
        id: Notion's immutable page id (UUID with dashes).
        title: Post title ("Untitled" when the page has none).
        slug: URL slug. Explicit Slug property or slugified title; not unique.
        description: Short summary shown on cards and in meta tags.
        tags: Tag names from a multi-select property.
        status: Select value such as "Published" or "Draft".
        published_at: Publication timestamp used for ordering.
        cover: Cover image URL, if the page has one.
        author: Author display name.
        url: Canonical Notion URL for the page.
    """

    id: str
    title: str
    slug: str
    published_at: datetime
    description: str = ""
    tags: list[str] = field(default_factory=list)
    status: str = "Published"
    cover: Optional[str] = None
    author: Optional[str] = None
    url: str = ""

    def __post_init__(self) -> None:
        if not self.url and self.id:
            self.url = notion_url(self.id)

    def to_dict(self) -> dict:
        """
        Convert BlogPost to a plain dictionary for JSON output.

        Returns:
            Dictionary with published_at as an ISO format string.
        """
        data = asdict(self)
        data["published_at"] = self.published_at.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "BlogPost":
        """
        Create a BlogPost from a dictionary produced by to_dict().

        Args:
            data: Dictionary with BlogPost fields.

        Returns:
            New BlogPost instance.
        """
        data = data.copy()

        if isinstance(data.get("published_at"), str):
            data["published_at"] = datetime.fromisoformat(
                data["published_at"].replace("Z", "+00:00")
            )

        return cls(**data)

    def __str__(self) -> str:
        return f"{self.title} (/{self.slug})"

    def __repr__(self) -> str:
        return f"BlogPost(id={self.id!r}, slug={self.slug!r}, title={self.title!r})"


def notion_url(page_id: str) -> str:
    """Canonical notion.so URL for a page id."""
    return NOTION_PAGE_URL.format(compact_id=page_id.replace("-", ""))
