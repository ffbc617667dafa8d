"""
Property mapping: Notion page properties -> BlogPost.

Databases name their columns however their owners like, so each BlogPost
field has an ordered list of accepted property names. The first alias that
exists on the page and yields a non-empty value of the expected kind wins;
otherwise the field falls back to its default.

=============================================================================
FIELD ALIASES
=============================================================================

| Field        | Accepted names (in order)                                 | Kind         |
|--------------|-----------------------------------------------------------|--------------|
| title        | Title, Name, title, name (then any `title` property)      | title        |
| slug         | Slug, slug                                                | rich_text    |
| description  | Description, description, Summary, summary, Excerpt, excerpt | rich_text |
| tags         | Tags, tags, Categories, categories                        | multi_select |
| status       | Status, status, Published                                 | select       |
| published_at | PublishedAt, Published, Date, date, CreatedAt, created_time | date       |
| cover        | Cover, cover, Image, image, Thumbnail, thumbnail          | files        |
| author       | Author, author, CreatedBy                                 | rich_text    |

=============================================================================
"""

import re
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from notion_blog.config import DEFAULT_AUTHOR
from notion_blog.models.post import BlogPost, notion_url


FIELD_ALIASES: Dict[str, List[str]] = {
    "title": ["Title", "Name", "title", "name"],
    "slug": ["Slug", "slug"],
    "description": ["Description", "description", "Summary", "summary", "Excerpt", "excerpt"],
    "tags": ["Tags", "tags", "Categories", "categories"],
    "status": ["Status", "status", "Published"],
    "published_at": ["PublishedAt", "Published", "Date", "date", "CreatedAt", "created_time"],
    "cover": ["Cover", "cover", "Image", "image", "Thumbnail", "thumbnail"],
    "author": ["Author", "author", "CreatedBy"],
}

DEFAULT_TITLE = "Untitled"
DEFAULT_STATUS = "Published"

_SLUG_INVALID = re.compile(r"[^a-z0-9]+")


# =============================================================================
# Property Readers
# =============================================================================
# Each reader returns a falsy value when the property is missing or holds
# something of another kind.

def read_title(prop: Optional[Dict[str, Any]]) -> str:
    if prop and prop.get("title"):
        return prop["title"][0].get("plain_text") or ""
    return ""


def read_rich_text(prop: Optional[Dict[str, Any]]) -> str:
    if prop and prop.get("rich_text"):
        return prop["rich_text"][0].get("plain_text") or ""
    return ""


def read_multi_select(prop: Optional[Dict[str, Any]]) -> List[str]:
    if prop and prop.get("multi_select"):
        return [option["name"] for option in prop["multi_select"] if option.get("name")]
    return []


def read_select(prop: Optional[Dict[str, Any]]) -> str:
    if prop and prop.get("select"):
        return prop["select"].get("name") or ""
    return ""


def read_date(prop: Optional[Dict[str, Any]]) -> str:
    """ISO string from a date property, or from a created_time property."""
    if not prop:
        return ""
    if prop.get("date"):
        return prop["date"].get("start") or ""
    if isinstance(prop.get("created_time"), str):
        return prop["created_time"]
    return ""


def read_file(prop: Optional[Dict[str, Any]]) -> Optional[str]:
    if prop and prop.get("files"):
        first = prop["files"][0]
        url = (first.get("file") or {}).get("url") or (first.get("external") or {}).get("url")
        return url or None
    return None


def first_match(properties: Dict[str, Any], field_name: str, reader: Callable) -> Any:
    """
    Apply a reader to each alias of a field, in order.

    Returns:
        The first non-empty value, or None if no alias yields one.
    """
    for alias in FIELD_ALIASES[field_name]:
        value = reader(properties.get(alias))
        if value:
            return value
    return None


# =============================================================================
# Helpers
# =============================================================================

def slugify(text: str) -> str:
    """
    Make a URL slug from a title.

    "Hello, World!" -> "hello-world"
    """
    return _SLUG_INVALID.sub("-", text.lower()).strip("-")


def parse_timestamp(value: str) -> Optional[datetime]:
    """
    Parse a Notion date or timestamp string.

    Notion sends either a date ("2024-05-01") or an ISO timestamp with a
    trailing "Z". Naive values are treated as UTC so all posts compare.
    """
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (ValueError, AttributeError):
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


# =============================================================================
# Extraction
# =============================================================================

def extract_post(page: Dict[str, Any]) -> BlogPost:
    """
    Normalize a Notion page object into a BlogPost.

    Never raises for missing or unexpected properties; each field falls
    back to its default instead.

    Args:
        page: Raw page object with "id", "created_time" and "properties".

    Returns:
        BlogPost for the page.
    """
    properties = page.get("properties") or {}

    title = first_match(properties, "title", read_title)
    if not title:
        # Any property of type "title", whatever it is called
        for prop in properties.values():
            if isinstance(prop, dict) and prop.get("type") == "title":
                title = read_title(prop)
                if title:
                    break
    title = title or DEFAULT_TITLE

    slug = first_match(properties, "slug", read_rich_text) or slugify(title)

    published_at = (
        parse_timestamp(first_match(properties, "published_at", read_date) or "")
        or parse_timestamp(page.get("created_time") or "")
        or datetime.now(timezone.utc)
    )

    return BlogPost(
        id=page["id"],
        title=title,
        slug=slug,
        description=first_match(properties, "description", read_rich_text) or "",
        tags=first_match(properties, "tags", read_multi_select) or [],
        status=first_match(properties, "status", read_select) or DEFAULT_STATUS,
        published_at=published_at,
        cover=first_match(properties, "cover", read_file),
        author=first_match(properties, "author", read_rich_text) or DEFAULT_AUTHOR,
        url=notion_url(page["id"]),
    )
