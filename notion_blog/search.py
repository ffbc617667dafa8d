"""
Post search for Notion Blog.

A linear, case-insensitive substring filter over an in-memory post list,
plus the small state machine the listing page follows:

    idle --(term entered)--> results | no_matches | empty

Every call to set_term() transitions synchronously; there is no terminal
state and no debounce.
"""

from typing import List

from notion_blog.models.post import BlogPost


# Search states
IDLE = "idle"
RESULTS = "results"
NO_MATCHES = "no_matches"   # nothing matched a non-empty term
EMPTY = "empty"             # no posts at all and no term


def matches(post: BlogPost, needle: str) -> bool:
    """Whether a lower-cased needle occurs in the title, description or a tag."""
    return (
        needle in (post.title or "").lower()
        or needle in (post.description or "").lower()
        or any(needle in tag.lower() for tag in post.tags or [])
    )


def filter_posts(posts: List[BlogPost], term: str) -> List[BlogPost]:
    """
    Filter posts by a search term.

    Args:
        posts: Posts in display order.
        term: Raw search input.

    Returns:
        The original list when the term is blank, otherwise the matching
        posts in their original order.
    """
    if not term or not term.strip():
        return posts
    needle = term.lower()
    return [post for post in posts if matches(post, needle)]


class BlogSearch:
    """
    Search state for a fixed list of posts.

    Attributes:
        posts: All posts, in display order.
        term: Current search input.
        filtered: Posts currently shown.
        state: One of IDLE, RESULTS, NO_MATCHES, EMPTY.
    """

    def __init__(self, posts: List[BlogPost]):
        self.posts = list(posts)
        self.term = ""
        self.filtered = list(self.posts)
        self.state = IDLE

    def set_term(self, term: str) -> str:
        """
        Apply a new search term.

        Returns:
            The new state.
        """
        self.term = term
        self.filtered = filter_posts(self.posts, term)

        if self.filtered:
            self.state = RESULTS
        elif term.strip():
            self.state = NO_MATCHES
        else:
            self.state = EMPTY
        return self.state

    def clear(self) -> str:
        """Reset the term and show every post again."""
        return self.set_term("")

    @property
    def message(self) -> str:
        """Text for the empty states, "" while there are results."""
        if self.state == NO_MATCHES:
            return f'No posts match your search for "{self.term}". Try different keywords.'
        if self.state == EMPTY or (self.state == IDLE and not self.posts):
            return "Coming Soon"
        return ""

    def __repr__(self) -> str:
        return f"<BlogSearch state={self.state!r} term={self.term!r} shown={len(self.filtered)}>"
