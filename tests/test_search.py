"""
Tests for post search.

Tests the substring filter and the BlogSearch state transitions.
"""

import pytest
from datetime import datetime, timezone

from notion_blog.models.post import BlogPost
from notion_blog.search import (
    EMPTY,
    IDLE,
    NO_MATCHES,
    RESULTS,
    BlogSearch,
    filter_posts,
)


@pytest.fixture
def posts():
    """Posts in display order."""
    def make(post_id, title, description="", tags=None):
        return BlogPost(
            id=post_id,
            title=title,
            slug=post_id,
            description=description,
            tags=tags or [],
            published_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )

    return [
        make("react", "Learning React Hooks", "State and effects", ["React", "Frontend"]),
        make("css", "Modern CSS Layouts", "Grid and flexbox in practice", ["CSS"]),
        make("design", "Design Systems", "Tokens, components, docs", ["Design", "UI"]),
    ]


# =============================================================================
# Test filter_posts
# =============================================================================

class TestFilterPosts:
    """Tests for filter_posts()."""

    def test_matches_title_case_insensitively(self, posts):
        assert [p.id for p in filter_posts(posts, "REACT")] == ["react"]

    def test_matches_description(self, posts):
        assert [p.id for p in filter_posts(posts, "flexbox")] == ["css"]

    def test_matches_tag(self, posts):
        assert [p.id for p in filter_posts(posts, "frontend")] == ["react"]

    def test_substring_match(self, posts):
        assert [p.id for p in filter_posts(posts, "s")] == ["react", "css", "design"]

    def test_keeps_original_order(self, posts):
        assert [p.id for p in filter_posts(posts, "e")] == ["react", "css", "design"]

    @pytest.mark.parametrize("term", ["", "   ", "\t"])
    def test_blank_term_returns_list_unchanged(self, posts, term):
        assert filter_posts(posts, term) is posts

    def test_no_match(self, posts):
        assert filter_posts(posts, "kubernetes") == []

    def test_inner_whitespace_is_significant(self, posts):
        assert [p.id for p in filter_posts(posts, "css layouts")] == ["css"]
        assert filter_posts(posts, "css  layouts") == []

    def test_matching_is_idempotent(self, posts):
        once = filter_posts(posts, "design")
        assert filter_posts(once, "design") == once


# =============================================================================
# Test BlogSearch
# =============================================================================

class TestBlogSearch:
    """Tests for BlogSearch state transitions."""

    def test_initial_state(self, posts):
        search = BlogSearch(posts)
        assert search.state == IDLE
        assert search.filtered == posts
        assert search.message == ""

    def test_term_with_matches(self, posts):
        search = BlogSearch(posts)
        assert search.set_term("css") == RESULTS
        assert [p.id for p in search.filtered] == ["css"]

    def test_term_without_matches(self, posts):
        search = BlogSearch(posts)
        assert search.set_term("rust") == NO_MATCHES
        assert search.filtered == []
        assert search.message == 'No posts match your search for "rust". Try different keywords.'

    def test_clearing_term_shows_all_posts(self, posts):
        search = BlogSearch(posts)
        search.set_term("rust")
        assert search.clear() == RESULTS
        assert search.filtered == posts
        assert search.term == ""

    def test_no_posts_and_no_term_is_empty(self):
        search = BlogSearch([])
        assert search.message == "Coming Soon"
        assert search.set_term("") == EMPTY
        assert search.message == "Coming Soon"

    def test_no_posts_with_term_is_no_matches(self):
        search = BlogSearch([])
        assert search.set_term("react") == NO_MATCHES

    def test_each_keystroke_transitions(self, posts):
        search = BlogSearch(posts)
        states = [search.set_term(term) for term in ["d", "de", "des", "desx", "des"]]
        assert states == [RESULTS, RESULTS, RESULTS, NO_MATCHES, RESULTS]

    def test_posts_are_copied(self, posts):
        search = BlogSearch(posts)
        posts.clear()
        assert len(search.posts) == 3

    def test_repr(self, posts):
        search = BlogSearch(posts)
        search.set_term("css")
        assert repr(search) == "<BlogSearch state='results' term='css' shown=1>"
