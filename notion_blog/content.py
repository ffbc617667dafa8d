"""
Content service for Notion Blog.

Discovers everything the integration can see and turns it into posts and
block trees:

    search(database) -> query each database ┐
                                            ├-> union, dedup by id -> sort
    search(page) ---------------------------┘

Design principles:
- Error isolation: a failing database or block is skipped, the rest still render
- Explicit failure reporting: every operation returns a ContentResult whose
  `errors` tell "Notion unavailable" apart from "nothing published"
- Per-instance memoization: one ContentService per request, so nothing is
  fetched twice while rendering a page and nothing outlives the request
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from notion_blog.config import FETCH_WORKERS
from notion_blog.models.block import Block
from notion_blog.models.post import BlogPost
from notion_blog.notion.client import NotionAPIError, NotionClient
from notion_blog.notion.properties import extract_post

logger = logging.getLogger(__name__)

# Errors a fetch can end in. ValueError covers a missing NOTION_SECRET.
FETCH_ERRORS = (NotionAPIError, ValueError)


# =============================================================================
# Result Data Structures
# =============================================================================

@dataclass
class ContentResult:
    """
    Items produced by a content operation plus the errors met on the way.

    An empty `items` with no `errors` means there is genuinely no content;
    an empty `items` with errors means Notion could not be read.
    """
    items: List[Any] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def available(self) -> bool:
        """True when every fetch behind this result succeeded."""
        return not self.errors

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __str__(self) -> str:
        return f"ContentResult(items={len(self.items)}, errors={len(self.errors)})"


def unique_by_id(posts: List[BlogPost]) -> List[BlogPost]:
    """Drop posts whose id was already seen, keeping the first occurrence."""
    seen = set()
    unique = []
    for post in posts:
        if post.id not in seen:
            seen.add(post.id)
            unique.append(post)
    return unique


def newest_first(posts: List[BlogPost]) -> List[BlogPost]:
    """Sort by published_at descending. Ties keep their relative order."""
    return sorted(posts, key=lambda post: post.published_at, reverse=True)


# =============================================================================
# Content Service
# =============================================================================

class ContentService:
    """
    Reads blog content from Notion.

    Every public operation is memoized on this instance by operation name and
    arguments. Create a new instance per request.
    """

    def __init__(self, client: NotionClient = None, workers: int = None):
        """
        Initialize ContentService.

        Args:
            client: Notion client. Defaults to one built from config.
            workers: Threads used to fetch sibling blocks. Defaults to FETCH_WORKERS.
        """
        self.client = client if client is not None else NotionClient()
        self.workers = workers if workers is not None else FETCH_WORKERS
        self._memo: Dict[tuple, ContentResult] = {}
        self._memo_lock = threading.Lock()

    def _memoized(self, key: tuple, compute: Callable[[], ContentResult]) -> ContentResult:
        with self._memo_lock:
            if key in self._memo:
                return self._memo[key]
        result = compute()
        with self._memo_lock:
            return self._memo.setdefault(key, result)

    def _fetch(self, description: str, call: Callable[[], List[Dict[str, Any]]]) -> ContentResult:
        """Run one client call, converting a failure into a logged, recorded error."""
        try:
            return ContentResult(items=call())
        except FETCH_ERRORS as e:
            message = f"Error {description}: {e}"
            logger.error(message)
            return ContentResult(errors=[message])

    # =========================================================================
    # Discovery
    # =========================================================================

    def discover_databases(self) -> ContentResult:
        """
        Find every database shared with the integration.

        Returns:
            ContentResult of raw database objects, most recently edited first.
        """
        return self._memoized(
            ("discover_databases",),
            lambda: self._fetch("discovering databases", lambda: self.client.search("database")),
        )

    def get_posts_from_database(self, database_id: str) -> ContentResult:
        """
        List the posts stored as rows of one database.

        Rows without properties and posts without a title are skipped.
        """
        def compute() -> ContentResult:
            fetched = self._fetch(
                f"fetching posts from database {database_id}",
                lambda: self.client.query_database(database_id),
            )
            return ContentResult(items=self._pages_to_posts(fetched.items), errors=fetched.errors)

        return self._memoized(("get_posts_from_database", database_id), compute)

    def get_all_posts(self) -> ContentResult:
        """
        Collect posts from every discovered database, newest first.

        A database that fails is skipped; its error is kept on the result.
        """
        def compute() -> ContentResult:
            databases = self.discover_databases()
            posts: List[BlogPost] = []
            errors = list(databases.errors)

            for database in databases.items:
                result = self.get_posts_from_database(database["id"])
                if result.errors:
                    logger.warning(f"Skipping database {database['id']}")
                    errors.extend(result.errors)
                posts.extend(result.items)

            return ContentResult(items=newest_first(posts), errors=errors)

        return self._memoized(("get_all_posts",), compute)

    def get_all_pages(self) -> ContentResult:
        """
        List standalone pages (pages the search endpoint returns directly).
        """
        def compute() -> ContentResult:
            fetched = self._fetch("fetching pages", lambda: self.client.search("page"))
            return ContentResult(items=self._pages_to_posts(fetched.items), errors=fetched.errors)

        return self._memoized(("get_all_pages",), compute)

    def get_all_content(self) -> ContentResult:
        """
        Union of database posts and standalone pages.

        Both discovery paths run concurrently. Database posts come first, so
        when a page shows up through both paths the database copy is kept.

        Returns:
            ContentResult of unique BlogPosts sorted newest first.
        """
        def compute() -> ContentResult:
            logger.info("Discovering content from the Notion workspace...")

            with ThreadPoolExecutor(max_workers=2) as pool:
                posts_future = pool.submit(self.get_all_posts)
                pages_future = pool.submit(self.get_all_pages)
                database_posts = posts_future.result()
                pages = pages_future.result()

            content = unique_by_id(database_posts.items + pages.items)
            logger.info(f"Found {len(content)} pieces of content")

            return ContentResult(
                items=newest_first(content),
                errors=database_posts.errors + pages.errors,
            )

        return self._memoized(("get_all_content",), compute)

    def get_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        """
        Find the first post with the given slug.

        Args:
            slug: URL slug.

        Returns:
            The matching BlogPost, or None if no post has that slug.
        """
        for post in self.get_all_content().items:
            if post.slug == slug:
                return post
        return None

    # =========================================================================
    # Page Content
    # =========================================================================

    def _list_children(self, block_id: str) -> ContentResult:
        """Raw child objects of one block, memoized."""
        return self._memoized(
            ("list_children", block_id),
            lambda: self._fetch(
                f"fetching children for block {block_id}",
                lambda: self.client.list_block_children(block_id),
            ),
        )

    def get_page_content(self, page_id: str) -> ContentResult:
        """
        Top-level blocks of a page, without their children resolved.
        """
        raw = self._list_children(page_id)
        return ContentResult(items=[Block.from_api(b) for b in raw.items], errors=list(raw.errors))

    def get_block_children(self, block_id: str) -> ContentResult:
        """
        Children of a block with their whole subtrees resolved.
        """
        result = self.get_page_content(block_id)
        result.errors.extend(self._resolve_children(result.items))
        return result

    def get_page_content_with_children(self, page_id: str) -> ContentResult:
        """
        The full block tree of a page.

        Returns:
            ContentResult of top-level Blocks; nested blocks hang off `children`.
        """
        return self.get_block_children(page_id)

    def get_table_content(self, table_block_id: str) -> ContentResult:
        """
        Rows of a table block.
        """
        result = self.get_block_children(table_block_id)
        result.items = [block for block in result.items if block.type == "table_row"]
        return result

    def _resolve_children(self, roots: List[Block]) -> List[str]:
        """
        Attach children to every block in the trees under `roots`.

        Works level by level from an explicit queue: all blocks on one level
        that report children are fetched concurrently, and each parent gets
        its children in source order. Failed fetches leave the parent with
        no children.

        Returns:
            Error messages from failed fetches.
        """
        errors: List[str] = []
        level = [block for block in roots if block.has_children]

        with ThreadPoolExecutor(max_workers=self.workers) as pool:
            while level:
                fetched = list(pool.map(lambda block: self._list_children(block.id), level))
                next_level: List[Block] = []

                for parent, raw in zip(level, fetched):
                    errors.extend(raw.errors)
                    parent.children = [Block.from_api(b) for b in raw.items]
                    next_level.extend(child for child in parent.children if child.has_children)

                level = next_level

        return errors

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _pages_to_posts(pages: List[Dict[str, Any]]) -> List[BlogPost]:
        posts = []
        for page in pages:
            if "properties" not in page:
                continue
            post = extract_post(page)
            if post.title:
                posts.append(post)
        return posts

    def __repr__(self) -> str:
        return f"<ContentService client={self.client!r} memoized={len(self._memo)}>"
