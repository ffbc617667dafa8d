"""
Pytest Configuration and Fixtures

Shared fixtures for all tests: a small Notion workspace served by a fake
client, content services built on it, and the Flask test client.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from notion_blog.content import ContentService
from tests.payloads import (
    FakeNotionClient,
    OfflineNotionClient,
    block,
    database,
    post_page,
    rich_text,
)


# =============================================================================
# SAMPLE WORKSPACE
# =============================================================================

@pytest.fixture
def workspace():
    """
    A workspace with one blog database and one standalone page.

    page-shared is both a database row and a search result.
    """
    rows = [
        post_page("page-react", "Learning React Hooks", "2024-03-10",
                  description="State and effects", tags=["React", "Frontend"]),
        post_page("page-css", "Modern CSS Layouts", "2024-05-02",
                  description="Grid and flexbox in practice", tags=["CSS"]),
        post_page("page-shared", "Design Systems", "2024-01-15",
                  description="Tokens, components, docs", tags=["Design", "UI", "Process"]),
    ]
    standalone = [
        post_page("page-notes", "Reading Notes", "2024-04-01", description="Books I liked"),
        post_page("page-shared", "Design Systems (search copy)", "2024-01-15"),
    ]
    children = {
        "page-react": [
            block("heading_2", "Why hooks", block_id="h-1"),
            {
                **block("paragraph", "", block_id="p-1"),
                "paragraph": {"rich_text": [
                    rich_text("Hooks are "),
                    rich_text("great", bold=True),
                    rich_text(" for state."),
                ]},
            },
            block("bulleted_list_item", "useState", block_id="li-1", has_children=True),
            block("bulleted_list_item", "useEffect", block_id="li-2"),
            block("code", "const [a, setA] = useState(0)", block_id="code-1", language="javascript"),
        ],
        "li-1": [
            block("paragraph", "Returns a value and a setter", block_id="li-1-p"),
        ],
    }
    return {
        "databases": [database("db-blog")],
        "rows": {"db-blog": rows},
        "pages": standalone,
        "children": children,
    }


@pytest.fixture
def fake_client(workspace):
    """Fake Notion client serving the sample workspace."""
    return FakeNotionClient(**workspace)


@pytest.fixture
def content(fake_client):
    """ContentService over the sample workspace."""
    return ContentService(client=fake_client, workers=4)


@pytest.fixture
def offline_content():
    """ContentService whose every fetch fails."""
    return ContentService(client=OfflineNotionClient(), workers=2)


@pytest.fixture
def empty_content():
    """ContentService over an empty but reachable workspace."""
    return ContentService(client=FakeNotionClient(), workers=2)


# =============================================================================
# FLASK
# =============================================================================

@pytest.fixture
def flask_app():
    """The Flask app in testing mode, with CONTENT_SERVICE reset afterwards."""
    from web.app import app

    app.config["TESTING"] = True
    previous = app.config.get("CONTENT_SERVICE")
    yield app
    app.config["CONTENT_SERVICE"] = previous


@pytest.fixture
def client(flask_app, content):
    """Flask test client backed by the sample workspace."""
    flask_app.config["CONTENT_SERVICE"] = content
    with flask_app.test_client() as client:
        yield client
