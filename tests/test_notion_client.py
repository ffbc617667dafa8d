"""
Tests for the Notion API client.

All HTTP calls are mocked; no network access.
"""

import pytest
import requests
from unittest.mock import Mock, patch

from notion_blog.notion.client import NotionAPIError, NotionClient


@pytest.fixture
def notion():
    """Client with explicit test configuration."""
    return NotionClient(
        secret="secret_test",
        version="2022-06-28",
        api_base="https://api.notion.test/v1/",
        timeout=7,
    )


def _response(status=200, body=None, reason="OK", json_error=False):
    response = Mock()
    response.ok = 200 <= status < 300
    response.status_code = status
    response.reason = reason
    if json_error:
        response.json.side_effect = ValueError("Expecting value")
    else:
        response.json.return_value = body if body is not None else {}
    return response


# =============================================================================
# Test Configuration
# =============================================================================

class TestNotionClientConfig:
    """Tests for client configuration."""

    def test_headers(self, notion):
        headers = notion._headers
        assert headers["Authorization"] == "Bearer secret_test"
        assert headers["Notion-Version"] == "2022-06-28"
        assert headers["Content-Type"] == "application/json"

    def test_trailing_slash_removed_from_base(self, notion):
        assert notion.api_base == "https://api.notion.test/v1"

    def test_defaults_from_config(self):
        with patch("notion_blog.notion.client.NOTION_SECRET", "from_env"):
            client = NotionClient()
        assert client.secret == "from_env"
        assert client.version == "2022-06-28"
        assert client.api_base == "https://api.notion.com/v1"

    def test_empty_secret_is_not_replaced(self):
        with patch("notion_blog.notion.client.NOTION_SECRET", "from_env"):
            client = NotionClient(secret="")
        assert client.secret == ""

    def test_missing_secret_raises_before_request(self):
        client = NotionClient(secret="")
        with patch("notion_blog.notion.client.requests.request") as mock_request:
            with pytest.raises(ValueError, match="NOTION_SECRET"):
                client.search("page")
        mock_request.assert_not_called()


# =============================================================================
# Test Endpoints
# =============================================================================

class TestEndpoints:
    """Tests for request shapes of each endpoint."""

    @patch("notion_blog.notion.client.requests.request")
    def test_search(self, mock_request, notion):
        mock_request.return_value = _response(body={"results": [{"id": "db1"}], "has_more": False})

        results = notion.search("database")

        assert results == [{"id": "db1"}]
        args, kwargs = mock_request.call_args
        assert args == ("POST", "https://api.notion.test/v1/search")
        assert kwargs["json"] == {
            "filter": {"value": "database", "property": "object"},
            "sort": {"direction": "descending", "timestamp": "last_edited_time"},
            "page_size": 100,
        }
        assert kwargs["timeout"] == 7
        assert kwargs["headers"]["Authorization"] == "Bearer secret_test"

    @patch("notion_blog.notion.client.requests.request")
    def test_query_database(self, mock_request, notion):
        mock_request.return_value = _response(body={"results": [{"id": "row"}]})

        assert notion.query_database("db-1") == [{"id": "row"}]
        args, kwargs = mock_request.call_args
        assert args == ("POST", "https://api.notion.test/v1/databases/db-1/query")
        assert kwargs["json"] == {"page_size": 100}

    @patch("notion_blog.notion.client.requests.request")
    def test_list_block_children(self, mock_request, notion):
        mock_request.return_value = _response(body={"results": [{"id": "b"}]})

        assert notion.list_block_children("page-1", page_size=10) == [{"id": "b"}]
        args, kwargs = mock_request.call_args
        assert args == ("GET", "https://api.notion.test/v1/blocks/page-1/children")
        assert kwargs["params"] == {"page_size": 10}
        assert kwargs["json"] is None

    @patch("notion_blog.notion.client.requests.request")
    def test_missing_results_key(self, mock_request, notion):
        mock_request.return_value = _response(body={"object": "list"})
        assert notion.search("page") == []


# =============================================================================
# Test Error Mapping
# =============================================================================

class TestErrors:
    """Every failure surfaces as NotionAPIError."""

    @patch("notion_blog.notion.client.requests.request")
    def test_http_error_with_notion_body(self, mock_request, notion):
        mock_request.return_value = _response(
            status=401,
            reason="Unauthorized",
            body={"object": "error", "code": "unauthorized", "message": "API token is invalid."},
        )

        with pytest.raises(NotionAPIError) as exc_info:
            notion.search("page")

        assert exc_info.value.status == 401
        assert exc_info.value.code == "unauthorized"
        assert "API token is invalid." in str(exc_info.value)

    @patch("notion_blog.notion.client.requests.request")
    def test_http_error_without_json(self, mock_request, notion):
        mock_request.return_value = _response(status=502, reason="Bad Gateway", json_error=True)

        with pytest.raises(NotionAPIError) as exc_info:
            notion.query_database("db")

        assert exc_info.value.status == 502
        assert exc_info.value.code is None
        assert "Bad Gateway" in str(exc_info.value)

    @patch("notion_blog.notion.client.requests.request")
    def test_network_error(self, mock_request, notion):
        mock_request.side_effect = requests.ConnectionError("Connection refused")

        with pytest.raises(NotionAPIError) as exc_info:
            notion.list_block_children("b")

        assert exc_info.value.status is None
        assert "Connection refused" in str(exc_info.value)

    @patch("notion_blog.notion.client.requests.request")
    def test_timeout(self, mock_request, notion):
        mock_request.side_effect = requests.Timeout("read timed out")
        with pytest.raises(NotionAPIError):
            notion.search("database")

    @patch("notion_blog.notion.client.requests.request")
    def test_invalid_json_on_success(self, mock_request, notion):
        mock_request.return_value = _response(json_error=True)
        with pytest.raises(NotionAPIError, match="invalid JSON"):
            notion.search("page")

    def test_repr_hides_secret(self, notion):
        assert "secret_test" not in repr(notion)
