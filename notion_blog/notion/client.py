"""
Notion REST API client for Notion Blog.

Thin wrapper around the three read endpoints the blog needs:

| Endpoint                      | Method | Used for                       |
|-------------------------------|--------|--------------------------------|
| /search                       | POST   | discovering databases and pages|
| /databases/{id}/query         | POST   | listing posts in a database    |
| /blocks/{id}/children         | GET    | reading page content           |

API Documentation: https://developers.notion.com/reference/intro

Only the first page of each listing is read (page_size = NOTION_PAGE_SIZE);
`next_cursor` is ignored. Every failure is raised as NotionAPIError so the
caller decides how to degrade.
"""

from typing import Any, Dict, List, Optional
import requests

from notion_blog.config import (
    NOTION_SECRET,
    NOTION_VERSION,
    NOTION_API_BASE,
    NOTION_PAGE_SIZE,
    REQUEST_TIMEOUT,
)


class NotionAPIError(Exception):
    """
    A request to the Notion API failed.

    Attributes:
        status: HTTP status code, or None for network-level failures.
        code: Notion's error code (e.g. "unauthorized", "rate_limited"), if any.
    """

    def __init__(self, message: str, status: Optional[int] = None, code: Optional[str] = None):
        super().__init__(message)
        self.status = status
        self.code = code


class NotionClient:
    """
    Read-only Notion API client.

    Configuration is pulled from environment variables via notion_blog.config:
    - NOTION_SECRET: integration secret
    - NOTION_VERSION: value of the Notion-Version header
    """

    def __init__(
        self,
        secret: str = None,
        version: str = None,
        api_base: str = None,
        timeout: int = None,
    ):
        """
        Initialize NotionClient.

        Args:
            secret: Integration secret. Defaults to config.NOTION_SECRET.
            version: API version header. Defaults to config.NOTION_VERSION.
            api_base: API root URL. Defaults to config.NOTION_API_BASE.
            timeout: Request timeout in seconds. Defaults to config.REQUEST_TIMEOUT.
        """
        # Use provided values, or fall back to config if None (not empty string)
        self.secret = secret if secret is not None else NOTION_SECRET
        self.version = version if version is not None else NOTION_VERSION
        self.api_base = (api_base if api_base is not None else NOTION_API_BASE).rstrip("/")
        self.timeout = timeout if timeout is not None else REQUEST_TIMEOUT

    @property
    def _headers(self) -> Dict[str, str]:
        """Construct headers for API requests."""
        return {
            "Authorization": f"Bearer {self.secret}",
            "Notion-Version": self.version,
            "Content-Type": "application/json",
        }

    def _validate_config(self) -> None:
        """Validate that required configuration is present."""
        if not self.secret:
            raise ValueError("NOTION_SECRET is not configured")

    def _request(
        self,
        method: str,
        path: str,
        params: Dict[str, Any] = None,
        payload: Dict[str, Any] = None,
    ) -> Dict[str, Any]:
        """
        Send one request and return the decoded JSON body.

        Raises:
            ValueError: If the client has no secret.
            NotionAPIError: On network errors, non-2xx responses or bad JSON.
        """
        self._validate_config()
        url = f"{self.api_base}/{path.lstrip('/')}"

        try:
            response = requests.request(
                method,
                url,
                headers=self._headers,
                params=params,
                json=payload,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise NotionAPIError(f"{method} {path} failed: {e}") from e

        if not response.ok:
            code = None
            message = response.reason
            try:
                body = response.json()
                code = body.get("code")
                message = body.get("message") or message
            except ValueError:
                pass
            raise NotionAPIError(
                f"{method} {path} returned {response.status_code}: {message}",
                status=response.status_code,
                code=code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise NotionAPIError(f"{method} {path} returned invalid JSON: {e}") from e

    # =========================================================================
    # Endpoints
    # =========================================================================

    def search(self, object_type: str, page_size: int = None) -> List[Dict[str, Any]]:
        """
        Search the workspace for objects of one type.

        Args:
            object_type: "database" or "page".
            page_size: Results to request. Defaults to NOTION_PAGE_SIZE.

        Returns:
            List of raw Notion objects, most recently edited first.
        """
        payload = {
            "filter": {"value": object_type, "property": "object"},
            "sort": {"direction": "descending", "timestamp": "last_edited_time"},
            "page_size": page_size or NOTION_PAGE_SIZE,
        }
        data = self._request("POST", "search", payload=payload)
        return data.get("results", [])

    def query_database(self, database_id: str, page_size: int = None) -> List[Dict[str, Any]]:
        """
        Query the rows (pages) of a database.

        Args:
            database_id: The database id.
            page_size: Results to request. Defaults to NOTION_PAGE_SIZE.

        Returns:
            List of raw page objects.
        """
        payload = {"page_size": page_size or NOTION_PAGE_SIZE}
        data = self._request("POST", f"databases/{database_id}/query", payload=payload)
        return data.get("results", [])

    def list_block_children(self, block_id: str, page_size: int = None) -> List[Dict[str, Any]]:
        """
        List the direct children of a block or page.

        Args:
            block_id: Page or block id.
            page_size: Results to request. Defaults to NOTION_PAGE_SIZE.

        Returns:
            List of raw block objects in document order.
        """
        params = {"page_size": page_size or NOTION_PAGE_SIZE}
        data = self._request("GET", f"blocks/{block_id}/children", params=params)
        return data.get("results", [])

    def __repr__(self) -> str:
        return f"<NotionClient api_base={self.api_base!r} version={self.version!r}>"
