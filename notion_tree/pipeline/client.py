"""
Pipeline - Notion Client

Paginated read access to the Notion REST API.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

import httpx

from notion_tree.config import get_settings


logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 100


class NotionAPIError(Exception):
    """A remote call failed."""

    def __init__(self, message: str, code: str = "unknown", status: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status = status


class NotionUnauthorizedError(NotionAPIError):
    """The integration token was rejected."""


class BaseGraphClient(ABC):
    """Read-only contract the traversal engine consumes."""

    @abstractmethod
    async def search(
        self,
        object_kind: str,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Dict[str, Any]:
        """
        Search everything shared with the integration, filtered to one object kind.

        Args:
            object_kind: "page" or "database"
            page_size: Maximum results in the returned page

        Returns:
            Result page with "results", "has_more" and "next_cursor"
        """
        pass

    @abstractmethod
    async def query_database(
        self,
        database_id: str,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Dict[str, Any]:
        """Return the first page of rows in a database."""
        pass

    @abstractmethod
    async def list_block_children(
        self,
        block_id: str,
        start_cursor: Optional[str] = None,
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> Dict[str, Any]:
        """Return one page of a block's children, starting at start_cursor."""
        pass

    @abstractmethod
    async def retrieve_page(self, page_id: str) -> Dict[str, Any]:
        pass

    @abstractmethod
    async def retrieve_database(self, database_id: str) -> Dict[str, Any]:
        pass

    async def aclose(self) -> None:
        """Release any held connections."""
        return None


class NotionClient(BaseGraphClient):
    """Notion REST API client over httpx."""

    def __init__(self, settings=None, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.settings = settings or get_settings()
        self.base_url = self.settings.notion.base_url.rstrip("/")
        self.headers = {
            "Authorization": f"Bearer {self.settings.notion.api_key}",
            "Notion-Version": self.settings.notion.api_version,
            "Content-Type": "application/json",
        }
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=self.headers,
                timeout=self.settings.notion.timeout_seconds,
                transport=self._transport,
            )
        return self._client

    async def __aenter__(self) -> "NotionClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def search(self, object_kind, page_size=DEFAULT_PAGE_SIZE):
        body = {
            "filter": {"value": object_kind, "property": "object"},
            "page_size": page_size,
        }
        return await self._request("POST", "/search", json=body)

    async def query_database(self, database_id, page_size=DEFAULT_PAGE_SIZE):
        return await self._request(
            "POST",
            f"/databases/{database_id}/query",
            json={"page_size": page_size},
        )

    async def list_block_children(self, block_id, start_cursor=None, page_size=DEFAULT_PAGE_SIZE):
        params = {"page_size": page_size}
        if start_cursor:
            params["start_cursor"] = start_cursor
        return await self._request("GET", f"/blocks/{block_id}/children", params=params)

    async def retrieve_page(self, page_id):
        return await self._request("GET", f"/pages/{page_id}")

    async def retrieve_database(self, database_id):
        return await self._request("GET", f"/databases/{database_id}")

    async def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        """
        Issue one API call and decode the JSON body.

        Raises:
            NotionUnauthorizedError: token missing, invalid or revoked
            NotionAPIError: any other HTTP or transport failure, or a body that is not JSON
        """
        logger.debug("%s %s", method, path)
        try:
            response = await self.client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise _error_from_response(e.response) from e
        except httpx.RequestError as e:
            raise NotionAPIError(
                f"Request to {path} failed: {e}", code="request_failed"
            ) from e

        try:
            return response.json()
        except ValueError as e:
            raise NotionAPIError(
                f"Response from {path} is not valid JSON",
                code="invalid_json",
                status=response.status_code,
            ) from e


def _error_from_response(response: httpx.Response) -> NotionAPIError:
    """Map a Notion error body onto the client's error taxonomy."""
    try:
        data = response.json()
    except ValueError:
        data = {}
    if not isinstance(data, dict):
        data = {}

    code = data.get("code") or "http_error"
    message = data.get("message") or f"HTTP {response.status_code}"

    if response.status_code == 401 or code == "unauthorized":
        return NotionUnauthorizedError(message, code="unauthorized", status=response.status_code)
    return NotionAPIError(message, code=code, status=response.status_code)
