"""
Unit Tests for the Notion Client
"""

import json

import httpx
import pytest

from notion_tree.config import NotionSettings, Settings
from notion_tree.pipeline.client import NotionAPIError, NotionClient, NotionUnauthorizedError


def make_client(handler):
    settings = Settings(notion=NotionSettings(api_key="secret-token"))
    return NotionClient(settings, transport=httpx.MockTransport(handler))


class TestNotionClient:
    """Tests for NotionClient."""

    @pytest.mark.asyncio
    async def test_search_request(self):
        """Test the search call shape and headers."""
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["auth"] = request.headers["Authorization"]
            seen["version"] = request.headers["Notion-Version"]
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json={"results": [], "has_more": False})

        async with make_client(handler) as client:
            data = await client.search("database")

        assert data == {"results": [], "has_more": False}
        assert seen["method"] == "POST"
        assert seen["path"] == "/v1/search"
        assert seen["auth"] == "Bearer secret-token"
        assert seen["version"] == "2022-06-28"
        assert seen["body"] == {"filter": {"value": "database", "property": "object"}, "page_size": 100}

    @pytest.mark.asyncio
    async def test_block_children_cursor(self):
        """Test the cursor is only sent when present."""
        params = []

        def handler(request):
            params.append(dict(request.url.params))
            return httpx.Response(200, json={"results": [], "has_more": False, "next_cursor": None})

        async with make_client(handler) as client:
            await client.list_block_children("abc")
            await client.list_block_children("abc", start_cursor="cur-2")

        assert params == [{"page_size": "100"}, {"page_size": "100", "start_cursor": "cur-2"}]

    @pytest.mark.asyncio
    async def test_query_and_retrieve_paths(self):
        """Test database query and detail endpoints."""
        paths = []

        def handler(request):
            paths.append((request.method, request.url.path))
            return httpx.Response(200, json={"url": "https://notion.so/x", "results": []})

        async with make_client(handler) as client:
            await client.query_database("db1")
            await client.retrieve_page("p1")
            await client.retrieve_database("db1")

        assert paths == [
            ("POST", "/v1/databases/db1/query"),
            ("GET", "/v1/pages/p1"),
            ("GET", "/v1/databases/db1"),
        ]

    @pytest.mark.asyncio
    async def test_unauthorized(self):
        """Test 401 maps to NotionUnauthorizedError."""
        def handler(request):
            return httpx.Response(
                401,
                json={"object": "error", "status": 401, "code": "unauthorized", "message": "API token is invalid."},
            )

        async with make_client(handler) as client:
            with pytest.raises(NotionUnauthorizedError) as exc_info:
                await client.search("page")

        assert exc_info.value.code == "unauthorized"
        assert exc_info.value.message == "API token is invalid."

    @pytest.mark.asyncio
    async def test_other_http_error(self):
        """Test other error bodies keep their code."""
        def handler(request):
            return httpx.Response(
                404,
                json={"object": "error", "status": 404, "code": "object_not_found", "message": "Not found"},
            )

        async with make_client(handler) as client:
            with pytest.raises(NotionAPIError) as exc_info:
                await client.retrieve_page("missing")

        assert not isinstance(exc_info.value, NotionUnauthorizedError)
        assert exc_info.value.code == "object_not_found"
        assert exc_info.value.status == 404

    @pytest.mark.asyncio
    async def test_non_json_error_body(self):
        """Test an HTML error page still maps to NotionAPIError."""
        def handler(request):
            return httpx.Response(502, text="<html>Bad gateway</html>")

        async with make_client(handler) as client:
            with pytest.raises(NotionAPIError) as exc_info:
                await client.search("page")

        assert exc_info.value.status == 502
        assert exc_info.value.message == "HTTP 502"

    @pytest.mark.asyncio
    async def test_transport_error(self):
        """Test network failures are wrapped."""
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        async with make_client(handler) as client:
            with pytest.raises(NotionAPIError) as exc_info:
                await client.search("page")

        assert exc_info.value.code == "request_failed"

    @pytest.mark.asyncio
    async def test_non_json_success_body(self):
        """Test a 200 reply that is not JSON maps to NotionAPIError."""
        def handler(request):
            return httpx.Response(200, text="<html>maintenance</html>")

        async with make_client(handler) as client:
            with pytest.raises(NotionAPIError) as exc_info:
                await client.list_block_children("p1")

        assert exc_info.value.code == "invalid_json"
        assert exc_info.value.status == 200
