"""Tests for the MCP server surface."""

import json

import pytest
import structlog
from structlog.testing import LogCapture
from mcp.shared.memory import create_connected_server_and_client_session

from src.services.mcp_server import ShopifyMCPServer
from src.services.tools.base import ToolExecutionError, ToolInputError
from src.utils.logger import _correlation_id_processor


@pytest.fixture
def mcp_server(settings, mock_graphql_client):
    return ShopifyMCPServer(settings, client=mock_graphql_client)


@pytest.fixture
def captured_logs():
    """Capture structlog events after correlation ids are attached."""
    capture = LogCapture()
    structlog.configure(processors=[_correlation_id_processor, capture])
    yield capture.entries
    structlog.reset_defaults()


class TestShopifyMCPServer:
    """Test suite for ShopifyMCPServer."""

    @pytest.mark.asyncio
    async def test_list_tools(self, mcp_server):
        tools = await mcp_server.list_tools()

        names = [t.name for t in tools]
        assert len(names) == 11
        assert "search-shopify" in names
        orders = next(t for t in tools if t.name == "get-orders")
        assert orders.inputSchema["properties"]["sortKey"]["default"] == "PROCESSED_AT"
        assert orders.annotations.readOnlyHint is True

    @pytest.mark.asyncio
    async def test_call_tool_returns_json_text(self, mcp_server, mock_graphql_client, connection):
        mock_graphql_client.execute_query.return_value = {
            "pages": connection([{"id": "pg1", "title": "About"}])
        }

        content = await mcp_server.call_tool("get-pages", {"limit": 1})

        assert len(content) == 1
        assert content[0].type == "text"
        assert json.loads(content[0].text) == {"pages": [{"id": "pg1", "title": "About"}]}

    @pytest.mark.asyncio
    async def test_call_tool_without_arguments(self, mcp_server, mock_graphql_client):
        await mcp_server.call_tool("get-collections", None)

        mock_graphql_client.execute_query.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_unknown_tool(self, mcp_server):
        with pytest.raises(ValueError, match="Unknown tool: get-customers"):
            await mcp_server.call_tool("get-customers", {})

    @pytest.mark.asyncio
    async def test_invalid_input_raises(self, mcp_server):
        with pytest.raises(ToolInputError):
            await mcp_server.call_tool("get-order-by-id", {})

    @pytest.mark.asyncio
    async def test_execution_error_propagates(self, mcp_server, mock_graphql_client):
        mock_graphql_client.execute_query.return_value = {"order": None}

        with pytest.raises(ToolExecutionError, match="Failed to fetch order"):
            await mcp_server.call_tool("get-order-by-id", {"orderId": "gid://shopify/Order/1"})

    @pytest.mark.asyncio
    async def test_close_releases_client(self, mcp_server, mock_graphql_client):
        await mcp_server.close()

        mock_graphql_client.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_each_call_gets_its_own_correlation_id(self, mcp_server, captured_logs):
        """Log lines of one call share an id; separate calls get different ids."""
        await mcp_server.call_tool("get-pages", {})
        await mcp_server.call_tool("get-blogs", {})

        events = [
            entry for entry in captured_logs
            if entry["event"] in ("Calling tool", "Tool call successful")
        ]
        ids_by_tool = {}
        for entry in events:
            ids_by_tool.setdefault(entry["tool"], set()).add(entry.get("correlation_id"))

        assert len(events) == 4
        assert len(ids_by_tool["get-pages"]) == 1
        assert len(ids_by_tool["get-blogs"]) == 1
        pages_id = next(iter(ids_by_tool["get-pages"]))
        blogs_id = next(iter(ids_by_tool["get-blogs"]))
        assert pages_id and blogs_id
        assert pages_id != blogs_id


class TestMCPProtocol:
    """Exercise the server through an in-memory MCP client session."""

    @pytest.mark.asyncio
    async def test_list_and_call_over_session(self, mcp_server, mock_graphql_client, connection):
        mock_graphql_client.execute_query.return_value = {
            "orders": connection([{"id": "gid://shopify/Order/1", "name": "#1001"}])
        }

        async with create_connected_server_and_client_session(mcp_server.server) as session:
            listed = await session.list_tools()
            result = await session.call_tool("get-orders", {"limit": 1})

        assert len(listed.tools) == 11
        assert result.isError is False
        payload = json.loads(result.content[0].text)
        assert payload["orders"] == [{"id": "gid://shopify/Order/1", "name": "#1001"}]
        assert payload["cursors"] == ["cursor-0"]

    @pytest.mark.asyncio
    async def test_failure_becomes_error_result(self, mcp_server, mock_graphql_client):
        mock_graphql_client.execute_query.return_value = {"product": None}

        async with create_connected_server_and_client_session(mcp_server.server) as session:
            result = await session.call_tool(
                "get-product-by-id", {"productId": "gid://shopify/Product/404"}
            )

        assert result.isError is True
        assert "Product not found with ID: gid://shopify/Product/404" in result.content[0].text
