"""Pytest configuration and shared fixtures for Shopify MCP server tests."""

import pytest
from unittest.mock import AsyncMock

from src.config.settings import Settings


@pytest.fixture
def settings(monkeypatch):
    """Settings built from a controlled environment.

    Clears any Shopify variables the developer may have exported so
    tests never depend on the local shell.
    """
    for name in (
        "SHOPIFY_ACCESS_TOKEN", "MYSHOPIFY_DOMAIN", "SHOPIFY_SHOP_DOMAIN",
        "SHOPIFY_API_VERSION", "SHOPIFY_REQUEST_TIMEOUT", "LOG_LEVEL", "LOG_FILE",
        "MCP_SERVER_NAME",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("SHOPIFY_ACCESS_TOKEN", "shpat_test_token_12345")
    monkeypatch.setenv("MYSHOPIFY_DOMAIN", "test-shop.myshopify.com")
    return Settings()


@pytest.fixture
def mock_graphql_client():
    """Return a mock ShopifyGraphQLClient for testing without network access.

    Uses AsyncMock so tools can await ``execute_query``.
    """
    mock = AsyncMock()
    mock.execute_query = AsyncMock(return_value={})
    return mock


def make_connection(nodes, cursors=None, page_info=None):
    """Wrap plain nodes in a Relay-style connection like Shopify returns."""
    cursors = cursors or [f"cursor-{i}" for i in range(len(nodes))]
    connection = {
        "edges": [
            {"cursor": cursor, "node": node}
            for cursor, node in zip(cursors, nodes)
        ]
    }
    if page_info is not None:
        connection["pageInfo"] = page_info
    return connection


@pytest.fixture
def connection():
    """Expose ``make_connection`` to tests as a fixture."""
    return make_connection


@pytest.fixture
def sample_page_info():
    return {
        "hasNextPage": True,
        "hasPreviousPage": False,
        "startCursor": "cursor-0",
        "endCursor": "cursor-1",
    }
