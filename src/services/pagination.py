"""
Relay-style connection helpers.

Shopify's Admin API wraps every list in a connection
(``{"edges": [{"cursor": ..., "node": {...}}], "pageInfo": {...}}``).
Tools use these helpers to build cursor variables and to flatten the
envelopes into plain lists before returning results to MCP clients.
"""

from typing import Any, Dict, List, Optional, Tuple


def build_page_variables(
    limit: int,
    after: Optional[str] = None,
    before: Optional[str] = None,
) -> Dict[str, Any]:
    """Build ``first``/``last``/``after``/``before`` variables.

    Paging backwards (``before``) takes precedence; ``after`` is ignored
    in that case since Shopify rejects mixed directions.
    """
    if before:
        return {"last": limit, "before": before}

    variables: Dict[str, Any] = {"first": limit}
    if after:
        variables["after"] = after
    return variables


def title_filter(search_title: Optional[str]) -> Optional[str]:
    """Turn a title fragment into a Shopify search string."""
    if not search_title:
        return None
    return f"title:*{search_title}*"


def _is_connection(obj: Any) -> bool:
    return isinstance(obj, dict) and isinstance(obj.get("edges"), list)


def unwrap_connection(connection: Optional[Dict[str, Any]]) -> List[Any]:
    """Return the nodes of a single connection (``None`` → ``[]``)."""
    if not connection:
        return []
    return [
        edge.get("node")
        for edge in connection.get("edges", [])
        if isinstance(edge, dict) and edge.get("node") is not None
    ]


def unwrap_connections(obj: Any) -> Any:
    """Recursively replace every connection in ``obj`` with a list of nodes."""
    if _is_connection(obj):
        return [unwrap_connections(node) for node in unwrap_connection(obj)]
    if isinstance(obj, dict):
        return {key: unwrap_connections(value) for key, value in obj.items()}
    if isinstance(obj, list):
        return [unwrap_connections(item) for item in obj]
    return obj


def page_result(
    connection: Optional[Dict[str, Any]],
) -> Tuple[List[Any], Dict[str, Any], List[Optional[str]]]:
    """Split a top-level connection into (nodes, pageInfo, cursors)."""
    connection = connection or {}
    edges = [e for e in connection.get("edges", []) if isinstance(e, dict)]
    nodes = [unwrap_connections(edge.get("node")) for edge in edges]
    cursors = [edge.get("cursor") for edge in edges]
    page_info = connection.get("pageInfo") or {
        "hasNextPage": False,
        "hasPreviousPage": False,
        "startCursor": None,
        "endCursor": None,
    }
    return nodes, page_info, cursors
