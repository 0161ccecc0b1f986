from typing import Dict, Any

from src.services.pagination import page_result, title_filter
from .base import BaseTool, limit_property, search_title_property

GET_PAGES_QUERY = """
query GetPages($first: Int!, $query: String) {
    pages(first: $first, query: $query) {
        edges {
            node {
                id
                title
                handle
                body
                bodySummary
                isPublished
                publishedAt
                createdAt
                updatedAt
            }
        }
    }
}
"""


class GetPagesTool(BaseTool):
    """List online store pages, optionally filtered by title."""

    error_prefix = "Failed to fetch pages"

    @property
    def name(self) -> str:
        return "get-pages"

    @property
    def description(self) -> str:
        return "Get all online store pages or search pages by title"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "searchTitle": search_title_property("pages"),
                "limit": limit_property("pages"),
            },
            "required": [],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        variables = {"first": args["limit"]}
        query = title_filter(args.get("searchTitle"))
        if query:
            variables["query"] = query

        data = await self.client.execute_query(GET_PAGES_QUERY, variables)
        pages, _, _ = page_result(data.get("pages"))
        return {"pages": pages}
