from typing import Dict, Any

from src.services.pagination import page_result, title_filter
from .base import BaseTool, limit_property, search_title_property

GET_COLLECTIONS_QUERY = """
query GetCollections($first: Int!, $query: String) {
    collections(first: $first, query: $query) {
        edges {
            node {
                id
                title
                handle
                description
                descriptionHtml
                updatedAt
                productsCount { count }
                image { url altText }
                products(first: 5) {
                    edges { node { id title handle } }
                }
            }
        }
    }
}
"""


class GetCollectionsTool(BaseTool):
    """List collections, optionally filtered by title."""

    error_prefix = "Failed to fetch collections"

    @property
    def name(self) -> str:
        return "get-collections"

    @property
    def description(self) -> str:
        return "Get all collections or search collections by title, with a preview of their products"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "searchTitle": search_title_property("collections"),
                "limit": limit_property("collections"),
            },
            "required": [],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        variables = {"first": args["limit"]}
        query = title_filter(args.get("searchTitle"))
        if query:
            variables["query"] = query

        data = await self.client.execute_query(GET_COLLECTIONS_QUERY, variables)
        collections, _, _ = page_result(data.get("collections"))
        return {"collections": collections}
