from typing import Dict, Any

from src.services.pagination import page_result
from .base import BaseTool, limit_property

SEARCH_TYPES = ["PRODUCT", "COLLECTION", "PAGE", "BLOG", "ARTICLE"]

# Result key and @include variable for each searchable type
_TYPE_FIELDS = {
    "PRODUCT": ("products", "includeProducts"),
    "COLLECTION": ("collections", "includeCollections"),
    "PAGE": ("pages", "includePages"),
    "BLOG": ("blogs", "includeBlogs"),
    "ARTICLE": ("articles", "includeArticles"),
}

# The Admin API has no cross-resource search field, so one document queries
# each connection with the same search string and @include picks the types.
SEARCH_QUERY = """
query SearchShopify(
    $query: String!, $first: Int!,
    $includeProducts: Boolean!, $includeCollections: Boolean!,
    $includePages: Boolean!, $includeBlogs: Boolean!, $includeArticles: Boolean!
) {
    products(first: $first, query: $query) @include(if: $includeProducts) {
        edges {
            node {
                id
                title
                handle
                status
                vendor
                productType
                onlineStoreUrl
                priceRangeV2 {
                    minVariantPrice { amount currencyCode }
                    maxVariantPrice { amount currencyCode }
                }
            }
        }
    }
    collections(first: $first, query: $query) @include(if: $includeCollections) {
        edges { node { id title handle description updatedAt } }
    }
    pages(first: $first, query: $query) @include(if: $includePages) {
        edges { node { id title handle bodySummary isPublished updatedAt } }
    }
    blogs(first: $first, query: $query) @include(if: $includeBlogs) {
        edges { node { id title handle updatedAt } }
    }
    articles(first: $first, query: $query) @include(if: $includeArticles) {
        edges {
            node {
                id
                title
                handle
                summary
                isPublished
                publishedAt
                blog { id title }
            }
        }
    }
}
"""


class SearchShopifyTool(BaseTool):
    """Search products, collections, pages, blogs, and articles at once."""

    error_prefix = "Failed to search Shopify"

    @property
    def name(self) -> str:
        return "search-shopify"

    @property
    def description(self) -> str:
        return (
            "Search across the store's products, collections, pages, blogs, and "
            "articles with a single query. Use 'types' to restrict the resources searched."
        )

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "query": {
                    "type": "string",
                    "minLength": 1,
                    "description": (
                        "Search text or Shopify search syntax "
                        "(e.g., 'coffee', 'title:espresso*', 'tag:sale')"
                    ),
                },
                "types": {
                    "type": "array",
                    "items": {"type": "string", "enum": SEARCH_TYPES},
                    "minItems": 1,
                    "description": "Resource types to search (default: all)",
                },
                "limit": limit_property("results per resource type"),
            },
            "required": ["query"],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        requested = set(args.get("types") or SEARCH_TYPES)
        variables: Dict[str, Any] = {"query": args["query"], "first": args["limit"]}
        for search_type, (_, flag) in _TYPE_FIELDS.items():
            variables[flag] = search_type in requested

        data = await self.client.execute_query(SEARCH_QUERY, variables)

        result: Dict[str, Any] = {"query": args["query"]}
        total = 0
        for search_type in SEARCH_TYPES:
            if search_type not in requested:
                continue
            key, _ = _TYPE_FIELDS[search_type]
            nodes, _, _ = page_result(data.get(key))
            result[key] = nodes
            total += len(nodes)
        result["totalCount"] = total
        return result
