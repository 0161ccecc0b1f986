from typing import Dict, Any

from src.services.pagination import build_page_variables, page_result, title_filter, unwrap_connections
from .base import BaseTool, id_property, limit_property, require_found, search_title_property

GET_PRODUCTS_QUERY = """
query GetProducts(
    $first: Int, $last: Int, $after: String, $before: String,
    $query: String, $reverse: Boolean
) {
    products(first: $first, last: $last, after: $after, before: $before,
             query: $query, reverse: $reverse) {
        pageInfo { hasNextPage hasPreviousPage startCursor endCursor }
        edges {
            cursor
            node {
                id
                title
                description
                handle
                status
                vendor
                productType
                tags
                createdAt
                updatedAt
                totalInventory
                onlineStoreUrl
                priceRangeV2 {
                    minVariantPrice { amount currencyCode }
                    maxVariantPrice { amount currencyCode }
                }
                images(first: 1) {
                    edges { node { url altText } }
                }
                variants(first: 5) {
                    edges {
                        node { id title price inventoryQuantity sku }
                    }
                }
            }
        }
    }
}
"""

GET_PRODUCT_BY_ID_QUERY = """
query GetProductById($id: ID!) {
    product(id: $id) {
        id
        title
        description
        descriptionHtml
        handle
        status
        vendor
        productType
        tags
        createdAt
        updatedAt
        publishedAt
        totalInventory
        onlineStoreUrl
        seo { title description }
        options { id name values }
        priceRangeV2 {
            minVariantPrice { amount currencyCode }
            maxVariantPrice { amount currencyCode }
        }
        images(first: 5) {
            edges { node { id url altText width height } }
        }
        variants(first: 20) {
            edges {
                node {
                    id
                    title
                    price
                    compareAtPrice
                    inventoryQuantity
                    sku
                    barcode
                    availableForSale
                    selectedOptions { name value }
                }
            }
        }
        collections(first: 5) {
            edges { node { id title handle } }
        }
    }
}
"""


class GetProductsTool(BaseTool):
    """List products, optionally filtered by title, with cursor pagination."""

    error_prefix = "Failed to fetch products"

    @property
    def name(self) -> str:
        return "get-products"

    @property
    def description(self) -> str:
        return (
            "Get all products or search by title. Supports cursor pagination "
            "(after/before) and reversing the sort order."
        )

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "searchTitle": search_title_property("products"),
                "limit": limit_property("products"),
                "after": {
                    "type": "string",
                    "description": "Cursor for pagination - get items after this cursor",
                },
                "before": {
                    "type": "string",
                    "description": "Cursor for pagination - get items before this cursor",
                },
                "reverse": {
                    "type": "boolean",
                    "default": False,
                    "description": "Reverse the order of the returned products",
                },
            },
            "required": [],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        variables = build_page_variables(args["limit"], args.get("after"), args.get("before"))
        variables["reverse"] = args["reverse"]
        query = title_filter(args.get("searchTitle"))
        if query:
            variables["query"] = query

        data = await self.client.execute_query(GET_PRODUCTS_QUERY, variables)
        products, page_info, cursors = page_result(data.get("products"))
        return {"products": products, "pageInfo": page_info, "cursors": cursors}


class GetProductByIdTool(BaseTool):
    """Fetch one product with its variants, images, and collections."""

    error_prefix = "Failed to fetch product"

    @property
    def name(self) -> str:
        return "get-product-by-id"

    @property
    def description(self) -> str:
        return "Get a specific product by ID including variants, images, options, and collections"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {"productId": id_property("Product")},
            "required": ["productId"],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        product_id = args["productId"]
        data = await self.client.execute_query(GET_PRODUCT_BY_ID_QUERY, {"id": product_id})
        product = require_found(data.get("product"), "Product", product_id)
        return unwrap_connections(product)
