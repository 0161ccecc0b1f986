from typing import Dict, Any

from src.services.pagination import page_result, title_filter, unwrap_connections
from .base import BaseTool, id_property, limit_property, require_found, search_title_property

GET_BLOGS_QUERY = """
query GetBlogs($first: Int!, $query: String) {
    blogs(first: $first, query: $query) {
        edges {
            node {
                id
                title
                handle
                createdAt
                updatedAt
                commentPolicy
                tags
                articles(first: 5) {
                    edges { node { id title handle publishedAt } }
                }
            }
        }
    }
}
"""

GET_BLOG_BY_ID_QUERY = """
query GetBlogById($id: ID!) {
    blog(id: $id) {
        id
        title
        handle
        createdAt
        updatedAt
        commentPolicy
        tags
        templateSuffix
        feed { location path }
        articles(first: 20) {
            edges {
                node {
                    id
                    title
                    handle
                    summary
                    tags
                    isPublished
                    publishedAt
                    author { name }
                }
            }
        }
    }
}
"""


class GetBlogsTool(BaseTool):
    """List blogs with their most recent articles."""

    error_prefix = "Failed to fetch blogs"

    @property
    def name(self) -> str:
        return "get-blogs"

    @property
    def description(self) -> str:
        return "Get all blogs or search blogs by title, including a few recent articles per blog"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "searchTitle": search_title_property("blogs"),
                "limit": limit_property("blogs"),
            },
            "required": [],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        variables = {"first": args["limit"]}
        query = title_filter(args.get("searchTitle"))
        if query:
            variables["query"] = query

        data = await self.client.execute_query(GET_BLOGS_QUERY, variables)
        blogs, _, _ = page_result(data.get("blogs"))
        return {"blogs": blogs}


class GetBlogByIdTool(BaseTool):
    """Fetch one blog and its articles."""

    error_prefix = "Failed to fetch blog"

    @property
    def name(self) -> str:
        return "get-blog-by-id"

    @property
    def description(self) -> str:
        return "Get a specific blog by ID including its settings and articles"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {"blogId": id_property("Blog")},
            "required": ["blogId"],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        blog_id = args["blogId"]
        data = await self.client.execute_query(GET_BLOG_BY_ID_QUERY, {"id": blog_id})
        blog = require_found(data.get("blog"), "Blog", blog_id)
        return unwrap_connections(blog)
