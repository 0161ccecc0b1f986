from typing import Dict, Any

from src.services.pagination import page_result, title_filter, unwrap_connections
from .base import BaseTool, id_property, limit_property, require_found, search_title_property

# Articles are read through their blog so a bad blog ID reads as "not found"
# instead of an empty list.
GET_ARTICLES_QUERY = """
query GetArticles($blogId: ID!, $first: Int!, $query: String) {
    blog(id: $blogId) {
        id
        title
        handle
        articles(first: $first, query: $query) {
            edges {
                node {
                    id
                    title
                    handle
                    summary
                    tags
                    isPublished
                    publishedAt
                    createdAt
                    updatedAt
                    author { name }
                    image { url altText }
                }
            }
        }
    }
}
"""

GET_ARTICLE_BY_ID_QUERY = """
query GetArticleById($id: ID!) {
    article(id: $id) {
        id
        title
        handle
        body
        summary
        tags
        isPublished
        publishedAt
        createdAt
        updatedAt
        templateSuffix
        author { name }
        image { url altText width height }
        blog { id title handle }
        comments(first: 10) {
            edges {
                node {
                    id
                    body
                    status
                    createdAt
                    author { name }
                }
            }
        }
    }
}
"""


class GetArticlesTool(BaseTool):
    """List the articles of one blog."""

    error_prefix = "Failed to fetch articles"

    @property
    def name(self) -> str:
        return "get-articles"

    @property
    def description(self) -> str:
        return "Get articles from a specific blog, optionally searching by title"

    @property
    def input_schema(self) -> Dict[str, Any]:
        blog_id = id_property("Blog")
        blog_id["description"] = (
            'The GID of the blog to get articles from (e.g., "gid://shopify/Blog/1234567890")'
        )
        return {
            "type": "object",
            "properties": {
                "blogId": blog_id,
                "searchTitle": search_title_property("articles"),
                "limit": limit_property("articles"),
            },
            "required": ["blogId"],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        blog_id = args["blogId"]
        variables = {"blogId": blog_id, "first": args["limit"]}
        query = title_filter(args.get("searchTitle"))
        if query:
            variables["query"] = query

        data = await self.client.execute_query(GET_ARTICLES_QUERY, variables)
        blog = require_found(data.get("blog"), "Blog", blog_id)
        articles, _, _ = page_result(blog.get("articles"))
        return {
            "blog": {"id": blog.get("id"), "title": blog.get("title"), "handle": blog.get("handle")},
            "articles": articles,
        }


class GetArticleByIdTool(BaseTool):
    """Fetch one article with its blog and recent comments."""

    error_prefix = "Failed to fetch article"

    @property
    def name(self) -> str:
        return "get-article-by-id"

    @property
    def description(self) -> str:
        return "Get a specific article by ID including its body, author, blog, and comments"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {"articleId": id_property("Article")},
            "required": ["articleId"],
        }

    async def execute(self, args: Dict[str, Any]) -> Dict[str, Any]:
        article_id = args["articleId"]
        data = await self.client.execute_query(GET_ARTICLE_BY_ID_QUERY, {"id": article_id})
        article = require_found(data.get("article"), "Article", article_id)
        return unwrap_connections(article)
