from typing import List

from .base import BaseTool
from .articles import GetArticleByIdTool, GetArticlesTool
from .blogs import GetBlogByIdTool, GetBlogsTool
from .collections import GetCollectionsTool
from .orders import GetOrderByIdTool, GetOrdersTool
from .pages import GetPagesTool
from .products import GetProductByIdTool, GetProductsTool
from .search import SearchShopifyTool

# Registration order is the order clients see in tools/list
TOOL_CLASSES = [
    GetProductsTool,
    GetProductByIdTool,
    GetCollectionsTool,
    GetPagesTool,
    GetBlogsTool,
    GetArticlesTool,
    GetBlogByIdTool,
    GetArticleByIdTool,
    SearchShopifyTool,
    GetOrdersTool,
    GetOrderByIdTool,
]


def build_tools(client) -> List[BaseTool]:
    """Instantiate every tool and bind it to the shared GraphQL client."""
    tools = []
    for tool_class in TOOL_CLASSES:
        tool = tool_class()
        tool.initialize(client)
        tools.append(tool)
    return tools
