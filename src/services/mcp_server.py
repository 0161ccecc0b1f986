import json
from typing import Optional, Dict, Any, List

import mcp.types as types
from mcp.server.lowlevel import Server
from mcp.server.stdio import stdio_server

from src.config.settings import Settings
from src.services.shopify_graphql import ShopifyGraphQLClient
from src.services.tools.base import BaseTool
from src.services.tools.registry import build_tools
from src.utils.logger import get_logger, new_correlation_id

logger = get_logger(__name__)


class ShopifyMCPServer:
    """Serves the Shopify tools to MCP clients over JSON-RPC."""

    def __init__(
        self,
        settings: Settings,
        client: Optional[ShopifyGraphQLClient] = None,
        tools: Optional[List[BaseTool]] = None,
    ):
        """
        Initialize the MCP server.

        Args:
            settings: Settings object containing Shopify credentials and server metadata
            client: GraphQL client shared by all tools (built from settings if omitted)
            tools: Tool instances to expose (all Shopify tools if omitted)
        """
        self.settings = settings
        self.client = client or ShopifyGraphQLClient(settings)
        tool_list = tools if tools is not None else build_tools(self.client)
        self.tools: Dict[str, BaseTool] = {tool.name: tool for tool in tool_list}

        self.server = Server(
            settings.server.name,
            version=settings.server.version,
            instructions=settings.server.instructions,
        )
        self.server.list_tools()(self.list_tools)
        self.server.call_tool()(self.call_tool)

        logger.info(
            "MCP server configured",
            name=settings.server.name,
            tools=list(self.tools),
        )

    async def list_tools(self) -> List[types.Tool]:
        """
        List the registered tools in MCP format.

        Returns:
            Tool definitions with name, description, and input schema
        """
        return [
            types.Tool(
                name=tool.name,
                description=tool.description,
                inputSchema=tool.input_schema,
                annotations=types.ToolAnnotations(readOnlyHint=True, openWorldHint=True),
            )
            for tool in self.tools.values()
        ]

    async def call_tool(
        self, name: str, arguments: Optional[Dict[str, Any]]
    ) -> List[types.TextContent]:
        """
        Run a tool and return its result as JSON text.

        Args:
            name: Name of the tool to call
            arguments: Arguments supplied by the client

        Returns:
            A single text content block holding the JSON-encoded result

        Raises:
            ValueError: If the tool is unknown or its input is invalid
            ToolExecutionError: If the Shopify call fails
        """
        new_correlation_id()
        tool = self.tools.get(name)
        if tool is None:
            logger.warning("Unknown tool requested", tool=name)
            raise ValueError(f"Unknown tool: {name}")

        logger.info("Calling tool", tool=name, arguments=arguments)
        result = await tool.run(arguments or {})
        logger.info("Tool call successful", tool=name)

        return [types.TextContent(type="text", text=json.dumps(result))]

    async def run_stdio(self) -> None:
        """Serve over stdin/stdout until the client disconnects."""
        async with stdio_server() as (read_stream, write_stream):
            logger.info("Shopify MCP server running on stdio")
            await self.server.run(
                read_stream,
                write_stream,
                self.server.create_initialization_options(),
            )

    async def close(self) -> None:
        """Release the HTTP client."""
        await self.client.close()
