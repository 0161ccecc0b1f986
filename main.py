"""
Shopify MCP Server - Main Entry Point

Exposes read-oriented Shopify store operations (products, collections,
pages, blogs, articles, orders, and a unified search) as MCP tools over
stdio, backed by the Shopify GraphQL Admin API.
"""

import argparse
import asyncio
import sys
from typing import List, Optional

from src.config.settings import Settings
from src.services.mcp_server import ShopifyMCPServer
from src.utils.logger import setup_logging, get_logger


logger = get_logger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="shopify-mcp-server",
        description="MCP Server for Shopify API, enabling interaction with store data through GraphQL API",
    )
    parser.add_argument(
        "--accessToken",
        dest="access_token",
        help="Shopify Admin API access token (overrides SHOPIFY_ACCESS_TOKEN)",
    )
    parser.add_argument(
        "--domain",
        dest="domain",
        help="Shop domain, e.g. your-store.myshopify.com (overrides MYSHOPIFY_DOMAIN)",
    )
    parser.add_argument(
        "--api-version",
        dest="api_version",
        help="Admin API version (overrides SHOPIFY_API_VERSION)",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        help="Logging level (overrides LOG_LEVEL)",
    )
    return parser.parse_args(argv)


def load_settings(args: argparse.Namespace) -> Settings:
    """Build settings from the environment, then apply command line overrides."""
    settings = Settings()
    settings.apply_overrides(access_token=args.access_token, shop_domain=args.domain)
    if args.api_version:
        settings.shopify.api_version = args.api_version
    if args.log_level:
        settings.logging.level = args.log_level
    return settings


def report_missing(missing: List[str]) -> None:
    """Explain how to supply missing or invalid settings on stderr."""
    hints = {
        "SHOPIFY_ACCESS_TOKEN": "--accessToken=your_token",
        "MYSHOPIFY_DOMAIN": "--domain=your-store.myshopify.com",
    }
    for name in missing:
        if name not in hints:
            print(f"Error: {name} has an invalid value.", file=sys.stderr)
            continue
        print(f"Error: {name} is required.", file=sys.stderr)
        print("Please provide it via command line argument or .env file.", file=sys.stderr)
        print(f"  Command line: {hints[name]}", file=sys.stderr)


async def serve(settings: Settings) -> None:
    server = ShopifyMCPServer(settings)
    try:
        await server.run_stdio()
    finally:
        await server.close()


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point."""
    args = parse_args(argv)
    settings = load_settings(args)

    missing = settings.validate()
    if missing:
        report_missing(missing)
        sys.exit(1)

    try:
        setup_logging(
            level=settings.logging.level,
            log_file=settings.logging.log_file or None,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    try:
        asyncio.run(serve(settings))
    except KeyboardInterrupt:
        logger.info("Shutting down")
    except Exception as e:
        logger.error("Failed to start Shopify MCP Server", error=str(e), exc_info=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
