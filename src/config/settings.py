"""
Configuration management for the Shopify MCP server.
Loads settings from environment variables with sensible defaults.
"""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import find_dotenv, load_dotenv

# Load .env from project root, then from the working directory
PROJECT_ROOT = Path(__file__).parent.parent.parent
load_dotenv(PROJECT_ROOT / ".env")
load_dotenv(find_dotenv(usecwd=True))


@dataclass
class ShopifyConfig:
    access_token: str = ""
    shop_domain: str = ""
    api_version: str = "2025-01"
    request_timeout: float = 30.0
    invalid: list = field(default_factory=list)

    def __post_init__(self):
        self.access_token = os.getenv("SHOPIFY_ACCESS_TOKEN", self.access_token)
        self.shop_domain = os.getenv(
            "MYSHOPIFY_DOMAIN", os.getenv("SHOPIFY_SHOP_DOMAIN", self.shop_domain)
        )
        self.api_version = os.getenv("SHOPIFY_API_VERSION", self.api_version)
        timeout_str = os.getenv("SHOPIFY_REQUEST_TIMEOUT", "")
        if timeout_str:
            try:
                self.request_timeout = float(timeout_str)
            except ValueError:
                self.invalid.append("SHOPIFY_REQUEST_TIMEOUT")


@dataclass
class ServerConfig:
    name: str = "shopify"
    version: str = "1.0.0"
    instructions: str = (
        "MCP Server for Shopify API, enabling interaction with store data "
        "through GraphQL API"
    )

    def __post_init__(self):
        self.name = os.getenv("MCP_SERVER_NAME", self.name)


@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_file: str = ""

    def __post_init__(self):
        self.level = os.getenv("LOG_LEVEL", self.level)
        self.log_file = os.getenv("LOG_FILE", self.log_file)


@dataclass
class Settings:
    shopify: ShopifyConfig = field(default_factory=ShopifyConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def apply_overrides(
        self,
        access_token: Optional[str] = None,
        shop_domain: Optional[str] = None,
    ) -> "Settings":
        """Let command line values win over the environment."""
        if access_token:
            self.shopify.access_token = access_token
        if shop_domain:
            self.shopify.shop_domain = shop_domain
        return self

    def validate(self) -> list[str]:
        """Validate required configuration. Returns list of missing or invalid items."""
        missing = []
        if not self.shopify.access_token:
            missing.append("SHOPIFY_ACCESS_TOKEN")
        if not self.shopify.shop_domain:
            missing.append("MYSHOPIFY_DOMAIN")
        missing.extend(self.shopify.invalid)
        return missing


# Global settings singleton
settings = Settings()
