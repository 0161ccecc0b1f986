"""
Shopify GraphQL Admin API client shared by every MCP tool.

Each tool builds its own fixed query document and hands it here together
with its variables. This module owns the transport: endpoint construction,
the static access-token header, and turning HTTP and GraphQL failures into
a single exception type.
"""

from typing import Optional, Dict, Any, List

import httpx

from src.config.settings import Settings
from src.utils.logger import get_logger

logger = get_logger(__name__)


class ShopifyAPIError(Exception):
    """Raised when the Admin API call fails at the HTTP or GraphQL level."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[Dict[str, Any]]] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.errors = errors or []


def normalize_shop_domain(domain: str) -> str:
    """Strip protocol and trailing slashes from a shop domain."""
    domain = domain.strip()
    return domain.replace("https://", "").replace("http://", "").rstrip("/")


class ShopifyGraphQLClient:
    """Async Shopify GraphQL Admin API client."""

    def __init__(
        self,
        settings: Settings,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.shop_domain = normalize_shop_domain(settings.shopify.shop_domain)
        self.access_token = settings.shopify.access_token
        self.api_version = settings.shopify.api_version
        self.endpoint = (
            f"https://{self.shop_domain}/admin/api/{self.api_version}/graphql.json"
        )
        self.headers = {
            "X-Shopify-Access-Token": self.access_token,
            "Content-Type": "application/json",
        }
        self._client = httpx.AsyncClient(
            timeout=settings.shopify.request_timeout,
            limits=httpx.Limits(max_keepalive_connections=20, max_connections=40),
            transport=transport,
        )
        logger.info(
            "ShopifyGraphQLClient initialized",
            shop_domain=self.shop_domain,
            api_version=self.api_version,
        )

    async def close(self):
        """Close the underlying HTTPX client."""
        await self._client.aclose()

    async def execute_query(
        self, query: str, variables: Optional[Dict] = None
    ) -> Dict[str, Any]:
        """Execute a GraphQL document against the Shopify Admin API.

        Args:
            query: GraphQL query document
            variables: Optional query variables

        Returns:
            The ``data`` object of the GraphQL response

        Raises:
            ShopifyAPIError: On transport failures, non-2xx responses,
                or a non-empty GraphQL ``errors`` array
        """
        payload = {"query": query}
        if variables:
            payload["variables"] = variables

        logger.debug("Executing GraphQL query", variables=variables)

        try:
            response = await self._client.post(
                self.endpoint,
                headers=self.headers,
                json=payload,
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error("Shopify HTTP error", status_code=status)
            raise ShopifyAPIError(
                f"Shopify API returned HTTP {status}: {e.response.text[:200]}",
                status_code=status,
            ) from e
        except httpx.RequestError as e:
            logger.error("Shopify request failed", error=str(e))
            raise ShopifyAPIError(f"Request to Shopify failed: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise ShopifyAPIError(
                "Shopify API returned a non-JSON response",
                status_code=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise ShopifyAPIError(
                "Shopify API returned an unexpected response",
                status_code=response.status_code,
            )

        if data.get("errors"):
            errors = data["errors"]
            if not isinstance(errors, list):
                errors = [{"message": str(errors)}]
            error_messages = [
                e.get("message", str(e)) if isinstance(e, dict) else str(e)
                for e in errors
            ]
            logger.error("GraphQL errors", errors=error_messages)
            raise ShopifyAPIError(
                f"GraphQL errors: {'; '.join(error_messages)}",
                status_code=response.status_code,
                errors=errors,
            )

        return data.get("data") or {}
