"""Shopify Storefront GraphQL client."""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Protocol

import httpx

from outsider_gallery.adapters.errors import StorefrontError


class StorefrontClient(Protocol):
    """Interface for Storefront API interactions."""

    async def execute(
        self, query: str, variables: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """Run a GraphQL document and return its ``data`` object."""


@dataclass
class HttpxStorefrontClient(StorefrontClient):
    """HTTPX-backed Storefront client."""

    endpoint: str
    access_token: str
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, store_domain: str, access_token: str, api_version: str = "2024-07"
    ) -> "HttpxStorefrontClient":
        """Create a Storefront client with a managed httpx session."""
        return cls(
            endpoint=f"https://{store_domain}/api/{api_version}/graphql.json",
            access_token=access_token,
            http_client=httpx.AsyncClient(),
        )

    async def execute(
        self, query: str, variables: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        """POST a GraphQL document to the Storefront API."""
        try:
            response = await self.http_client.post(
                self.endpoint,
                headers={"X-Shopify-Storefront-Access-Token": self.access_token},
                json={"query": query, "variables": dict(variables or {})},
                timeout=15,
            )
        except httpx.HTTPError as exc:
            raise StorefrontError(f"Shopify fetch failed: {exc}") from exc
        if response.is_error:
            raise StorefrontError(
                f"Shopify fetch failed: {response.status_code} "
                f"{response.reason_phrase}\n{response.text}"
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise StorefrontError(f"Shopify returned invalid JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise StorefrontError("Shopify returned an unexpected response body")
        errors = payload.get("errors")
        if errors:
            messages = "; ".join(
                str(error.get("message", error)) if isinstance(error, dict) else str(error)
                for error in errors
            )
            raise StorefrontError(f"Shopify GraphQL errors: {messages}")
        return payload.get("data") or {}

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
