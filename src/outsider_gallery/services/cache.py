"""Time-based caching for catalog reads."""

import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import Any, Protocol

from outsider_gallery.adapters.shopify_client import StorefrontClient

_logger = logging.getLogger(__name__)


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        """Store a cached value with a TTL in seconds."""


@dataclass
class _CacheEntry:
    value: object
    expires_at: datetime


@dataclass
class InMemoryCache(Cache):
    """Process-local cache; entries expire lazily on read."""

    _entries: dict[str, _CacheEntry] = field(default_factory=dict)

    def get(self, key: str) -> object | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if datetime.now(tz=UTC) >= entry.expires_at:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object, ttl_seconds: int) -> None:
        expires_at = datetime.now(tz=UTC) + timedelta(seconds=ttl_seconds)
        self._entries[key] = _CacheEntry(value=value, expires_at=expires_at)


@dataclass
class CachingStorefrontClient(StorefrontClient):
    """Read-through cache in front of catalog queries.

    Only successful responses are stored, so a failed fetch is retried on the
    next request. Cart operations must use the uncached client.
    """

    client: StorefrontClient
    cache: Cache
    ttl_seconds: int = 60

    async def execute(
        self, query: str, variables: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        if self.ttl_seconds <= 0:
            return await self.client.execute(query, variables)
        key = "storefront:" + json.dumps(
            {"query": query, "variables": dict(variables or {})}, sort_keys=True
        )
        cached = self.cache.get(key)
        if isinstance(cached, dict):
            return cached
        data = await self.client.execute(query, variables)
        self.cache.set(key, data, ttl_seconds=self.ttl_seconds)
        _logger.debug("Cached storefront response", extra={"component": "catalog.cache"})
        return data
