"""XML sitemap of static pages, exhibitions, artists and artworks."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime
from xml.etree import ElementTree as ET

from outsider_gallery.adapters.errors import UpstreamError
from outsider_gallery.adapters.shopify_client import StorefrontClient
from outsider_gallery.domain.artworks import is_draft_product, parse_product
from outsider_gallery.domain.commerce import is_draft_status
from outsider_gallery.domain.fields import field_text, parse_metaobject
from outsider_gallery.services.queries import (
    SITEMAP_ARTISTS_QUERY,
    SITEMAP_EXHIBITIONS_QUERY,
    SITEMAP_PRODUCTS_QUERY,
)

_logger = logging.getLogger(__name__)

_SITEMAP_NS = "http://www.sitemaps.org/schemas/sitemap/0.9"
_PAGE_SIZE = 250

STATIC_PAGES = (
    ("/", "weekly", 1.0),
    ("/about", "monthly", 0.7),
    ("/exhibitions", "daily", 0.8),
    ("/artists", "weekly", 0.7),
    ("/stockroom", "daily", 0.8),
)


@dataclass(frozen=True)
class SitemapEntry:
    url: str
    last_modified: datetime | None = None
    change_frequency: str | None = None
    priority: float | None = None


def _parse_timestamp(raw: str | None) -> datetime | None:
    if not raw:
        return None
    try:
        return datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError:
        return None


@dataclass
class SitemapService:
    client: StorefrontClient
    site_url: str

    def _absolute(self, path: str) -> str:
        return f"{self.site_url.rstrip('/')}{path}"

    async def entries(self) -> list[SitemapEntry]:
        """Static pages first, then every public content item."""
        static = [
            SitemapEntry(url=self._absolute(path), change_frequency=freq, priority=priority)
            for path, freq, priority in STATIC_PAGES
        ]
        exhibitions, artists, artworks = await asyncio.gather(
            self._safely("exhibitions", self._exhibition_entries),
            self._safely("artists", self._artist_entries),
            self._safely("artworks", self._artwork_entries),
        )
        return [*static, *exhibitions, *artists, *artworks]

    async def _safely(
        self, source: str, fetch: Callable[[], Awaitable[list[SitemapEntry]]]
    ) -> list[SitemapEntry]:
        try:
            return await fetch()
        except UpstreamError:
            _logger.exception(
                "Failed to fetch %s for sitemap", source, extra={"component": f"sitemap.{source}"}
            )
            return []

    async def _metaobject_entries(self, query: str, prefix: str) -> list[SitemapEntry]:
        data = await self.client.execute(query, {"first": _PAGE_SIZE})
        nodes = (data.get("metaobjects") or {}).get("nodes") or []
        return [
            SitemapEntry(
                url=self._absolute(f"{prefix}/{node.handle}"),
                last_modified=_parse_timestamp(node.updated_at),
            )
            for node in (parse_metaobject(raw) for raw in nodes)
            if node is not None and not is_draft_status(field_text(node.fields, "status"))
        ]

    async def _exhibition_entries(self) -> list[SitemapEntry]:
        return await self._metaobject_entries(SITEMAP_EXHIBITIONS_QUERY, "/exhibitions")

    async def _artist_entries(self) -> list[SitemapEntry]:
        return await self._metaobject_entries(SITEMAP_ARTISTS_QUERY, "/artists")

    async def _artwork_entries(self) -> list[SitemapEntry]:
        data = await self.client.execute(SITEMAP_PRODUCTS_QUERY, {"first": _PAGE_SIZE})
        nodes = (data.get("products") or {}).get("nodes") or []
        products = [parse_product(node) for node in nodes if node]
        return [
            SitemapEntry(
                url=self._absolute(f"/artworks/{product.handle}"),
                last_modified=_parse_timestamp(product.updated_at),
            )
            for product in products
            if product.handle and not is_draft_product(product)
        ]

    async def render_xml(self) -> str:
        return render_sitemap(await self.entries())


def render_sitemap(entries: list[SitemapEntry]) -> str:
    """Serialise entries as a sitemaps.org ``urlset`` document."""
    urlset = ET.Element("urlset", xmlns=_SITEMAP_NS)
    for entry in entries:
        url = ET.SubElement(urlset, "url")
        ET.SubElement(url, "loc").text = entry.url
        if entry.last_modified is not None:
            ET.SubElement(url, "lastmod").text = entry.last_modified.isoformat()
        if entry.change_frequency:
            ET.SubElement(url, "changefreq").text = entry.change_frequency
        if entry.priority is not None:
            ET.SubElement(url, "priority").text = f"{entry.priority:.1f}"
    body = ET.tostring(urlset, encoding="unicode")
    return f'<?xml version="1.0" encoding="UTF-8"?>\n{body}'
