"""Artwork catalog reads."""

import logging
from dataclasses import dataclass

from outsider_gallery.adapters.shopify_client import StorefrontClient
from outsider_gallery.domain.artworks import (
    ArtworkDetail,
    ArtworkPayload,
    LayoutRow,
    Product,
    artwork_detail,
    artwork_payload,
    in_exhibition,
    is_draft_product,
    layout_rows,
    matches_artist,
    parse_product,
)
from outsider_gallery.services.queries import ACTIVE_PRODUCTS_QUERY, PRODUCT_QUERY

_logger = logging.getLogger(__name__)

_PRODUCT_PAGE_SIZE = 80


@dataclass(frozen=True)
class ArtworkGrid:
    items: list[ArtworkPayload]
    rows: list[LayoutRow]


@dataclass
class ArtworkService:
    """Product lookups for artwork pages and grids."""

    client: StorefrontClient

    async def active_products(self) -> list[Product]:
        data = await self.client.execute(ACTIVE_PRODUCTS_QUERY, {"first": _PRODUCT_PAGE_SIZE})
        nodes = (data.get("products") or {}).get("nodes") or []
        return [parse_product(node) for node in nodes if node]

    async def get_artwork(
        self, handle: str, exhibition_handle: str | None = None
    ) -> ArtworkDetail | None:
        """Artwork page data; unknown or draft products yield None."""
        data = await self.client.execute(PRODUCT_QUERY, {"handle": handle})
        raw = data.get("product")
        if not raw:
            return None
        product = parse_product(raw)
        if is_draft_product(product):
            _logger.info("Skipping draft artwork %s", handle, extra={"component": "artworks"})
            return None
        return artwork_detail(product, exhibition_handle)

    async def featured_works(
        self, exhibition_handle: str, fallback_artist: str | None = None
    ) -> ArtworkGrid:
        """Works linked to an exhibition, laid out in rows."""
        products = [
            product
            for product in await self.active_products()
            if in_exhibition(product, exhibition_handle) and not is_draft_product(product)
        ]
        items = [artwork_payload(product, fallback_artist) for product in products]
        return ArtworkGrid(items=items, rows=layout_rows([item.aspect for item in items]))

    async def artist_works(self, artist_handle: str, artist_name: str) -> ArtworkGrid:
        """Works by an artist; unknown proportions count as square."""
        products = [
            product
            for product in await self.active_products()
            if matches_artist(product, artist_handle, artist_name)
            and not is_draft_product(product)
        ]
        items = [
            artwork_payload(product, artist_name, unknown_aspect="S") for product in products
        ]
        return ArtworkGrid(
            items=items,
            rows=layout_rows([item.aspect for item in items], landscape_triples=True),
        )
