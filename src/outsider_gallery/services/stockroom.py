"""Stockroom and collect listings of purchasable works."""

from dataclasses import dataclass

from outsider_gallery.adapters.shopify_client import StorefrontClient
from outsider_gallery.domain.artworks import (
    CollectArtwork,
    StockroomArtwork,
    collect_artwork,
    is_draft_product,
    parse_product,
    sorted_artist_names,
    stockroom_artwork,
)
from outsider_gallery.services.queries import ALL_PRODUCTS_QUERY, RECENT_PRODUCTS_QUERY

_PRODUCT_PAGE_SIZE = 80


@dataclass(frozen=True)
class StockroomView:
    artworks: list[StockroomArtwork]
    artists: list[str]


@dataclass(frozen=True)
class CollectView:
    artworks: list[CollectArtwork]
    mediums: list[str]
    artists: list[str]


def _unique_sorted(values: list[str | None]) -> list[str]:
    return sorted({value.strip() for value in values if value and value.strip()})


@dataclass
class StockroomService:
    client: StorefrontClient

    async def stockroom(self) -> StockroomView:
        """Available works with a purchasable variant, most recently updated first."""
        data = await self.client.execute(RECENT_PRODUCTS_QUERY, {"first": _PRODUCT_PAGE_SIZE})
        products = [parse_product(node) for node in (data.get("products") or {}).get("nodes") or []]
        artworks = [
            artwork
            for artwork, product in ((stockroom_artwork(p), p) for p in products)
            if artwork.available and artwork.variant_id and not is_draft_product(product)
        ]
        return StockroomView(artworks=artworks, artists=sorted_artist_names(artworks))

    async def collect(self) -> CollectView:
        data = await self.client.execute(ALL_PRODUCTS_QUERY, {"first": _PRODUCT_PAGE_SIZE})
        products = [parse_product(node) for node in (data.get("products") or {}).get("nodes") or []]
        artworks = [
            artwork
            for artwork, product in ((collect_artwork(p), p) for p in products)
            if artwork.variant_id and not is_draft_product(product)
        ]
        return CollectView(
            artworks=artworks,
            mediums=_unique_sorted([artwork.medium for artwork in artworks]),
            artists=_unique_sorted([artwork.artist for artwork in artworks]),
        )
