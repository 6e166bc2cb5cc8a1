"""Artwork (product) parsing and view models."""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Literal

from outsider_gallery.domain.commerce import (
    CommerceSignals,
    CommerceState,
    Money,
    derive_commerce_state,
    is_draft_status,
)
from outsider_gallery.domain.fields import (
    ContentField,
    Image,
    metafield_text,
    metaobject_references,
    parse_image,
    parse_metafield,
    reference_lookup,
    resolve_artist_name,
    resolve_status,
)
from outsider_gallery.domain.formatting import format_dimensions_cm, parse_number
from outsider_gallery.domain.richtext import metafield_html, strip_html

Aspect = Literal["L", "P", "S"]
Layout = Literal["full", "pair", "triple"]

_METAFIELD_SUFFIX = "Field"
_TRUTHY_SOLD = frozenset({"true", "1", "yes", "sold"})
_ARTIST_KEYS = ("name", "full_name", "fullName", "title")
_ARTIST_SORT_KEYS = (
    "sortKey",
    "sort_key",
    "sort-key",
    "sortkey",
    "lastname",
    "last_name",
    "lastName",
)


@dataclass(frozen=True)
class Variant:
    id: str
    title: str | None = None
    available_for_sale: bool | None = None
    quantity_available: int | None = None


@dataclass(frozen=True)
class Product:
    """Storefront product with its custom metafields keyed by short name."""

    id: str
    handle: str
    title: str
    vendor: str | None = None
    available_for_sale: bool | None = None
    online_store_url: str | None = None
    featured_image: Image | None = None
    images: tuple[Image, ...] = ()
    price: Money | None = None
    variants: tuple[Variant, ...] = ()
    metafields: Mapping[str, ContentField] = field(default_factory=dict)
    description: str | None = None
    description_html: str | None = None
    updated_at: str | None = None
    status: str | None = None

    def metafield(self, name: str) -> ContentField | None:
        return self.metafields.get(name)

    def text(self, name: str) -> str | None:
        return metafield_text(self.metafield(name))

    def number(self, name: str) -> float | None:
        return parse_number(self.text(name))


def parse_product(raw: Mapping[str, Any]) -> Product:
    """Parse a product node; aliases ending in ``Field`` are custom metafields."""
    metafields: dict[str, ContentField] = {}
    for alias, value in raw.items():
        if alias.endswith(_METAFIELD_SUFFIX) and isinstance(value, Mapping):
            name = alias[: -len(_METAFIELD_SUFFIX)]
            parsed = parse_metafield(name, value)
            if parsed is not None:
                metafields[name] = parsed

    price_raw = ((raw.get("priceRange") or {}).get("minVariantPrice")) or None
    price = (
        Money(amount=str(price_raw.get("amount")), currency_code=price_raw.get("currencyCode") or "")
        if price_raw
        else None
    )
    images = tuple(
        image
        for image in (parse_image(node) for node in (raw.get("images") or {}).get("nodes") or [])
        if image is not None
    )
    variants = tuple(
        Variant(
            id=node["id"],
            title=node.get("title"),
            available_for_sale=node.get("availableForSale"),
            quantity_available=node.get("quantityAvailable"),
        )
        for node in (raw.get("variants") or {}).get("nodes") or []
        if node and node.get("id")
    )
    return Product(
        id=raw.get("id") or "",
        handle=raw.get("handle") or "",
        title=raw.get("title") or "",
        vendor=raw.get("vendor"),
        available_for_sale=raw.get("availableForSale"),
        online_store_url=raw.get("onlineStoreUrl"),
        featured_image=parse_image(raw.get("featuredImage")),
        images=images,
        price=price,
        variants=variants,
        metafields=metafields,
        description=raw.get("description"),
        description_html=raw.get("descriptionHtml"),
        updated_at=raw.get("updatedAt"),
        status=raw.get("status"),
    )


def exhibition_handles(product: Product) -> list[str]:
    refs = metaobject_references(product.metafield("exhibitions"))
    return [ref.handle for ref in refs if ref.handle]


def in_exhibition(product: Product, exhibition_handle: str) -> bool:
    return exhibition_handle in exhibition_handles(product)


def matches_artist(product: Product, artist_handle: str, artist_name: str) -> bool:
    """Whether a product belongs to an artist by reference handle, value or vendor."""
    artist_field = product.metafield("artist")
    target_name = artist_name.strip().lower()
    for ref in metaobject_references(artist_field):
        if ref.handle and ref.handle.lower() == artist_handle.lower():
            return True
    value = (metafield_text(artist_field) or "").lower()
    if value and value == target_name:
        return True
    vendor = (product.vendor or "").strip().lower()
    return bool(vendor) and vendor == target_name


# Commerce -------------------------------------------------------------------


def primary_variant(product: Product) -> Variant | None:
    return product.variants[0] if product.variants else None


def commerce_signals(product: Product) -> CommerceSignals:
    variant = primary_variant(product)
    return CommerceSignals(
        available_for_sale=product.available_for_sale,
        sold_flag=product.text("sold"),
        status=resolve_status(product.metafield("status")),
        price=product.price,
        online_store_url=product.online_store_url,
        variant_id=variant.id if variant else None,
        variant_available=variant.available_for_sale if variant else None,
    )


def commerce_state(product: Product) -> CommerceState:
    return derive_commerce_state(commerce_signals(product))


# Layout ---------------------------------------------------------------------


@dataclass(frozen=True)
class AspectInfo:
    aspect: Aspect
    aspect_ratio: str | None
    height_factor: float


@dataclass(frozen=True)
class LayoutRow:
    layout: Layout
    indexes: tuple[int, ...]


def classify_aspect(
    width: int | None, height: int | None, unknown: Aspect = "P"
) -> AspectInfo:
    """Landscape above a 1.05 ratio, portrait below 0.95, square otherwise."""
    if not width or not height or width <= 0 or height <= 0:
        return AspectInfo(aspect=unknown, aspect_ratio=None, height_factor=1.0)
    ratio = width / height
    if ratio > 1.05:
        aspect: Aspect = "L"
    elif ratio < 0.95:
        aspect = "P"
    else:
        aspect = "S"
    return AspectInfo(aspect=aspect, aspect_ratio=f"{width}/{height}", height_factor=1 / ratio)


def layout_rows(aspects: Sequence[Aspect], landscape_triples: bool = False) -> list[LayoutRow]:
    """Group artworks into full, pair and triple rows.

    Portraits are grouped apart from landscape and square works. Runs of four
    become two pairs; runs of three become a triple for portraits, or a full
    row plus a pair for landscapes unless ``landscape_triples`` is set.
    """
    kinds = ["P" if aspect == "P" else "L" for aspect in aspects]
    rows: list[LayoutRow] = []
    index = 0
    while index < len(kinds):
        kind = kinds[index]

        def run_of(count: int, start: int = index, kind: str = kind) -> bool:
            window = kinds[start : start + count]
            return len(window) == count and all(item == kind for item in window)

        if run_of(4):
            rows.append(LayoutRow("pair", (index, index + 1)))
            rows.append(LayoutRow("pair", (index + 2, index + 3)))
            index += 4
        elif run_of(3):
            if kind == "P" or landscape_triples:
                rows.append(LayoutRow("triple", (index, index + 1, index + 2)))
            else:
                rows.append(LayoutRow("full", (index,)))
                rows.append(LayoutRow("pair", (index + 1, index + 2)))
            index += 3
        elif run_of(2):
            rows.append(LayoutRow("pair", (index, index + 1)))
            index += 2
        else:
            rows.append(LayoutRow("full", (index,)))
            index += 1
    return rows


# View models ----------------------------------------------------------------


@dataclass(frozen=True)
class ArtworkPayload:
    id: str
    handle: str
    title: str
    artist: str | None
    year: str | None
    price_label: str | None
    is_sold: bool
    can_purchase: bool
    variant_id: str | None
    image: Image | None
    aspect: Aspect
    aspect_ratio: str | None
    height_factor: float
    exhibition_handle: str | None = None
    href: str | None = None


def artwork_payload(
    product: Product, fallback_artist: str | None = None, unknown_aspect: Aspect = "P"
) -> ArtworkPayload:
    state = commerce_state(product)
    image = product.featured_image
    info = classify_aspect(
        image.width if image else None, image.height if image else None, unknown_aspect
    )
    handles = exhibition_handles(product)
    return ArtworkPayload(
        id=product.id,
        handle=product.handle,
        title=product.title,
        artist=resolve_artist_name(product.metafield("artist"))
        or product.vendor
        or fallback_artist,
        year=product.text("year"),
        price_label=state.price_label,
        is_sold=state.is_sold,
        can_purchase=state.can_purchase,
        variant_id=state.variant_id,
        image=image,
        aspect=info.aspect,
        aspect_ratio=info.aspect_ratio,
        height_factor=info.height_factor,
        exhibition_handle=handles[0] if handles else None,
        href=f"/exhibitions/{handles[0]}/artworks/{product.handle}" if handles else None,
    )


@dataclass(frozen=True)
class ArtworkDetail:
    handle: str
    title: str
    artist: str | None
    year: str | None
    medium: str | None
    gallery: list[Image]
    caption_html: str | None
    additional_info_html: str | None
    description_text: str | None
    dimensions_label: str | None
    width_cm: float | None
    height_cm: float | None
    depth_cm: float | None
    exhibition_handle: str | None
    commerce: CommerceState


def _gallery(product: Product) -> list[Image]:
    hero = product.featured_image or (product.images[0] if product.images else None)
    if hero is None:
        return list(product.images)
    return [hero, *(image for image in product.images if image.url != hero.url)]


def artwork_detail(product: Product, exhibition_handle: str | None = None) -> ArtworkDetail:
    caption_html = (
        metafield_html(product.metafield("fullCaption"))
        or metafield_html(product.metafield("caption"))
        or product.description_html
        or (f"<p>{product.description}</p>" if product.description else None)
    )
    additional_html = (
        metafield_html(product.metafield("additionalInfo"))
        or metafield_html(product.metafield("additional"))
        or metafield_html(product.metafield("notes"))
    )
    width = product.number("width")
    height = product.number("height")
    depth = product.number("depth")
    return ArtworkDetail(
        handle=product.handle,
        title=product.title,
        artist=resolve_artist_name(product.metafield("artist")),
        year=product.text("year"),
        medium=product.text("medium"),
        gallery=_gallery(product),
        caption_html=caption_html,
        additional_info_html=additional_html,
        description_text=strip_html(
            caption_html or product.description_html or product.description
        ),
        dimensions_label=format_dimensions_cm(width, height, depth)
        or product.text("dimensions"),
        width_cm=width,
        height_cm=height,
        depth_cm=depth,
        exhibition_handle=exhibition_handle,
        commerce=commerce_state(product),
    )


# Listings -------------------------------------------------------------------


def parse_sold_flag(value: str | None) -> bool:
    return (value or "").strip().lower() in _TRUTHY_SOLD


def pick_variant(variants: Sequence[Variant]) -> Variant | None:
    """First purchasable variant, else the first one."""
    return next((v for v in variants if v.available_for_sale), None) or (
        variants[0] if variants else None
    )


def _listing_available(product: Product, variant: Variant | None, status: str | None) -> bool:
    base = variant.available_for_sale if variant else product.available_for_sale
    return (
        bool(base)
        and not parse_sold_flag(product.text("sold"))
        and (status or "").lower() != "sold"
    )


def artist_name(product: Product) -> str | None:
    artist_field = product.metafield("artist")
    return (
        reference_lookup(artist_field.reference if artist_field else None, _ARTIST_KEYS)
        or metafield_text(artist_field)
        or (product.vendor or "").strip()
        or None
    )


def artist_sort_key(product: Product, name: str | None) -> str | None:
    """Sort key from the artist metaobject, else the last word of the name."""
    artist_field = product.metafield("artist")
    explicit = reference_lookup(
        artist_field.reference if artist_field else None, _ARTIST_SORT_KEYS
    )
    if explicit:
        return explicit.lower()
    if not name:
        return None
    parts = name.split()
    return (parts[-1] if parts else name).lower()


@dataclass(frozen=True)
class StockroomArtwork:
    id: str
    handle: str
    title: str
    exhibition_handle: str | None
    artist: str | None
    artist_sort_key: str | None
    year: str | None
    medium: str | None
    dimensions: str | None
    price: Money | None
    price_label: str | None
    image: Image | None
    available: bool
    sold: bool
    status: str | None
    variant_id: str | None
    quantity_available: int | None
    width_cm: float | None
    height_cm: float | None
    depth_cm: float | None


def stockroom_artwork(product: Product) -> StockroomArtwork:
    variant = pick_variant(product.variants)
    status = resolve_status(product.metafield("status"))
    available = _listing_available(product, variant, status)
    name = artist_name(product)
    handles = exhibition_handles(product)
    width = product.number("width")
    height = product.number("height")
    depth = product.number("depth")
    state = commerce_state(product)
    return StockroomArtwork(
        id=product.id,
        handle=product.handle,
        title=product.title,
        exhibition_handle=handles[0] if handles else None,
        artist=name,
        artist_sort_key=artist_sort_key(product, name),
        year=product.text("year"),
        medium=product.text("medium"),
        dimensions=format_dimensions_cm(width, height, depth) or product.text("dimensions"),
        price=product.price,
        price_label=state.price_label if available else None,
        image=product.featured_image,
        available=available,
        sold=not available,
        status=status,
        variant_id=variant.id if variant else None,
        quantity_available=variant.quantity_available if variant else None,
        width_cm=width,
        height_cm=height,
        depth_cm=depth,
    )


def sorted_artist_names(artworks: Sequence[StockroomArtwork]) -> list[str]:
    """Distinct artist names ordered by sort key (surname by default)."""
    keys: dict[str, str] = {}
    for artwork in artworks:
        name = (artwork.artist or "").strip()
        if not name:
            continue
        lower = name.lower()
        sort_key = (artwork.artist_sort_key or "").strip().lower()
        candidate = sort_key or lower
        existing = keys.get(name)
        if existing is None or (existing == lower and candidate != lower):
            keys[name] = candidate
    return [name for name, _ in sorted(keys.items(), key=lambda item: item[1] or item[0].lower())]


@dataclass(frozen=True)
class CollectArtwork:
    id: str
    handle: str
    title: str
    artist: str | None
    year: str | None
    medium: str | None
    dimensions: str | None
    price: Money | None
    image: Image | None
    available: bool
    sold: bool
    status: str | None
    variant_id: str | None
    quantity_available: int | None


def collect_artwork(product: Product) -> CollectArtwork:
    variant = pick_variant(product.variants)
    status = product.text("status")
    available = _listing_available(product, variant, status)
    return CollectArtwork(
        id=product.id,
        handle=product.handle,
        title=product.title,
        artist=product.text("artist") or (product.vendor or "").strip() or None,
        year=product.text("year"),
        medium=product.text("medium"),
        dimensions=product.text("dimensions"),
        price=product.price,
        image=product.featured_image,
        available=available,
        sold=not available,
        status=status,
        variant_id=variant.id if variant else None,
        quantity_available=variant.quantity_available if variant else None,
    )


def is_draft_product(product: Product) -> bool:
    return is_draft_status(resolve_status(product.metafield("status")))
