"""Cart view models mapped from the storefront cart API."""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

_DEFAULT_CURRENCY = "USD"


class CartModel(BaseModel):
    """Base model serialised with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class Money(CartModel):
    amount: str = "0"
    currency_code: str = _DEFAULT_CURRENCY


class CartImage(CartModel):
    url: str
    width: int | None = None
    height: int | None = None
    alt_text: str | None = None


class CartProduct(CartModel):
    id: str | None = None
    title: str | None = None
    handle: str | None = None
    vendor: str | None = None
    featured_image: CartImage | None = None
    artist: str | None = None
    year: str | None = None
    medium: str | None = None
    dimensions: str | None = None


class CartLine(CartModel):
    id: str
    quantity: int = 0
    merchandise_id: str | None = None
    merchandise_title: str = ""
    available_for_sale: bool = False
    price: Money
    cost_total: Money
    product: CartProduct | None = None


class CartCost(CartModel):
    subtotal_amount: Money
    total_amount: Money


class Cart(CartModel):
    id: str
    checkout_url: str | None = None
    total_quantity: int = 0
    cost: CartCost
    lines: list[CartLine]


def _money(raw: Mapping[str, Any] | None) -> Money:
    if not raw:
        return Money()
    return Money(
        amount=str(raw.get("amount") or "0"),
        currency_code=raw.get("currencyCode") or _DEFAULT_CURRENCY,
    )


def _metafield_value(raw: Mapping[str, Any] | None) -> str | None:
    if not raw:
        return None
    return raw.get("value")


def _product(raw: Mapping[str, Any] | None) -> CartProduct | None:
    if not raw:
        return None
    image = raw.get("featuredImage")
    return CartProduct(
        id=raw.get("id"),
        title=raw.get("title"),
        handle=raw.get("handle"),
        vendor=raw.get("vendor"),
        featured_image=CartImage(
            url=image["url"],
            width=image.get("width"),
            height=image.get("height"),
            alt_text=image.get("altText"),
        )
        if image and image.get("url")
        else None,
        artist=_metafield_value(raw.get("artistField")),
        year=_metafield_value(raw.get("yearField")),
        medium=_metafield_value(raw.get("mediumField")),
        dimensions=_metafield_value(raw.get("dimensionsField")),
    )


def _line(raw: Mapping[str, Any]) -> CartLine:
    merchandise = raw.get("merchandise") or {}
    return CartLine(
        id=raw["id"],
        quantity=raw.get("quantity") or 0,
        merchandise_id=merchandise.get("id"),
        merchandise_title=merchandise.get("title") or "",
        available_for_sale=bool(merchandise.get("availableForSale")),
        price=_money(merchandise.get("price")),
        cost_total=_money((raw.get("cost") or {}).get("totalAmount")),
        product=_product(merchandise.get("product")),
    )


def map_cart(raw: Mapping[str, Any] | None) -> Cart | None:
    """Map a raw cart payload to the view model; a missing cart yields None."""
    if not raw:
        return None
    cost = raw.get("cost") or {}
    lines = (raw.get("lines") or {}).get("nodes") or []
    return Cart(
        id=raw["id"],
        checkout_url=raw.get("checkoutUrl"),
        total_quantity=raw.get("totalQuantity") or 0,
        cost=CartCost(
            subtotal_amount=_money(cost.get("subtotalAmount")),
            total_amount=_money(cost.get("totalAmount")),
        ),
        lines=[_line(node) for node in lines if node and node.get("id")],
    )
