"""Commerce status resolution for artworks."""

import re
from dataclasses import dataclass
from typing import Literal

from outsider_gallery.domain.formatting import format_currency, parse_number

PRICE_ON_REQUEST = "Price on request"

_SOLD_FLAGS = frozenset({"true", "1", "yes"})
_ENQUIRE_STATUSES = frozenset(
    {"enquire", "enquiry", "reserved", "poa", "price on request", "on hold"}
)
_DRAFT_STATUSES = frozenset(
    {"draft", "inactive", "hidden", "internal", "unpublished", "preview", "archived"}
)
_SEPARATOR_RE = re.compile(r"[\s_]+")

Availability = Literal["SoldOut", "InStock", "OutOfStock"]


@dataclass(frozen=True)
class Money:
    amount: str
    currency_code: str


@dataclass(frozen=True)
class CommerceSignals:
    """Raw inputs that decide whether an artwork can be bought online."""

    available_for_sale: bool | None
    sold_flag: str | None = None
    status: str | None = None
    price: Money | None = None
    online_store_url: str | None = None
    variant_id: str | None = None
    variant_available: bool | None = None


@dataclass(frozen=True)
class CommerceState:
    price_label: str | None
    can_purchase: bool
    variant_id: str | None
    price: Money | None
    is_sold: bool
    force_enquire: bool
    availability: Availability


def normalize_status(value: str | None) -> str:
    """Lower-case a status and treat underscores and runs of spaces alike."""
    if not value:
        return ""
    return _SEPARATOR_RE.sub(" ", value.strip().lower())


def is_draft_status(value: object) -> bool:
    """Return True when a status-like value marks a non-public item."""
    if not isinstance(value, str):
        return False
    status = value.strip().lower()
    if not status:
        return False
    return status in _DRAFT_STATUSES or status.startswith("draft")


def is_sold(
    sold_flag: str | None, status: str | None, available_for_sale: bool | None
) -> bool:
    return (
        (sold_flag or "").strip().lower() in _SOLD_FLAGS
        or normalize_status(status) == "sold"
        or available_for_sale is False
    )


def is_force_enquire(status: str | None) -> bool:
    return normalize_status(status) in _ENQUIRE_STATUSES


def derive_commerce_state(signals: CommerceSignals) -> CommerceState:
    """Decide price label, purchasability and availability for an artwork."""
    sold = is_sold(signals.sold_flag, signals.status, signals.available_for_sale)
    force_enquire = is_force_enquire(signals.status)

    amount = parse_number(signals.price.amount) if signals.price else None
    has_price = amount is not None and amount > 0
    price = signals.price if has_price else None

    variant_available = signals.variant_available is not False and bool(
        signals.variant_id
    )
    can_purchase = bool(
        not sold
        and signals.available_for_sale
        and variant_available
        and signals.online_store_url
        and has_price
        and not force_enquire
    )

    if sold:
        price_label = None
    elif price is not None:
        price_label = format_currency(amount, price.currency_code) or PRICE_ON_REQUEST
    else:
        price_label = PRICE_ON_REQUEST

    if sold:
        availability: Availability = "SoldOut"
    elif can_purchase:
        availability = "InStock"
    else:
        availability = "OutOfStock"

    return CommerceState(
        price_label=price_label,
        can_purchase=can_purchase,
        variant_id=signals.variant_id,
        price=price,
        is_sold=sold,
        force_enquire=force_enquire,
        availability=availability,
    )
