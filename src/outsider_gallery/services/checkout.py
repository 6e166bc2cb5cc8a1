"""Cart permalinks and checkout URL helpers."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote, urlsplit, urlunsplit

_logger = logging.getLogger(__name__)


def variant_numeric_id(gid: str) -> str:
    """Return the trailing numeric id of a ``gid://shopify/ProductVariant/...`` id."""
    return gid.rsplit("/", 1)[-1] or gid


def _quantity(raw: Any) -> int:
    if isinstance(raw, bool):
        return 0
    if isinstance(raw, int | float):
        return int(raw)
    return 0


def build_cart_permalink(
    lines: Iterable[Mapping[str, Any]], domain: str, discount: str | None = None
) -> str:
    """Build a storefront cart permalink such as ``/cart/123:1,456:2``."""
    items = [
        f"{variant_numeric_id(line['variantGid'])}:{max(1, _quantity(line.get('quantity')))}"
        for line in lines
        if isinstance(line, Mapping)
        and isinstance(line.get("variantGid"), str)
        and line["variantGid"]
        and _quantity(line.get("quantity")) > 0
    ]
    if not items:
        return f"https://{domain}/cart"
    url = f"https://{domain}/cart/{','.join(items)}"
    if discount:
        url = f"{url}?discount={quote(discount, safe='')}"
    return url


def rewrite_checkout_domain(checkout_url: str | None, host: str) -> str | None:
    """Point a hosted checkout URL at the public shop domain over https."""
    if not checkout_url:
        return checkout_url
    parts = urlsplit(checkout_url)
    if not parts.netloc:
        _logger.warning(
            "Checkout URL has no host; leaving it unchanged",
            extra={"component": "checkout"},
        )
        return checkout_url
    return urlunsplit(("https", host, parts.path, parts.query, parts.fragment))
