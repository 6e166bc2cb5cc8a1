"""Cart proxy over the storefront cart API."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from outsider_gallery.adapters.shopify_client import StorefrontClient
from outsider_gallery.domain.cart import Cart, map_cart
from outsider_gallery.services.checkout import rewrite_checkout_domain

_logger = logging.getLogger(__name__)

CART_FRAGMENT = """
fragment CartFields on Cart {
  id
  checkoutUrl
  totalQuantity
  cost {
    subtotalAmount { amount currencyCode }
    totalAmount { amount currencyCode }
  }
  lines(first: 50) {
    nodes {
      id
      quantity
      cost {
        totalAmount { amount currencyCode }
      }
      merchandise {
        ... on ProductVariant {
          id
          title
          availableForSale
          price { amount currencyCode }
          product {
            id
            title
            handle
            featuredImage { url width height altText }
            vendor
            artistField: metafield(namespace: "custom", key: "artist") { value }
            yearField: metafield(namespace: "custom", key: "year") { value }
            mediumField: metafield(namespace: "custom", key: "medium") { value }
            dimensionsField: metafield(namespace: "custom", key: "dimensions") { value }
          }
        }
      }
    }
  }
}
"""

CREATE_MUTATION = (
    """
mutation CartCreate($input: CartInput) {
  cartCreate(input: $input) {
    cart { ...CartFields }
    userErrors { field message }
  }
}
"""
    + CART_FRAGMENT
)

CART_QUERY = (
    """
query CartQuery($id: ID!) {
  cart(id: $id) { ...CartFields }
}
"""
    + CART_FRAGMENT
)

ADD_LINES_MUTATION = (
    """
mutation CartLinesAdd($cartId: ID!, $lines: [CartLineInput!]!) {
  cartLinesAdd(cartId: $cartId, lines: $lines) {
    cart { ...CartFields }
    userErrors { field message }
  }
}
"""
    + CART_FRAGMENT
)

UPDATE_LINES_MUTATION = (
    """
mutation CartLinesUpdate($cartId: ID!, $lines: [CartLineUpdateInput!]!) {
  cartLinesUpdate(cartId: $cartId, lines: $lines) {
    cart { ...CartFields }
    userErrors { field message }
  }
}
"""
    + CART_FRAGMENT
)

REMOVE_LINES_MUTATION = (
    """
mutation CartLinesRemove($cartId: ID!, $lineIds: [ID!]!) {
  cartLinesRemove(cartId: $cartId, lineIds: $lineIds) {
    cart { ...CartFields }
    userErrors { field message }
  }
}
"""
    + CART_FRAGMENT
)


class CartUserError(Exception):
    """The cart API rejected a mutation with user errors."""


@dataclass
class CartService:
    """Thin proxy that maps storefront cart payloads to cart view models."""

    client: StorefrontClient
    checkout_host: str | None = None

    async def create(self, lines: Sequence[Mapping[str, Any]] | None = None) -> Cart | None:
        """Create a cart, optionally seeded with lines."""
        data = await self.client.execute(
            CREATE_MUTATION, {"input": {"lines": list(lines)} if lines else None}
        )
        return self._mutation_result(data, "cartCreate")

    async def fetch(self, cart_id: str) -> Cart | None:
        """Return the cart, or None when the backend no longer knows it."""
        data = await self.client.execute(CART_QUERY, {"id": cart_id})
        return self._finish(map_cart(data.get("cart")))

    async def add_lines(self, cart_id: str, lines: Sequence[Mapping[str, Any]]) -> Cart | None:
        data = await self.client.execute(
            ADD_LINES_MUTATION, {"cartId": cart_id, "lines": list(lines)}
        )
        return self._mutation_result(data, "cartLinesAdd")

    async def update_lines(
        self, cart_id: str, updates: Sequence[Mapping[str, Any]]
    ) -> Cart | None:
        data = await self.client.execute(
            UPDATE_LINES_MUTATION, {"cartId": cart_id, "lines": list(updates)}
        )
        return self._mutation_result(data, "cartLinesUpdate")

    async def remove_lines(self, cart_id: str, line_ids: Sequence[str]) -> Cart | None:
        data = await self.client.execute(
            REMOVE_LINES_MUTATION, {"cartId": cart_id, "lineIds": list(line_ids)}
        )
        return self._mutation_result(data, "cartLinesRemove")

    def _mutation_result(self, data: Mapping[str, Any], root: str) -> Cart | None:
        payload = data.get(root) or {}
        user_errors = payload.get("userErrors") or []
        if user_errors:
            message = "; ".join(str(error.get("message", "")) for error in user_errors)
            _logger.warning(
                "Cart mutation rejected: %s", message, extra={"component": f"cart.{root}"}
            )
            raise CartUserError(message)
        return self._finish(map_cart(payload.get("cart")))

    def _finish(self, cart: Cart | None) -> Cart | None:
        if cart is None or not self.checkout_host or not cart.checkout_url:
            return cart
        return cart.model_copy(
            update={
                "checkout_url": rewrite_checkout_domain(cart.checkout_url, self.checkout_host)
            }
        )
