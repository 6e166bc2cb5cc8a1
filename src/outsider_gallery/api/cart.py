"""Cart and checkout endpoints keyed by the cart cookie."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from outsider_gallery.adapters.errors import UpstreamError
from outsider_gallery.services.cart import CartUserError
from outsider_gallery.services.checkout import build_cart_permalink

if TYPE_CHECKING:
    from outsider_gallery.containers import AppContainer
    from outsider_gallery.domain.cart import Cart

CART_COOKIE = "outsider_cart_id"
CART_COOKIE_MAX_AGE = 60 * 60 * 24 * 30

_logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["cart"])


def _cart_response(cart: Cart | None, status_code: int = status.HTTP_200_OK) -> JSONResponse:
    body = {"cart": cart.model_dump(mode="json", by_alias=True) if cart else None}
    return JSONResponse(body, status_code=status_code)


def _error(message: str, status_code: int) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _set_cart_cookie(response: JSONResponse, cart_id: str) -> None:
    response.set_cookie(
        CART_COOKIE,
        cart_id,
        max_age=CART_COOKIE_MAX_AGE,
        path="/",
        httponly=True,
        samesite="lax",
    )


def _clear_cart_cookie(response: JSONResponse) -> None:
    response.delete_cookie(CART_COOKIE, path="/")


def _failure_message(exc: Exception, environment: str) -> str:
    if isinstance(exc, CartUserError):
        return str(exc) or "Cart request failed"
    if environment == "local":
        return f"Cart request failed: {exc}"
    return "Cart request failed"


@router.get("/cart")
async def get_cart(request: Request) -> JSONResponse:
    """Return the cart referenced by the cookie, or null."""
    container: AppContainer = request.app.state.container
    cart_id = request.cookies.get(CART_COOKIE)
    if not cart_id:
        return _cart_response(None)
    try:
        cart = await container.cart_service.fetch(cart_id)
    except UpstreamError:
        _logger.exception("Cart fetch failed", extra={"component": "cart.get"})
        response = _cart_response(None, status.HTTP_500_INTERNAL_SERVER_ERROR)
        _clear_cart_cookie(response)
        return response
    response = _cart_response(cart)
    if cart is None:
        _clear_cart_cookie(response)
    return response


@router.post("/cart")
async def cart_action(request: Request) -> JSONResponse:  # noqa: PLR0911
    """Dispatch a cart action: get, create, add, update, remove or clear."""
    container: AppContainer = request.app.state.container
    try:
        body = await request.json()
    except ValueError:
        return _error("Invalid JSON body", status.HTTP_400_BAD_REQUEST)
    if not isinstance(body, dict):
        body = {}

    cart_id = request.cookies.get(CART_COOKIE)
    service = container.cart_service
    action = body.get("action")
    new_cart_id: str | None = None
    try:
        if action == "get":
            if not cart_id:
                return _cart_response(None)
            cart = await service.fetch(cart_id)
            response = _cart_response(cart)
            if cart is None:
                _clear_cart_cookie(response)
            return response

        if action == "create":
            cart = await service.create()
            response = _cart_response(cart)
            if cart is not None:
                _set_cart_cookie(response, cart.id)
            return response

        if action == "add":
            lines = _list_of_dicts(body.get("lines"))
            if not lines or not all(line.get("merchandiseId") for line in lines):
                return _error("Missing merchandiseId in lines", status.HTTP_400_BAD_REQUEST)
            if not cart_id:
                created = await service.create()
                if created is None:
                    raise CartUserError("Unable to create cart")
                cart_id = new_cart_id = created.id
            cart = await service.add_lines(cart_id, lines)
            response = _cart_response(cart)
            if new_cart_id:
                _set_cart_cookie(response, new_cart_id)
            return response

        if action == "update":
            if not cart_id:
                return _error("Cart not found", status.HTTP_404_NOT_FOUND)
            updates = _list_of_dicts(body.get("updates"))
            if not updates:
                return _error("No updates provided", status.HTTP_400_BAD_REQUEST)
            return _cart_response(await service.update_lines(cart_id, updates))

        if action == "remove":
            if not cart_id:
                return _error("Cart not found", status.HTTP_404_NOT_FOUND)
            line_ids = [item for item in body.get("lineIds") or [] if isinstance(item, str)]
            if not line_ids:
                return _error("No lineIds provided", status.HTTP_400_BAD_REQUEST)
            return _cart_response(await service.remove_lines(cart_id, line_ids))

        if action == "clear":
            response = _cart_response(None)
            if cart_id:
                _clear_cart_cookie(response)
            return response
    except (CartUserError, UpstreamError) as exc:
        _logger.exception("Cart action %s failed", action, extra={"component": "cart.post"})
        response = _error(
            _failure_message(exc, container.settings.environment),
            status.HTTP_500_INTERNAL_SERVER_ERROR,
        )
        # A cart created before the failure stays referenced for the next attempt.
        if new_cart_id:
            _set_cart_cookie(response, new_cart_id)
        return response

    return _error("Unknown cart action", status.HTTP_400_BAD_REQUEST)


def _list_of_dicts(raw: Any) -> list[dict[str, Any]]:
    if not isinstance(raw, list):
        return []
    return [item for item in raw if isinstance(item, dict)]


@router.post("/checkout")
async def checkout(request: Request) -> RedirectResponse:
    """Redirect to a storefront cart permalink built from the posted lines."""
    container: AppContainer = request.app.state.container
    try:
        body = await request.json()
    except ValueError:
        body = None
    if not isinstance(body, dict):
        body = {}
    lines = _list_of_dicts(body.get("lines"))
    discount = body.get("discount") if isinstance(body.get("discount"), str) else None
    url = build_cart_permalink(lines, container.settings.storefront_domain, discount)
    return RedirectResponse(url, status_code=status.HTTP_302_FOUND)
