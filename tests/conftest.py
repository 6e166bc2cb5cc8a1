"""Shared test fixtures."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import pytest

from outsider_gallery.adapters.errors import (
    EmailDeliveryError,
    HubspotError,
    MailchimpError,
    StorefrontError,
)
from outsider_gallery.adapters.hubspot_client import HubspotClient
from outsider_gallery.adapters.mailchimp_client import MailchimpClient
from outsider_gallery.adapters.resend_client import EmailClient
from outsider_gallery.adapters.shopify_client import StorefrontClient
from outsider_gallery.config import Settings
from outsider_gallery.containers import AppContainer
from outsider_gallery.services.about import AboutService
from outsider_gallery.services.artists import ArtistService
from outsider_gallery.services.artworks import ArtworkService
from outsider_gallery.services.cart import (
    ADD_LINES_MUTATION,
    CART_QUERY,
    CREATE_MUTATION,
    REMOVE_LINES_MUTATION,
    UPDATE_LINES_MUTATION,
    CartService,
)
from outsider_gallery.services.exhibitions import ExhibitionService
from outsider_gallery.services.leads import HubspotFieldOptions, LeadService
from outsider_gallery.services.notifications import NotificationService
from outsider_gallery.services.sitemap import SitemapService
from outsider_gallery.services.stockroom import StockroomService

CHECKOUT_HOST = "outsider-gallery.myshopify.com"
UNIT_PRICE = 1200


def text_field(key: str, value: str, type_: str = "single_line_text_field") -> dict[str, Any]:
    return {"key": key, "type": type_, "value": value, "reference": None, "references": None}


def image_ref(url: str, width: int = 800, height: int = 600) -> dict[str, Any]:
    return {
        "__typename": "MediaImage",
        "image": {"url": url, "width": width, "height": height, "altText": None},
    }


def metaobject_ref(handle: str, fields: list[dict[str, Any]] | None = None) -> dict[str, Any]:
    return {"__typename": "Metaobject", "handle": handle, "type": "artist", "fields": fields or []}


def exhibition_node(  # noqa: PLR0913
    handle: str,
    title: str,
    artist: str | None = None,
    start: str | None = None,
    end: str | None = None,
    status: str | None = None,
    extra: list[dict[str, Any]] | None = None,
) -> dict[str, Any]:
    fields = [text_field("title", title)]
    if artist:
        fields.append(text_field("artist", artist))
    if start:
        fields.append(text_field("startDate", start, "date"))
    if end:
        fields.append(text_field("endDate", end, "date"))
    if status:
        fields.append(text_field("status", status))
    return {
        "handle": handle,
        "type": "exhibitions",
        "updatedAt": "2025-01-10T09:30:00Z",
        "fields": fields + (extra or []),
    }


def artist_node(
    handle: str, name: str, sortkey: str | None = None, status: str | None = None
) -> dict[str, Any]:
    fields = [text_field("name", name)]
    if sortkey:
        fields.append(text_field("sortkey", sortkey))
    if status:
        fields.append(text_field("status", status))
    return {
        "handle": handle,
        "type": "artist",
        "updatedAt": "2025-02-01T00:00:00Z",
        "fields": fields,
    }


def product_node(  # noqa: PLR0913
    handle: str,
    title: str,
    artist: str = "Jane Doe",
    price: str = "1200.0",
    available: bool = True,
    status: str | None = None,
    exhibitions: list[str] | None = None,
    size: tuple[int, int] = (800, 600),
    metafields: dict[str, Any] | None = None,
) -> dict[str, Any]:
    width, height = size
    node: dict[str, Any] = {
        "id": f"gid://shopify/Product/{handle}",
        "handle": handle,
        "title": title,
        "vendor": artist,
        "availableForSale": available,
        "onlineStoreUrl": f"https://{CHECKOUT_HOST}/products/{handle}",
        "updatedAt": "2025-03-01T12:00:00Z",
        "featuredImage": {
            "url": f"https://cdn.example.com/{handle}.jpg",
            "width": width,
            "height": height,
            "altText": title,
        },
        "images": {"nodes": []},
        "priceRange": {"minVariantPrice": {"amount": price, "currencyCode": "AUD"}},
        "variants": {
            "nodes": [
                {
                    "id": f"gid://shopify/ProductVariant/{handle}-1",
                    "title": "Default Title",
                    "availableForSale": available,
                    "quantityAvailable": 1 if available else 0,
                }
            ]
        },
        "artistField": {"key": "artist", "type": "single_line_text_field", "value": artist},
    }
    if status:
        node["statusField"] = {"key": "status", "type": "single_line_text_field", "value": status}
    if exhibitions:
        node["exhibitionsField"] = {
            "key": "exhibitions",
            "type": "list.metaobject_reference",
            "value": None,
            "references": {
                "nodes": [
                    {"__typename": "Metaobject", "handle": slug, "type": "exhibitions", "fields": []}
                    for slug in exhibitions
                ]
            },
        }
    node.update(metafields or {})
    return node


def nodes(key: str, items: list[dict[str, Any]]) -> dict[str, Any]:
    return {key: {"nodes": items}}


@dataclass
class FakeStorefrontClient(StorefrontClient):
    """Storefront fake with canned catalog responses and an in-memory cart API."""

    responses: dict[str, dict[str, Any]] = field(default_factory=dict)
    failing: set[str] = field(default_factory=set)
    calls: list[tuple[str, dict[str, Any]]] = field(default_factory=list)
    carts: dict[str, list[dict[str, Any]]] = field(default_factory=dict)
    user_errors: list[str] = field(default_factory=list)
    _sequence: int = 0

    async def execute(
        self, query: str, variables: Mapping[str, Any] | None = None
    ) -> dict[str, Any]:
        params = dict(variables or {})
        self.calls.append((query, params))
        if query in self.failing:
            raise StorefrontError("Shopify fetch failed: 503 Service Unavailable")
        if query in self.responses:
            return self.responses[query]
        if query == CREATE_MUTATION:
            return self._create(params)
        if query == CART_QUERY:
            return {"cart": self._payload(params["id"])}
        if query == ADD_LINES_MUTATION:
            return self._mutate("cartLinesAdd", params["cartId"], self._add, params["lines"])
        if query == UPDATE_LINES_MUTATION:
            return self._mutate("cartLinesUpdate", params["cartId"], self._update, params["lines"])
        if query == REMOVE_LINES_MUTATION:
            return self._mutate(
                "cartLinesRemove", params["cartId"], self._remove, params["lineIds"]
            )
        return {}

    def _next_id(self, prefix: str) -> str:
        self._sequence += 1
        return f"{prefix}-{self._sequence}"

    def _create(self, params: dict[str, Any]) -> dict[str, Any]:
        cart_id = self._next_id("cart")
        self.carts[cart_id] = []
        self._add(cart_id, ((params.get("input") or {}).get("lines")) or [])
        return {"cartCreate": {"cart": self._payload(cart_id), "userErrors": []}}

    def _mutate(self, root: str, cart_id: str, apply: Any, argument: Any) -> dict[str, Any]:
        if self.user_errors:
            errors = [{"field": ["lines"], "message": message} for message in self.user_errors]
            return {root: {"cart": None, "userErrors": errors}}
        if cart_id not in self.carts:
            errors = [{"field": ["cartId"], "message": "The specified cart does not exist."}]
            return {root: {"cart": None, "userErrors": errors}}
        apply(cart_id, argument)
        return {root: {"cart": self._payload(cart_id), "userErrors": []}}

    def _add(self, cart_id: str, lines: list[dict[str, Any]]) -> None:
        for line in lines:
            self.carts[cart_id].append(
                {
                    "id": self._next_id("line"),
                    "merchandiseId": line["merchandiseId"],
                    "quantity": line.get("quantity") or 1,
                }
            )

    def _update(self, cart_id: str, updates: list[dict[str, Any]]) -> None:
        quantities = {update["id"]: update.get("quantity", 0) for update in updates}
        lines = self.carts[cart_id]
        for line in lines:
            if line["id"] in quantities:
                line["quantity"] = quantities[line["id"]]
        self.carts[cart_id] = [line for line in lines if line["quantity"] > 0]

    def _remove(self, cart_id: str, line_ids: list[str]) -> None:
        self.carts[cart_id] = [
            line for line in self.carts[cart_id] if line["id"] not in line_ids
        ]

    def _payload(self, cart_id: str) -> dict[str, Any] | None:
        lines = self.carts.get(cart_id)
        if lines is None:
            return None
        total = sum(line["quantity"] for line in lines) * UNIT_PRICE
        money = {"amount": f"{total}.0", "currencyCode": "AUD"}
        return {
            "id": cart_id,
            "checkoutUrl": f"https://{CHECKOUT_HOST}/cart/c/{cart_id}?key=secret",
            "totalQuantity": sum(line["quantity"] for line in lines),
            "cost": {"subtotalAmount": money, "totalAmount": money},
            "lines": {
                "nodes": [
                    {
                        "id": line["id"],
                        "quantity": line["quantity"],
                        "cost": {
                            "totalAmount": {
                                "amount": f"{line['quantity'] * UNIT_PRICE}.0",
                                "currencyCode": "AUD",
                            }
                        },
                        "merchandise": {
                            "id": line["merchandiseId"],
                            "title": "Default Title",
                            "availableForSale": True,
                            "price": {"amount": f"{UNIT_PRICE}.0", "currencyCode": "AUD"},
                            "product": {
                                "id": "gid://shopify/Product/1",
                                "title": "Blue Horizon",
                                "handle": "blue-horizon",
                                "featuredImage": None,
                                "vendor": "Jane Doe",
                                "artistField": {"value": "Jane Doe"},
                                "yearField": {"value": "2024"},
                                "mediumField": None,
                                "dimensionsField": None,
                            },
                        },
                    }
                    for line in lines
                ]
            },
        }


@dataclass
class FakeHubspotClient(HubspotClient):
    """Records CRM writes; operations named in ``failing`` raise."""

    contacts: dict[str, dict[str, str]] = field(default_factory=dict)
    notes: list[tuple[str | None, str]] = field(default_factory=list)
    subscriptions: list[tuple[str, int, str | None, str | None]] = field(default_factory=list)
    failing: set[str] = field(default_factory=set)

    def _check(self, operation: str) -> None:
        if operation in self.failing:
            raise HubspotError(
                "HubSpot request failed: 500 Internal Server Error", status=500
            )

    async def upsert_contact(self, properties: dict[str, str]) -> None:
        self._check("upsert")
        email = properties["email"]
        self.contacts[email] = {**self.contacts.get(email, {}), **properties}

    async def get_contact_id_by_email(self, email: str) -> str | None:
        return f"contact-{email}" if email in self.contacts else None

    async def create_contact_note(self, contact_id: str | None, body: str) -> None:
        self._check("note")
        self.notes.append((contact_id, body))

    async def update_email_subscription_status(
        self,
        email: str,
        subscription_id: int,
        legal_basis: str | None = None,
        legal_basis_explanation: str | None = None,
    ) -> None:
        self._check("subscription")
        self.subscriptions.append(
            (email, subscription_id, legal_basis, legal_basis_explanation)
        )


@dataclass
class FakeMailchimpClient(MailchimpClient):
    subscribers: list[tuple[str, str, str]] = field(default_factory=list)
    fail: bool = False

    async def upsert_subscriber(
        self,
        email: str,
        first_name: str = "",
        last_name: str = "",
        status: str = "subscribed",
    ) -> None:
        if self.fail:
            raise MailchimpError("Mailchimp request failed: 400 Bad Request - Member Exists")
        self.subscribers.append((email, first_name, last_name))


@dataclass
class FakeEmailClient(EmailClient):
    sent: list[dict[str, str | None]] = field(default_factory=list)
    fail: bool = False

    async def send_email(
        self, to: str | None, subject: str, html: str, text: str
    ) -> bool:
        if self.fail:
            raise EmailDeliveryError("Resend email failed: 422 Unprocessable Entity")
        self.sent.append({"to": to, "subject": subject, "html": html, "text": text})
        return True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        shopify_store_domain=CHECKOUT_HOST,
        shopify_storefront_token="storefront-token",
        storefront_domain="outsidergallery.au",
        site_url="https://outsidergallery.au",
        contact_notification_email="team@outsidergallery.au",
        environment="test",
    )


@pytest.fixture
def storefront() -> FakeStorefrontClient:
    return FakeStorefrontClient()


@pytest.fixture
def hubspot() -> FakeHubspotClient:
    return FakeHubspotClient()


@pytest.fixture
def mailchimp() -> FakeMailchimpClient:
    return FakeMailchimpClient()


@pytest.fixture
def email_client() -> FakeEmailClient:
    return FakeEmailClient()


@pytest.fixture
def lead_options() -> HubspotFieldOptions:
    return HubspotFieldOptions(
        contact_source_property="lead_source",
        enquiry_source_property="lead_source",
        newsletter_source_property="lead_source",
        newsletter_opt_in_property="newsletter_opt_in",
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    storefront: FakeStorefrontClient,
    hubspot: FakeHubspotClient,
    mailchimp: FakeMailchimpClient,
    email_client: FakeEmailClient,
    lead_options: HubspotFieldOptions,
) -> AppContainer:
    notification_service = NotificationService(
        email_client=email_client,
        contact_recipients=settings.contact_notification_email,
        newsletter_recipients=settings.newsletter_recipients,
        enquiry_recipients=settings.enquiry_recipients,
    )
    lead_service = LeadService(
        hubspot=hubspot,
        mailchimp=mailchimp,
        notifications=notification_service,
        options=lead_options,
        notify_via_resend=settings.notify_via_resend,
    )
    artwork_service = ArtworkService(storefront)
    exhibition_service = ExhibitionService(client=storefront, artworks=artwork_service)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        cart_service=CartService(client=storefront, checkout_host=settings.storefront_domain),
        lead_service=lead_service,
        exhibition_service=exhibition_service,
        artwork_service=artwork_service,
        artist_service=ArtistService(
            client=storefront, artworks=artwork_service, exhibitions=exhibition_service
        ),
        stockroom_service=StockroomService(storefront),
        about_service=AboutService(storefront),
        sitemap_service=SitemapService(client=storefront, site_url=settings.site_url),
        close_resources=close_resources,
    )
