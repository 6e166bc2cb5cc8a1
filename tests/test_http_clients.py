"""Tests for HTTP-based adapters."""

import asyncio
import json

import httpx
import pytest
from fastapi.testclient import TestClient

from outsider_gallery.adapters.errors import (
    EmailDeliveryError,
    HubspotError,
    MailchimpError,
    StorefrontError,
)
from outsider_gallery.adapters.hubspot_client import HttpxHubspotClient
from outsider_gallery.adapters.mailchimp_client import HttpxMailchimpClient, subscriber_hash
from outsider_gallery.adapters.resend_client import HttpxResendClient
from outsider_gallery.adapters.shopify_client import HttpxStorefrontClient
from outsider_gallery.api.app import create_app
from outsider_gallery.services.cart import CartService

STOREFRONT_ENDPOINT = "https://shop.example.com/api/2024-07/graphql.json"


def _storefront(handler) -> HttpxStorefrontClient:  # type: ignore[no-untyped-def]
    return HttpxStorefrontClient(
        endpoint=STOREFRONT_ENDPOINT,
        access_token="storefront-token",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )


def test_storefront_client_posts_query_with_token() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["token"] = request.headers["X-Shopify-Storefront-Access-Token"]
        seen["body"] = json.loads(request.content.decode())
        return httpx.Response(200, json={"data": {"product": {"handle": "blue"}}})

    client = _storefront(handler)

    data = asyncio.run(client.execute("query { product }", {"handle": "blue"}))

    assert data == {"product": {"handle": "blue"}}
    assert seen["token"] == "storefront-token"
    assert seen["body"] == {"query": "query { product }", "variables": {"handle": "blue"}}


def test_storefront_client_create_builds_endpoint() -> None:
    client = HttpxStorefrontClient.create("shop.example.com", "token", api_version="2025-01")

    assert client.endpoint == "https://shop.example.com/api/2025-01/graphql.json"
    asyncio.run(client.close())


def test_storefront_client_raises_on_http_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, text="Unauthorized token")

    client = _storefront(handler)

    with pytest.raises(StorefrontError, match="Shopify fetch failed: 401 Unauthorized"):
        asyncio.run(client.execute("query { shop { name } }"))


def test_storefront_client_raises_on_graphql_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(
            200, json={"errors": [{"message": "Field missing"}, {"message": "Throttled"}]}
        )

    client = _storefront(handler)

    with pytest.raises(StorefrontError, match="Shopify GraphQL errors: Field missing; Throttled"):
        asyncio.run(client.execute("query { shop { name } }"))


def test_hubspot_upsert_falls_back_to_create() -> None:
    calls: list[tuple[str, str]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        calls.append((request.method, request.url.path))
        assert request.headers["Authorization"] == "Bearer hs-token"
        if request.method == "PATCH":
            return httpx.Response(404, json={"message": "Not found"})
        return httpx.Response(201, json={"id": "501"})

    client = HttpxHubspotClient(
        access_token="hs-token",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    asyncio.run(client.upsert_contact({"email": "ada@example.com", "firstname": "Ada"}))

    assert calls == [
        ("PATCH", "/crm/v3/objects/contacts/ada@example.com"),
        ("POST", "/crm/v3/objects/contacts"),
    ]


def test_hubspot_note_is_associated_with_contact() -> None:
    payloads: list[dict[str, object]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(200, json={"id": "501"})
        payloads.append(json.loads(request.content.decode()))
        return httpx.Response(201, json={"id": "900"})

    client = HttpxHubspotClient(
        access_token="hs-token",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    async def run() -> None:
        contact_id = await client.get_contact_id_by_email("ada@example.com")
        await client.create_contact_note(contact_id, "Hello")

    asyncio.run(run())

    note = payloads[0]
    assert note["properties"]["hs_note_body"] == "Hello"  # type: ignore[index]
    association = note["associations"][0]  # type: ignore[index]
    assert association["to"] == {"id": "501"}
    assert association["types"][0]["associationTypeId"] == 202


def test_hubspot_unknown_contact_and_missing_token() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(404)

    transport = httpx.MockTransport(handler)
    client = HttpxHubspotClient(
        access_token="hs-token", http_client=httpx.AsyncClient(transport=transport)
    )
    unauthenticated = HttpxHubspotClient(
        access_token=None, http_client=httpx.AsyncClient(transport=transport)
    )

    assert asyncio.run(client.get_contact_id_by_email("nobody@example.com")) is None
    with pytest.raises(HubspotError, match="HUBSPOT_PRIVATE_APP_TOKEN is not set"):
        asyncio.run(unauthenticated.upsert_contact({"email": "ada@example.com"}))


def test_hubspot_subscription_status_payload() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["path"] = request.url.path
        seen["body"] = json.loads(request.content.decode())
        return httpx.Response(200, json={})

    client = HttpxHubspotClient(
        access_token="hs-token",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    asyncio.run(
        client.update_email_subscription_status("ada@example.com", 77, "LEGITIMATE_INTEREST_PQL")
    )

    assert seen["path"] == "/communication-preferences/v3/status/email/ada@example.com"
    assert seen["body"] == {
        "subscriptionStatuses": [
            {"id": 77, "subscribed": True, "legalBasis": "LEGITIMATE_INTEREST_PQL"}
        ]
    }


def test_mailchimp_upsert_uses_member_hash() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["method"] = request.method
        seen["url"] = str(request.url)
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content.decode())
        return httpx.Response(200, json={"id": "member"})

    client = HttpxMailchimpClient(
        api_key="key-us21",
        audience_id="list1",
        data_center="us21",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    asyncio.run(client.upsert_subscriber("Ada@Example.com", "Ada"))

    member = subscriber_hash("ada@example.com")
    assert seen["method"] == "PUT"
    assert seen["url"] == f"https://us21.api.mailchimp.com/3.0/lists/list1/members/{member}"
    assert seen["auth"] == "apikey key-us21"
    assert seen["body"] == {
        "email_address": "Ada@Example.com",
        "status_if_new": "subscribed",
        "merge_fields": {"FNAME": "Ada", "LNAME": ""},
    }


def test_mailchimp_errors() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(400, text="Invalid Resource")

    transport = httpx.MockTransport(handler)
    client = HttpxMailchimpClient(
        api_key="key-us21",
        audience_id="list1",
        data_center="us21",
        http_client=httpx.AsyncClient(transport=transport),
    )
    unconfigured = HttpxMailchimpClient(
        api_key=None,
        audience_id="list1",
        data_center=None,
        http_client=httpx.AsyncClient(transport=transport),
    )

    with pytest.raises(MailchimpError, match="400 Bad Request - Invalid Resource"):
        asyncio.run(client.upsert_subscriber("ada@example.com"))
    with pytest.raises(MailchimpError, match="not fully configured"):
        asyncio.run(unconfigured.upsert_subscriber("ada@example.com"))


def test_resend_sends_to_recipient_list() -> None:
    seen: dict[str, object] = {}

    def handler(request: httpx.Request) -> httpx.Response:
        seen["auth"] = request.headers["Authorization"]
        seen["body"] = json.loads(request.content.decode())
        return httpx.Response(200, json={"id": "email-1"})

    client = HttpxResendClient(
        api_key="re-key",
        from_email="Gallery <hello@outsidergallery.au>",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    sent = asyncio.run(
        client.send_email("a@example.com, b@example.com", "Subject", "<p>Hi</p>", "Hi")
    )

    assert sent is True
    assert seen["auth"] == "Bearer re-key"
    assert seen["body"]["to"] == ["a@example.com", "b@example.com"]  # type: ignore[index]


def test_resend_skips_without_configuration_and_raises_on_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(422, text="Invalid from address")

    transport = httpx.MockTransport(handler)
    unconfigured = HttpxResendClient(
        api_key=None, from_email=None, http_client=httpx.AsyncClient(transport=transport)
    )
    failing = HttpxResendClient(
        api_key="re-key",
        from_email="hello@outsidergallery.au",
        http_client=httpx.AsyncClient(transport=transport),
    )

    assert asyncio.run(unconfigured.send_email("a@example.com", "S", "<p>h</p>", "h")) is False
    with pytest.raises(EmailDeliveryError, match="Resend email failed: 422"):
        asyncio.run(failing.send_email("a@example.com", "S", "<p>h</p>", "h"))


def test_storefront_client_rejects_malformed_body() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        if "ShopName" in request.content.decode():
            return httpx.Response(200, text="<html>maintenance</html>")
        return httpx.Response(200, json=["not", "an", "object"])

    client = _storefront(handler)

    with pytest.raises(StorefrontError, match="invalid JSON"):
        asyncio.run(client.execute("query ShopName { shop { name } }"))
    with pytest.raises(StorefrontError, match="unexpected response body"):
        asyncio.run(client.execute("query { shop { name } }"))


def test_hubspot_invalid_json_raises_hubspot_error() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>gateway</html>")

    client = HttpxHubspotClient(
        access_token="hs-token",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )

    with pytest.raises(HubspotError, match="invalid JSON"):
        asyncio.run(client.get_contact_id_by_email("ada@example.com"))


def test_cart_endpoint_reports_malformed_storefront_body(container) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, text="<html>maintenance</html>")

    container.cart_service = CartService(
        client=_storefront(handler), checkout_host="outsidergallery.au"
    )
    client = TestClient(create_app(container))

    response = client.post("/api/cart", json={"action": "create"})

    assert response.status_code == 500
    assert response.json() == {"error": "Cart request failed"}
