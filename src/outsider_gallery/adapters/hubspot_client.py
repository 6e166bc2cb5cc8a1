"""HubSpot CRM API client."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Protocol
from urllib.parse import quote

import httpx

from outsider_gallery.adapters.errors import HubspotError

_NOTE_TO_CONTACT_ASSOCIATION = 202
_NOT_FOUND = 404


class HubspotClient(Protocol):
    """Interface for HubSpot contact and note operations."""

    async def upsert_contact(self, properties: dict[str, str]) -> None:
        """Update a contact by email, creating it when missing."""

    async def get_contact_id_by_email(self, email: str) -> str | None:
        """Return the contact id for an email, or None if unknown."""

    async def create_contact_note(self, contact_id: str | None, body: str) -> None:
        """Create a note, associated with the contact when an id is known."""

    async def update_email_subscription_status(
        self,
        email: str,
        subscription_id: int,
        legal_basis: str | None = None,
        legal_basis_explanation: str | None = None,
    ) -> None:
        """Mark an email as subscribed to a subscription type."""


@dataclass
class HttpxHubspotClient(HubspotClient):
    """HTTPX-backed HubSpot client authenticated with a private app token."""

    access_token: str | None
    http_client: httpx.AsyncClient
    base_url: str = "https://api.hubapi.com"

    @classmethod
    def create(cls, access_token: str | None) -> "HttpxHubspotClient":
        """Create a HubSpot client with a managed httpx session."""
        return cls(access_token=access_token, http_client=httpx.AsyncClient())

    async def _request(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> dict[str, Any] | None:
        if not self.access_token:
            raise HubspotError("HUBSPOT_PRIVATE_APP_TOKEN is not set")
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                headers={"Authorization": f"Bearer {self.access_token}"},
                json=payload,
                timeout=10,
            )
        except httpx.HTTPError as exc:
            raise HubspotError(f"HubSpot request failed: {exc}") from exc
        if response.is_error:
            raise HubspotError(
                f"HubSpot request failed: {response.status_code} {response.reason_phrase}",
                status=response.status_code,
                response_text=response.text,
            )
        if response.status_code == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise HubspotError(
                "HubSpot returned invalid JSON",
                status=response.status_code,
                response_text=response.text,
            ) from exc

    @staticmethod
    def _contact_path(email: str) -> str:
        return f"/crm/v3/objects/contacts/{quote(email, safe='')}?idProperty=email"

    async def upsert_contact(self, properties: dict[str, str]) -> None:
        """PATCH the contact by email; POST a new one on 404."""
        email = properties.get("email")
        if not email:
            raise ValueError("upsert_contact requires an email")
        try:
            await self._request(
                "PATCH", self._contact_path(email), {"properties": properties}
            )
        except HubspotError as exc:
            if exc.status != _NOT_FOUND:
                raise
            await self._request(
                "POST", "/crm/v3/objects/contacts", {"properties": properties}
            )

    async def get_contact_id_by_email(self, email: str) -> str | None:
        try:
            contact = await self._request("GET", self._contact_path(email))
        except HubspotError as exc:
            if exc.status == _NOT_FOUND:
                return None
            raise
        return (contact or {}).get("id")

    async def create_contact_note(self, contact_id: str | None, body: str) -> None:
        payload: dict[str, Any] = {
            "properties": {
                "hs_note_body": body,
                "hs_timestamp": datetime.now(tz=UTC).isoformat(timespec="milliseconds"),
            }
        }
        if contact_id:
            payload["associations"] = [
                {
                    "to": {"id": contact_id},
                    "types": [
                        {
                            "associationCategory": "HUBSPOT_DEFINED",
                            "associationTypeId": _NOTE_TO_CONTACT_ASSOCIATION,
                        }
                    ],
                }
            ]
        await self._request("POST", "/crm/v3/objects/notes", payload)

    async def update_email_subscription_status(
        self,
        email: str,
        subscription_id: int,
        legal_basis: str | None = None,
        legal_basis_explanation: str | None = None,
    ) -> None:
        if not email:
            raise ValueError("email is required")
        status: dict[str, Any] = {"id": subscription_id, "subscribed": True}
        if legal_basis:
            status["legalBasis"] = legal_basis
        if legal_basis_explanation:
            status["legalBasisExplanation"] = legal_basis_explanation
        await self._request(
            "PUT",
            f"/communication-preferences/v3/status/email/{quote(email, safe='')}",
            {"subscriptionStatuses": [status]},
        )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
