"""Mailchimp marketing API client."""

import hashlib
from dataclasses import dataclass
from typing import Protocol

import httpx

from outsider_gallery.adapters.errors import MailchimpError


class MailchimpClient(Protocol):
    """Interface for mailing list membership."""

    async def upsert_subscriber(
        self,
        email: str,
        first_name: str = "",
        last_name: str = "",
        status: str = "subscribed",
    ) -> None:
        """Add or update an audience member."""


def subscriber_hash(email: str) -> str:
    """Mailchimp member id: md5 of the lower-cased address."""
    return hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()  # noqa: S324


@dataclass
class HttpxMailchimpClient(MailchimpClient):
    """HTTPX-backed Mailchimp client for a single audience."""

    api_key: str | None
    audience_id: str | None
    data_center: str | None
    http_client: httpx.AsyncClient

    @classmethod
    def create(
        cls, api_key: str | None, audience_id: str | None, data_center: str | None
    ) -> "HttpxMailchimpClient":
        """Create a Mailchimp client with a managed httpx session."""
        return cls(
            api_key=api_key,
            audience_id=audience_id,
            data_center=data_center,
            http_client=httpx.AsyncClient(),
        )

    async def upsert_subscriber(
        self,
        email: str,
        first_name: str = "",
        last_name: str = "",
        status: str = "subscribed",
    ) -> None:
        """PUT the member so repeat sign-ups update instead of failing."""
        if not self.api_key or not self.audience_id or not self.data_center:
            raise MailchimpError("Mailchimp environment variables are not fully configured")
        url = (
            f"https://{self.data_center}.api.mailchimp.com/3.0/lists/"
            f"{self.audience_id}/members/{subscriber_hash(email)}"
        )
        payload = {
            "email_address": email,
            "status_if_new": status or "subscribed",
            "merge_fields": {"FNAME": first_name or "", "LNAME": last_name or ""},
        }
        try:
            response = await self.http_client.put(
                url,
                headers={"Authorization": f"apikey {self.api_key}"},
                json=payload,
                timeout=10,
            )
        except httpx.HTTPError as exc:
            raise MailchimpError(f"Mailchimp request failed: {exc}") from exc
        if response.is_error:
            raise MailchimpError(
                f"Mailchimp request failed: {response.status_code} "
                f"{response.reason_phrase} - {response.text}"
            )

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
