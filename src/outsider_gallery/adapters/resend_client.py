"""Resend transactional email client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx

from outsider_gallery.adapters.errors import EmailDeliveryError
from outsider_gallery.config import parse_recipients

_logger = logging.getLogger(__name__)


class EmailClient(Protocol):
    """Interface for sending notification emails."""

    async def send_email(
        self, to: str | None, subject: str, html: str, text: str
    ) -> bool:
        """Send an email; return False when delivery was skipped."""


@dataclass
class HttpxResendClient(EmailClient):
    """HTTPX-backed Resend client."""

    api_key: str | None
    from_email: str | None
    http_client: httpx.AsyncClient
    endpoint: str = "https://api.resend.com/emails"

    @classmethod
    def create(cls, api_key: str | None, from_email: str | None) -> "HttpxResendClient":
        """Create a Resend client with a managed httpx session."""
        return cls(api_key=api_key, from_email=from_email, http_client=httpx.AsyncClient())

    async def send_email(
        self, to: str | None, subject: str, html: str, text: str
    ) -> bool:
        """Send an email to a comma separated recipient list."""
        recipients = parse_recipients(to)
        if not self.api_key or not self.from_email or not recipients:
            _logger.warning(
                "Missing Resend configuration, skipping email notification.",
                extra={"component": "resend"},
            )
            return False
        try:
            response = await self.http_client.post(
                self.endpoint,
                headers={"Authorization": f"Bearer {self.api_key}"},
                json={
                    "from": self.from_email,
                    "to": recipients,
                    "subject": subject,
                    "html": html,
                    "text": text,
                },
                timeout=10,
            )
        except httpx.HTTPError as exc:
            raise EmailDeliveryError(f"Resend email failed: {exc}") from exc
        if response.is_error:
            raise EmailDeliveryError(
                f"Resend email failed: {response.status_code} "
                f"{response.reason_phrase} - {response.text}"
            )
        return True

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()
