"""Errors raised by upstream service adapters."""


class UpstreamError(Exception):
    """An upstream dependency failed or rejected a request."""


class StorefrontError(UpstreamError):
    """Storefront GraphQL request failed or returned errors."""


class HubspotError(UpstreamError):
    """HubSpot CRM request failed."""

    def __init__(
        self, message: str, status: int | None = None, response_text: str = ""
    ) -> None:
        super().__init__(message)
        self.status = status
        self.response_text = response_text


class MailchimpError(UpstreamError):
    """Mailchimp request failed or the client is not configured."""


class EmailDeliveryError(UpstreamError):
    """Transactional email could not be sent."""
