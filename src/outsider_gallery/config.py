"""Application configuration."""

import logging
import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

_logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    shopify_store_domain: str
    shopify_storefront_token: str
    shopify_api_version: str = "2024-07"
    storefront_domain: str = "outsidergallery.au"
    site_url: str = "https://outsidergallery.au"
    catalog_cache_ttl_seconds: int = 60

    hubspot_private_app_token: str | None = None
    hubspot_contact_source_property: str | None = None
    hubspot_enquiry_source_property: str | None = None
    hubspot_newsletter_source_property: str | None = None
    hubspot_newsletter_opt_in_property: str | None = None
    hubspot_newsletter_subscription_id: str | None = None
    hubspot_newsletter_legal_basis: str | None = None
    hubspot_newsletter_legal_basis_explanation: str | None = None

    mailchimp_api_key: str | None = None
    mailchimp_audience_id: str | None = None
    mailchimp_dc: str | None = None

    resend_api_key: str | None = None
    resend_from_email: str | None = None
    contact_notification_email: str | None = None
    newsletter_notification_email: str | None = None
    enquiry_notification_email: str | None = None
    notify_via_resend: bool = False

    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def newsletter_recipients(self) -> str | None:
        return self.newsletter_notification_email or self.contact_notification_email

    @property
    def enquiry_recipients(self) -> str | None:
        return self.enquiry_notification_email or self.contact_notification_email


def parse_recipients(raw: str | None) -> list[str]:
    """Split a comma separated recipient list."""
    if not raw:
        return []
    return [chunk.strip() for chunk in raw.split(",") if chunk.strip()]


def resolve_mailchimp_dc(settings: Settings) -> str | None:
    """Return the Mailchimp data centre, derived from the API key when unset."""
    if settings.mailchimp_dc:
        return settings.mailchimp_dc.strip() or None
    key = settings.mailchimp_api_key or ""
    if "-" not in key:
        return None
    return key.rsplit("-", 1)[1].strip() or None


def parse_subscription_id(raw: str | None) -> int | None:
    """Parse the HubSpot newsletter subscription id."""
    if raw is None:
        return None
    cleaned = raw.strip()
    if not cleaned:
        return None
    if not cleaned.isdigit():
        _logger.warning(
            "HUBSPOT_NEWSLETTER_SUBSCRIPTION_ID must be numeric",
            extra={"component": "config"},
        )
        return None
    return int(cleaned)
