"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from outsider_gallery.adapters.hubspot_client import HttpxHubspotClient
from outsider_gallery.adapters.mailchimp_client import HttpxMailchimpClient
from outsider_gallery.adapters.resend_client import HttpxResendClient
from outsider_gallery.adapters.shopify_client import HttpxStorefrontClient
from outsider_gallery.config import Settings, parse_subscription_id, resolve_mailchimp_dc
from outsider_gallery.services.about import AboutService
from outsider_gallery.services.artists import ArtistService
from outsider_gallery.services.artworks import ArtworkService
from outsider_gallery.services.cache import CachingStorefrontClient, InMemoryCache
from outsider_gallery.services.cart import CartService
from outsider_gallery.services.exhibitions import ExhibitionService
from outsider_gallery.services.leads import HubspotFieldOptions, LeadService
from outsider_gallery.services.notifications import NotificationService
from outsider_gallery.services.sitemap import SitemapService
from outsider_gallery.services.stockroom import StockroomService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    cart_service: CartService
    lead_service: LeadService
    exhibition_service: ExhibitionService
    artwork_service: ArtworkService
    artist_service: ArtistService
    stockroom_service: StockroomService
    about_service: AboutService
    sitemap_service: SitemapService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    storefront_client = HttpxStorefrontClient.create(
        store_domain=resolved_settings.shopify_store_domain,
        access_token=resolved_settings.shopify_storefront_token,
        api_version=resolved_settings.shopify_api_version,
    )
    catalog_client = CachingStorefrontClient(
        client=storefront_client,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.catalog_cache_ttl_seconds,
    )
    hubspot_client = HttpxHubspotClient.create(resolved_settings.hubspot_private_app_token)
    mailchimp_client = HttpxMailchimpClient.create(
        api_key=resolved_settings.mailchimp_api_key,
        audience_id=resolved_settings.mailchimp_audience_id,
        data_center=resolve_mailchimp_dc(resolved_settings),
    )
    resend_client = HttpxResendClient.create(
        api_key=resolved_settings.resend_api_key,
        from_email=resolved_settings.resend_from_email,
    )

    notification_service = NotificationService(
        email_client=resend_client,
        contact_recipients=resolved_settings.contact_notification_email,
        newsletter_recipients=resolved_settings.newsletter_recipients,
        enquiry_recipients=resolved_settings.enquiry_recipients,
    )
    lead_service = LeadService(
        hubspot=hubspot_client,
        mailchimp=mailchimp_client,
        notifications=notification_service,
        options=HubspotFieldOptions(
            contact_source_property=resolved_settings.hubspot_contact_source_property,
            enquiry_source_property=resolved_settings.hubspot_enquiry_source_property,
            newsletter_source_property=resolved_settings.hubspot_newsletter_source_property,
            newsletter_opt_in_property=resolved_settings.hubspot_newsletter_opt_in_property,
            newsletter_subscription_id=parse_subscription_id(
                resolved_settings.hubspot_newsletter_subscription_id
            ),
            legal_basis=resolved_settings.hubspot_newsletter_legal_basis,
            legal_basis_explanation=(
                resolved_settings.hubspot_newsletter_legal_basis_explanation
            ),
        ),
        notify_via_resend=resolved_settings.notify_via_resend,
    )
    cart_service = CartService(
        client=storefront_client, checkout_host=resolved_settings.storefront_domain
    )
    artwork_service = ArtworkService(catalog_client)
    exhibition_service = ExhibitionService(client=catalog_client, artworks=artwork_service)
    artist_service = ArtistService(
        client=catalog_client, artworks=artwork_service, exhibitions=exhibition_service
    )

    async def close_resources() -> None:
        await storefront_client.close()
        await hubspot_client.close()
        await mailchimp_client.close()
        await resend_client.close()

    return AppContainer(
        settings=resolved_settings,
        cart_service=cart_service,
        lead_service=lead_service,
        exhibition_service=exhibition_service,
        artwork_service=artwork_service,
        artist_service=artist_service,
        stockroom_service=StockroomService(catalog_client),
        about_service=AboutService(catalog_client),
        sitemap_service=SitemapService(
            client=catalog_client, site_url=resolved_settings.site_url
        ),
        close_resources=close_resources,
    )
