"""Lead capture: CRM, mailing list and internal notifications."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from outsider_gallery.adapters.hubspot_client import HubspotClient
from outsider_gallery.adapters.mailchimp_client import MailchimpClient
from outsider_gallery.domain.leads import (
    ContactForm,
    EnquiryForm,
    SubmissionReport,
    SubscribeForm,
)
from outsider_gallery.services.notifications import NotificationService

_logger = logging.getLogger(__name__)

CONTACT_SOURCE = "about-contact-form"
ENQUIRY_SOURCE = "artwork-enquiry"
NEWSLETTER_SOURCE = "newsletter-footer"

CONTACT_SUCCESS = "Thank you for reaching out. Our team will reply soon."
ENQUIRY_SUCCESS = "Thanks for contacting our team. We will be in touch soon."
SUBSCRIBE_SUCCESS = "Thanks for joining our mailing list. We'll keep you updated."

CONTACT_FAILURE = "Unable to send enquiry right now. Please try again later."
ENQUIRY_FAILURE = "Unable to send enquiry right now. Please try again later."
SUBSCRIBE_FAILURE = "Unable to subscribe right now. Please try again later."


@dataclass(frozen=True)
class HubspotFieldOptions:
    """Optional contact property names and newsletter subscription details."""

    contact_source_property: str | None = None
    enquiry_source_property: str | None = None
    newsletter_source_property: str | None = None
    newsletter_opt_in_property: str | None = None
    newsletter_subscription_id: int | None = None
    legal_basis: str | None = None
    legal_basis_explanation: str | None = None


@dataclass
class _Submission:
    """Runs named steps in order and collects their outcome."""

    form_name: str
    warnings: list[str]

    async def required(self, step: str, action: Callable[[], Awaitable[object]]) -> bool:
        component = f"{self.form_name}.{step}"
        _logger.info("%s attempt", component, extra={"component": component})
        try:
            await action()
        except Exception:
            _logger.exception("%s failed", component, extra={"component": component})
            return False
        _logger.info("%s success", component, extra={"component": component})
        return True

    async def optional(
        self, step: str, action: Callable[[], Awaitable[object]], warning: str
    ) -> None:
        if not await self.required(step, action):
            self.warnings.append(warning)


@dataclass
class LeadService:
    """Handles contact, artwork enquiry and newsletter submissions."""

    hubspot: HubspotClient
    mailchimp: MailchimpClient
    notifications: NotificationService
    options: HubspotFieldOptions
    notify_via_resend: bool = False

    def _properties(
        self,
        email: str,
        first_name: str,
        last_name: str,
        source_property: str | None,
        source: str,
        opt_in: bool,
    ) -> dict[str, str]:
        properties = {"email": email}
        if first_name:
            properties["firstname"] = first_name
        if last_name:
            properties["lastname"] = last_name
        if source_property:
            properties[source_property] = source
        if opt_in and self.options.newsletter_opt_in_property:
            properties[self.options.newsletter_opt_in_property] = "true"
        return properties

    async def _write_note(self, email: str, body: str) -> None:
        contact_id = await self.hubspot.get_contact_id_by_email(email)
        await self.hubspot.create_contact_note(contact_id, body)

    async def submit_contact(self, form: ContactForm) -> SubmissionReport:
        """Record an about-page contact message."""
        run = _Submission("contact", [])
        properties = self._properties(
            form.email,
            form.first_name,
            form.last_name,
            self.options.contact_source_property,
            CONTACT_SOURCE,
            form.subscribe,
        )
        if not await run.required(
            "hubspot-contact", lambda: self.hubspot.upsert_contact(properties)
        ):
            return SubmissionReport(fatal=CONTACT_FAILURE)

        note = (
            "About page contact form submission:\n\n"
            f"Name: {form.name}\nEmail: {form.email}\n\nMessage:\n{form.message}"
        )
        await run.optional(
            "note",
            lambda: self._write_note(form.email, note),
            "We saved your contact details but couldn't log your message.",
        )
        if form.subscribe:
            await run.optional(
                "mailchimp",
                lambda: self.mailchimp.upsert_subscriber(
                    form.email, form.first_name, form.last_name
                ),
                "We saved your enquiry but couldn't add you to the mailing list. "
                "Please try subscribing again later.",
            )
        if self.notify_via_resend:
            await run.optional(
                "notify",
                lambda: self.notifications.notify_contact(form),
                "We saved your enquiry but couldn't send the internal notification email.",
            )
        else:
            _logger.info("contact.notify skipped", extra={"component": "contact.notify"})
        return SubmissionReport(warnings=run.warnings)

    async def submit_enquiry(self, form: EnquiryForm) -> SubmissionReport:
        """Record an enquiry about a specific artwork."""
        run = _Submission("enquiry", [])
        properties = self._properties(
            form.email,
            form.first_name,
            form.last_name,
            self.options.enquiry_source_property,
            ENQUIRY_SOURCE,
            form.subscribe,
        )
        if form.phone:
            properties["phone"] = form.phone
        if not await run.required(
            "hubspot-contact", lambda: self.hubspot.upsert_contact(properties)
        ):
            return SubmissionReport(fatal=ENQUIRY_FAILURE)

        await run.optional(
            "note",
            lambda: self._write_note(form.email, enquiry_note(form)),
            "We saved your contact details but couldn't log the artwork enquiry.",
        )
        if form.subscribe:
            await run.optional(
                "mailchimp",
                lambda: self.mailchimp.upsert_subscriber(
                    form.email, form.first_name, form.last_name
                ),
                "We couldn't add you to the mailing list. Please try subscribing again later.",
            )
        await run.optional(
            "notify",
            lambda: self.notifications.notify_enquiry(form),
            "We logged your enquiry but couldn't send the internal notification email.",
        )
        return SubmissionReport(warnings=run.warnings)

    async def submit_subscribe(self, form: SubscribeForm) -> SubmissionReport:
        """Sign an email address up to the newsletter."""
        run = _Submission("subscribe", [])
        properties = self._properties(
            form.email,
            form.first_name,
            form.last_name,
            self.options.newsletter_source_property,
            NEWSLETTER_SOURCE,
            True,
        )
        if not await run.required(
            "hubspot-contact", lambda: self.hubspot.upsert_contact(properties)
        ):
            return SubmissionReport(fatal=SUBSCRIBE_FAILURE)

        note = (
            "Newsletter subscription via website footer.\n\n"
            f"Name: {form.full_name or 'N/A'}\nEmail: {form.email}"
        )
        await run.optional(
            "note",
            lambda: self._write_note(form.email, note),
            "We captured your email but couldn't log the subscription note.",
        )
        await run.optional(
            "mailchimp",
            lambda: self.mailchimp.upsert_subscriber(
                form.email, form.first_name, form.last_name
            ),
            "We couldn't add you to the mailing list right now. Please try again later.",
        )
        subscription_id = self.options.newsletter_subscription_id
        if subscription_id is not None:
            await run.optional(
                "hubspot-subscription",
                lambda: self.hubspot.update_email_subscription_status(
                    form.email,
                    subscription_id,
                    self.options.legal_basis,
                    self.options.legal_basis_explanation,
                ),
                "We captured your email but couldn't update your email preferences.",
            )
        if self.notify_via_resend:
            await run.optional(
                "notify",
                lambda: self.notifications.notify_newsletter(form),
                "We couldn't send the internal subscription alert, "
                "but your details were captured.",
            )
        else:
            _logger.info(
                "subscribe.notify skipped", extra={"component": "subscribe.notify"}
            )
        return SubmissionReport(warnings=run.warnings)


def enquiry_note(form: EnquiryForm) -> str:
    """CRM note body for an artwork enquiry; empty optional lines are dropped."""
    artwork = form.artwork
    lines = [
        "Artwork enquiry received via website.",
        f"Name: {form.name}",
        f"Email: {form.email}",
        f"Phone: {form.phone}" if form.phone else "",
        "Artwork:",
        f"  Artist: {artwork.artist}" if artwork.artist else "",
        f"  Title: {artwork.title}",
        f"  Year: {artwork.year}" if artwork.year else "",
        f"  Medium: {artwork.medium}" if artwork.medium else "",
        f"  Dimensions: {artwork.dimensions}" if artwork.dimensions else "",
        f"  Price: {artwork.price}" if artwork.price else "",
        "Message:",
        form.message,
    ]
    return "\n".join(line for line in lines if line)


def report_message(report: SubmissionReport, success: str) -> str:
    """Response message: the joined warnings, or the success text."""
    return " ".join(report.warnings) if report.warnings else success
