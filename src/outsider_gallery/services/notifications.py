"""Internal notification emails for lead capture."""

from dataclasses import dataclass
from html import escape

from outsider_gallery.adapters.resend_client import EmailClient
from outsider_gallery.domain.leads import ArtworkInfo, ContactForm, EnquiryForm, SubscribeForm


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    text: str
    html: str


def _html_lines(value: str) -> str:
    return escape(value).replace("\n", "<br />")


def _mailto(email: str) -> str:
    safe = escape(email)
    return f'<a href="mailto:{safe}">{safe}</a>'


def newsletter_email(form: SubscribeForm) -> EmailMessage:
    name = form.full_name or "N/A"
    return EmailMessage(
        subject="New newsletter subscriber",
        text=f"A new subscriber just joined the list.\n\nName: {name}\nEmail: {form.email}",
        html=(
            "<p>A new subscriber just joined the list.</p>\n"
            f"<p><strong>Name:</strong> {escape(name)}</p>\n"
            f"<p><strong>Email:</strong> {_mailto(form.email)}</p>"
        ),
    )


def contact_email(form: ContactForm) -> EmailMessage:
    return EmailMessage(
        subject="New website contact enquiry",
        text=(
            "New enquiry submitted on the website.\n\n"
            f"Name: {form.name}\nEmail: {form.email}\n\nMessage:\n{form.message}"
        ),
        html=(
            "<p>New enquiry submitted on the website.</p>\n"
            f"<p><strong>Name:</strong> {escape(form.name)}</p>\n"
            f"<p><strong>Email:</strong> {_mailto(form.email)}</p>\n"
            "<p><strong>Message:</strong></p>\n"
            f"<p>{_html_lines(form.message)}</p>"
        ),
    )


def _artwork_text(artwork: ArtworkInfo) -> str:
    heading = f"{artwork.artist}\n" if artwork.artist else ""
    year = f", {artwork.year}" if artwork.year else ""
    return (
        f"{heading}{artwork.title}{year}\n{artwork.medium}\n"
        f"{artwork.dimensions}\n{artwork.price}"
    )


def _artwork_html(artwork: ArtworkInfo) -> str:
    rows = (
        ("Artist", artwork.artist),
        ("Title", artwork.title),
        ("Year", artwork.year),
        ("Medium", artwork.medium),
        ("Dimensions", artwork.dimensions),
        ("Price", artwork.price),
    )
    return "".join(
        f"<p><strong>{label}:</strong> {escape(value)}</p>" for label, value in rows if value
    )


def enquiry_email(form: EnquiryForm) -> EmailMessage:
    phone = form.phone or "N/A"
    return EmailMessage(
        subject=f"New artwork enquiry: {form.artwork.title}",
        text=(
            "New artwork enquiry received.\n\n"
            f"Name: {form.name}\nEmail: {form.email}\nPhone: {phone}\n\n"
            f"Artwork:\n{_artwork_text(form.artwork)}\n\nMessage:\n{form.message}"
        ),
        html=(
            "<p>New artwork enquiry received.</p>\n"
            f"<p><strong>Name:</strong> {escape(form.name)}</p>\n"
            f"<p><strong>Email:</strong> {_mailto(form.email)}</p>\n"
            f"<p><strong>Phone:</strong> {escape(phone)}</p>\n"
            f"<div>{_artwork_html(form.artwork)}</div>\n"
            "<p><strong>Message:</strong></p>\n"
            f"<p>{_html_lines(form.message)}</p>"
        ),
    )


@dataclass
class NotificationService:
    """Sends internal alerts to the configured recipient lists."""

    email_client: EmailClient
    contact_recipients: str | None = None
    newsletter_recipients: str | None = None
    enquiry_recipients: str | None = None

    async def _send(self, to: str | None, message: EmailMessage) -> bool:
        return await self.email_client.send_email(
            to=to, subject=message.subject, html=message.html, text=message.text
        )

    async def notify_contact(self, form: ContactForm) -> bool:
        return await self._send(self.contact_recipients, contact_email(form))

    async def notify_newsletter(self, form: SubscribeForm) -> bool:
        return await self._send(self.newsletter_recipients, newsletter_email(form))

    async def notify_enquiry(self, form: EnquiryForm) -> bool:
        return await self._send(self.enquiry_recipients, enquiry_email(form))
