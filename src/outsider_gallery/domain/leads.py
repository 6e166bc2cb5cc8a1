"""Lead-capture form models and validation."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


class LeadValidationError(ValueError):
    """Raised when a submitted form is missing required fields."""


def _clean(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _flag(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    return value == "true"


def split_name(full_name: str) -> tuple[str, str]:
    """Split a full name into first word and the remainder."""
    parts = full_name.split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def join_name(*parts: str) -> str:
    return " ".join(part for part in parts if part).strip()


@dataclass(frozen=True)
class ContactForm:
    name: str
    email: str
    message: str
    subscribe: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "ContactForm":
        form = cls(
            name=_clean(payload.get("name")),
            email=_clean(payload.get("email")).lower(),
            message=_clean(payload.get("message")),
            subscribe=_flag(payload.get("subscribe")),
        )
        if not form.name or not form.email or not form.message:
            raise LeadValidationError("Name, email, and message are required.")
        return form

    @property
    def first_name(self) -> str:
        return split_name(self.name)[0]

    @property
    def last_name(self) -> str:
        return split_name(self.name)[1]


@dataclass(frozen=True)
class ArtworkInfo:
    title: str
    artist: str = ""
    year: str = ""
    medium: str = ""
    dimensions: str = ""
    price: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "ArtworkInfo":
        data = payload if isinstance(payload, Mapping) else {}
        return cls(
            title=_clean(data.get("title")),
            artist=_clean(data.get("artist")),
            year=_clean(data.get("year")),
            medium=_clean(data.get("medium")),
            dimensions=_clean(data.get("dimensions")),
            price=_clean(data.get("price")),
        )


@dataclass(frozen=True)
class EnquiryForm:
    name: str
    email: str
    message: str
    artwork: ArtworkInfo
    first_name: str = ""
    last_name: str = ""
    phone: str = ""
    subscribe: bool = False

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "EnquiryForm":
        """Validate an enquiry; the artwork title is checked before contact details."""
        first_raw = _clean(payload.get("firstName"))
        last_raw = _clean(payload.get("lastName"))
        name = _clean(payload.get("name")) or join_name(first_raw, last_raw)
        artwork = ArtworkInfo.from_payload(payload.get("artwork"))
        if not artwork.title:
            raise LeadValidationError("Artwork information is missing.")
        email = _clean(payload.get("email")).lower()
        message = _clean(payload.get("message"))
        if not name or not email or not message:
            raise LeadValidationError("Name, email, and message are required.")

        split_first, split_last = split_name(name)
        return cls(
            name=name,
            email=email,
            message=message,
            artwork=artwork,
            first_name=first_raw or split_first,
            last_name=last_raw or split_last,
            phone=_clean(payload.get("phone")),
            subscribe=_flag(payload.get("subscribe")),
        )


@dataclass(frozen=True)
class SubscribeForm:
    email: str
    first_name: str = ""
    last_name: str = ""

    @classmethod
    def from_payload(cls, payload: Mapping[str, Any]) -> "SubscribeForm":
        form = cls(
            email=_clean(payload.get("email")).lower(),
            first_name=_clean(payload.get("firstName")),
            last_name=_clean(payload.get("lastName")),
        )
        if not form.email:
            raise LeadValidationError("Email is required")
        return form

    @property
    def full_name(self) -> str:
        return join_name(self.first_name, self.last_name)


@dataclass(frozen=True)
class SubmissionReport:
    """Outcome of a lead submission: a fatal error or a list of warnings."""

    fatal: str | None = None
    warnings: list[str] = field(default_factory=list)

    @property
    def partial(self) -> bool:
        return self.fatal is None and bool(self.warnings)
