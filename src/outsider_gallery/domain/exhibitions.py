"""Exhibition view models and date-based classification."""

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date
from typing import Literal

from outsider_gallery.domain.fields import (
    ContentField,
    Image,
    Metaobject,
    MetaobjectReference,
    field_image,
    field_text,
    image_from_field,
    metaobject_references,
    reference_images,
)
from outsider_gallery.domain.formatting import parse_date

ExhibitionStatus = Literal["current", "upcoming", "past"]
PhaseLabel = Literal["CURRENT EXHIBITION", "UPCOMING EXHIBITION", "PAST EXHIBITION"]

_GROUP_NAMES = frozenset(
    {"group exhibition", "group show", "group", "various artists", "multiple artists"}
)
_MULTI_ARTIST_SEPARATORS = (", ", " & ", " and ", " / ", "+", "/")


@dataclass(frozen=True)
class ExhibitionCard:
    handle: str
    title: str
    artist: str | None = None
    location: str | None = None
    opening_info: str | None = None
    start: date | None = None
    end: date | None = None
    hero: Image | None = None
    banner: Image | None = None
    summary: str | None = None
    variant: str | None = None
    status: str | None = None
    is_group: bool | None = None
    artist_handles: tuple[str, ...] = field(default=(), repr=False)


@dataclass(frozen=True)
class HeadingParts:
    primary: str
    secondary: str | None
    is_group: bool


@dataclass(frozen=True)
class Classification:
    current: ExhibitionCard | None
    upcoming: list[ExhibitionCard]
    past: list[ExhibitionCard]


@dataclass(frozen=True)
class HeroSelection:
    hero: ExhibitionCard | None
    hero_label: PhaseLabel | None
    upcoming_after_hero: list[ExhibitionCard]
    past_after_hero: list[ExhibitionCard]


@dataclass(frozen=True)
class HeroLabels:
    top: str
    button: str


@dataclass(frozen=True)
class ExhibitionPage:
    items: list[ExhibitionCard]
    total: int
    page: int
    page_size: int


def artist_handles(fields: Iterable[ContentField]) -> tuple[str, ...]:
    """Lower-cased handles of artist metaobjects linked from ``*artist*`` fields."""
    handles: list[str] = []
    for item in fields:
        if "artist" not in item.key.lower():
            continue
        for ref in metaobject_references(item):
            handle = (ref.handle or "").strip().lower()
            if handle and handle not in handles:
                handles.append(handle)
    return tuple(handles)


def card_from_metaobject(node: Metaobject) -> ExhibitionCard:
    fields = node.fields
    group_flag = field_text(fields, "is_group", "isGroup")
    return ExhibitionCard(
        handle=node.handle,
        title=field_text(fields, "title", "name") or node.handle,
        artist=field_text(fields, "artist", "artists", "artistName"),
        location=field_text(fields, "address", "location", "subtitle"),
        opening_info=field_text(fields, "opening_info", "openinginfo", "openingInfo"),
        start=parse_date(field_text(fields, "startDate", "startdate", "start")),
        end=parse_date(field_text(fields, "endDate", "enddate", "end")),
        summary=field_text(
            fields,
            "short_text",
            "short-text",
            "shortText",
            "summary",
            "teaser",
            "description",
        ),
        hero=field_image(fields, "heroImage", "heroimage", "coverimage", "coverImage"),
        banner=field_image(fields, "banner_image", "bannerImage", "bannerimage"),
        variant=field_text(fields, "variant"),
        status=field_text(fields, "status"),
        is_group=group_flag.lower() == "true" if group_flag else None,
        artist_handles=artist_handles(fields),
    )


def is_group_show(card: ExhibitionCard) -> bool:
    """Guess whether an exhibition is a group show from its flag, variant or artist."""
    if card.is_group is True:
        return True
    variant = (card.variant or "").strip().lower()
    if "group" in variant or "collective" in variant:
        return True
    artist = (card.artist or "").strip().lower()
    if not artist:
        return False
    if artist in _GROUP_NAMES:
        return True
    if "group exhibition" in artist or "group show" in artist:
        return True
    for separator in _MULTI_ARTIST_SEPARATORS:
        if separator in artist:
            parts = [part.strip() for part in artist.split(separator)]
            if len([part for part in parts if part]) >= 2:
                return True
    return False


def heading_parts(card: ExhibitionCard) -> HeadingParts:
    group = is_group_show(card)
    if group:
        return HeadingParts(card.title or card.artist or "", card.artist, True)
    return HeadingParts(card.artist or card.title or "", card.title, False)


def _is_current(card: ExhibitionCard, today: date) -> bool:
    return (
        card.start is not None
        and card.start <= today
        and (card.end is None or card.end >= today)
    )


def _is_upcoming(card: ExhibitionCard, today: date) -> bool:
    return card.start is not None and card.start > today


def _is_past(card: ExhibitionCard, today: date) -> bool:
    if card.end is not None:
        return card.end < today
    return card.start is not None and card.start < today and not _is_current(card, today)


def _latest(card: ExhibitionCard) -> date:
    return card.end or card.start or date.min


def classify_exhibitions(
    cards: Sequence[ExhibitionCard], today: date
) -> Classification:
    """Split exhibitions into the latest current show, upcoming and past lists."""
    current_list = sorted(
        (card for card in cards if _is_current(card, today)),
        key=lambda card: card.start or date.min,
        reverse=True,
    )
    current = current_list[0] if current_list else None
    upcoming = sorted(
        (card for card in cards if card is not current and _is_upcoming(card, today)),
        key=lambda card: card.start or date.max,
    )
    past = sorted(
        (card for card in cards if card is not current and _is_past(card, today)),
        key=_latest,
        reverse=True,
    )
    return Classification(current=current, upcoming=upcoming, past=past)


def filter_exhibitions(  # noqa: PLR0913
    cards: Sequence[ExhibitionCard],
    status: ExhibitionStatus,
    today: date,
    year: int | None = None,
    page: int = 1,
    page_size: int = 12,
) -> ExhibitionPage:
    """Return one page of exhibitions in ``status``, optionally limited to a year."""
    checks = {"current": _is_current, "upcoming": _is_upcoming, "past": _is_past}
    matches_status = checks[status]

    def matches_year(card: ExhibitionCard) -> bool:
        if year is None:
            return True
        return (card.start is not None and card.start.year == year) or (
            card.end is not None and card.end.year == year
        )

    filtered = [card for card in cards if matches_status(card, today) and matches_year(card)]
    if status == "past":
        filtered.sort(key=lambda card: card.end or card.start or date.min, reverse=True)
    else:
        filtered.sort(key=lambda card: card.start or date.min)

    page = max(page, 1)
    offset = (page - 1) * page_size
    return ExhibitionPage(
        items=filtered[offset : offset + page_size],
        total=len(filtered),
        page=page,
        page_size=page_size,
    )


def phase_label(start: date | None, end: date | None, today: date) -> PhaseLabel:
    """Phase of an exhibition; the end date counts as open for the whole day."""
    if start is not None and today < start:
        return "UPCOMING EXHIBITION"
    if end is not None and today > end:
        return "PAST EXHIBITION"
    return "CURRENT EXHIBITION"


def pick_hero(
    current: Sequence[ExhibitionCard],
    upcoming: Sequence[ExhibitionCard],
    past: Sequence[ExhibitionCard],
) -> HeroSelection:
    if current:
        return HeroSelection(current[0], "CURRENT EXHIBITION", list(upcoming), list(past))
    if upcoming:
        return HeroSelection(upcoming[0], "UPCOMING EXHIBITION", list(upcoming[1:]), list(past))
    if past:
        return HeroSelection(past[0], "PAST EXHIBITION", [], list(past[1:]))
    return HeroSelection(None, None, [], [])


def hero_labels(label: PhaseLabel | None) -> HeroLabels:
    if label == "CURRENT EXHIBITION":
        return HeroLabels("Current exhibition", "View Exhibition")
    if label == "UPCOMING EXHIBITION":
        return HeroLabels("Upcoming exhibition", "View details")
    if label == "PAST EXHIBITION":
        return HeroLabels("Past exhibition", "View Exhibition")
    return HeroLabels("Exhibition", "View Exhibition")


_INSTALL_SHOTS_RE = re.compile(r"installshots", re.IGNORECASE)
_INSTALL_KEY_RE = re.compile(r"install|installation|view|instal", re.IGNORECASE)
_HERO_KEY_RE = re.compile(r"hero|cover", re.IGNORECASE)
_NON_ALNUM_RE = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def installation_images(fields: Sequence[ContentField]) -> list[Image]:
    """Images from the ``installShots`` list, else from installation-like keys."""
    shots = next((item for item in fields if _INSTALL_SHOTS_RE.search(item.key)), None)
    from_list = reference_images(shots)
    if from_list:
        return from_list
    images = (
        image_from_field(item)
        for item in fields
        if _INSTALL_KEY_RE.search(item.key) and not _HERO_KEY_RE.search(item.key)
    )
    return [image for image in images if image is not None]


@dataclass(frozen=True)
class ArtistLink:
    """Artist linked from an exhibition: an expanded reference or just a handle or id."""

    reference: MetaobjectReference | None
    handle: str | None


def artist_link(fields: Sequence[ContentField]) -> ArtistLink | None:
    item = next(
        (f for f in fields if _NON_ALNUM_RE.sub("", f.key).lower() == "artistref"), None
    )
    if item is None:
        return None
    refs = metaobject_references(item)
    ref = refs[0] if refs else None
    handle = ref.handle if ref else None
    if not handle and isinstance(item.value, str) and item.value.strip():
        handle = item.value.strip()
    return ArtistLink(reference=ref if ref and ref.fields else None, handle=handle)
