"""Exhibition listings and detail pages."""

import logging
from dataclasses import dataclass
from datetime import date

from outsider_gallery.adapters.errors import UpstreamError
from outsider_gallery.adapters.shopify_client import StorefrontClient
from outsider_gallery.domain.commerce import is_draft_status
from outsider_gallery.domain.exhibitions import (
    Classification,
    ExhibitionCard,
    ExhibitionPage,
    ExhibitionStatus,
    HeadingParts,
    HeroLabels,
    HeroSelection,
    PhaseLabel,
    artist_link,
    card_from_metaobject,
    classify_exhibitions,
    filter_exhibitions,
    heading_parts,
    hero_labels,
    installation_images,
    is_group_show,
    phase_label,
    pick_hero,
)
from outsider_gallery.domain.fields import (
    ContentField,
    Image,
    Metaobject,
    field_text,
    find_field,
    image_from_field,
    parse_metaobject,
)
from outsider_gallery.domain.formatting import format_dates
from outsider_gallery.domain.richtext import extract_long_copy
from outsider_gallery.services.artworks import ArtworkGrid, ArtworkService
from outsider_gallery.services.queries import (
    ARTIST_BY_ID_QUERY,
    ARTIST_QUERY,
    EXHIBITION_QUERY,
    EXHIBITIONS_QUERY,
)

_logger = logging.getLogger(__name__)

_HOME_PAGE_SIZE = 20
_ARTIST_PAGE_SIZE = 40


@dataclass(frozen=True)
class HomeView:
    hero: ExhibitionCard | None
    hero_label: PhaseLabel | None
    hero_labels: HeroLabels
    upcoming: list[ExhibitionCard]
    past: list[ExhibitionCard]


@dataclass(frozen=True)
class AboutArtist:
    name: str | None
    handle: str | None
    bio_html: str | None
    portrait: Image | None


@dataclass(frozen=True)
class ExhibitionDetail:
    card: ExhibitionCard
    heading: HeadingParts
    phase: PhaseLabel
    labels: HeroLabels
    dates_label: str
    long_copy_html: str | None
    installation_images: list[Image]
    featured_works: ArtworkGrid
    about_artist: AboutArtist | None


def _is_public(card: ExhibitionCard) -> bool:
    return not is_draft_status(card.status)


@dataclass
class ExhibitionService:
    """Reads exhibition metaobjects and shapes them for pages."""

    client: StorefrontClient
    artworks: ArtworkService

    async def list_all(self, first: int = _HOME_PAGE_SIZE) -> list[ExhibitionCard]:
        """Public exhibitions, newest entries first."""
        data = await self.client.execute(EXHIBITIONS_QUERY, {"first": first})
        nodes = (data.get("metaobjects") or {}).get("nodes") or []
        cards = [
            card_from_metaobject(node)
            for node in (parse_metaobject(raw) for raw in nodes)
            if node is not None
        ]
        return [card for card in cards if _is_public(card)]

    async def home(self, today: date) -> HomeView:
        """Hero exhibition plus the remaining upcoming and past shows."""
        classification: Classification = classify_exhibitions(await self.list_all(), today)
        current = [classification.current] if classification.current else []
        selection: HeroSelection = pick_hero(
            current, classification.upcoming, classification.past
        )
        return HomeView(
            hero=selection.hero,
            hero_label=selection.hero_label,
            hero_labels=hero_labels(selection.hero_label),
            upcoming=selection.upcoming_after_hero,
            past=selection.past_after_hero,
        )

    async def list_exhibitions(  # noqa: PLR0913
        self,
        status: ExhibitionStatus,
        today: date,
        year: int | None = None,
        page: int = 1,
        page_size: int = 12,
    ) -> ExhibitionPage:
        return filter_exhibitions(
            await self.list_all(), status, today, year=year, page=page, page_size=page_size
        )

    async def for_artist(self, artist_handle: str, artist_name: str) -> list[ExhibitionCard]:
        """Exhibitions linked to an artist by reference, else by name in artist or title."""
        target_handle = artist_handle.strip().lower()
        target_name = artist_name.strip().lower()

        def matches(card: ExhibitionCard) -> bool:
            if target_handle in card.artist_handles:
                return True
            if not target_name:
                return False
            search = " | ".join(
                value.lower() for value in (card.artist, card.title) if value
            )
            return target_name in search

        cards = [card for card in await self.list_all(_ARTIST_PAGE_SIZE) if matches(card)]
        return sorted(
            cards, key=lambda card: card.start or card.end or date.min, reverse=True
        )

    async def get_exhibition(self, handle: str, today: date) -> ExhibitionDetail | None:
        """Exhibition page data; unknown or draft exhibitions yield None."""
        data = await self.client.execute(EXHIBITION_QUERY, {"handle": handle})
        node = parse_metaobject(data.get("metaobject"))
        if node is None:
            return None
        card = card_from_metaobject(node)
        if not _is_public(card):
            return None

        phase = phase_label(card.start, card.end, today)
        featured = await self.artworks.featured_works(node.handle, card.artist)
        about = None
        if not is_group_show(card):
            about = await self._about_artist(node, card)
        return ExhibitionDetail(
            card=card,
            heading=heading_parts(card),
            phase=phase,
            labels=hero_labels(phase),
            dates_label=format_dates(card.start, card.end),
            long_copy_html=extract_long_copy(node.fields),
            installation_images=installation_images(node.fields),
            featured_works=featured,
            about_artist=about,
        )

    async def _about_artist(
        self, node: Metaobject, card: ExhibitionCard
    ) -> AboutArtist | None:
        link = artist_link(node.fields)
        fields: tuple[ContentField, ...] = ()
        handle = link.handle if link else None
        if link and link.reference is not None:
            fields = link.reference.fields
        elif handle:
            artist = await self._fetch_artist(handle)
            if artist is not None:
                fields = artist.fields
                handle = artist.handle

        portrait = image_from_field(find_field(fields, "portrait"))
        bio_field = find_field(fields, "bio")
        bio_html = extract_long_copy([bio_field]) if bio_field else None
        if not bio_html and not portrait:
            return None
        return AboutArtist(
            name=field_text(fields, "name", "title") or card.artist,
            handle=handle,
            bio_html=bio_html,
            portrait=portrait,
        )

    async def _fetch_artist(self, handle_or_id: str) -> Metaobject | None:
        try:
            if handle_or_id.startswith("gid://"):
                data = await self.client.execute(ARTIST_BY_ID_QUERY, {"id": handle_or_id})
                raw = data.get("node")
            else:
                data = await self.client.execute(ARTIST_QUERY, {"handle": handle_or_id})
                raw = data.get("metaobject")
        except UpstreamError:
            _logger.exception(
                "Failed to fetch exhibition artist %s",
                handle_or_id,
                extra={"component": "exhibitions.artist"},
            )
            return None
        return parse_metaobject(raw)
