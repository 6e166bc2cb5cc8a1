"""Artist listings and profiles."""

from dataclasses import dataclass

from outsider_gallery.adapters.shopify_client import StorefrontClient
from outsider_gallery.domain.artists import ArtistCard, ArtistProfile, artist_card, artist_profile
from outsider_gallery.domain.commerce import is_draft_status
from outsider_gallery.domain.exhibitions import ExhibitionCard
from outsider_gallery.domain.fields import field_text, parse_metaobject
from outsider_gallery.services.artworks import ArtworkGrid, ArtworkService
from outsider_gallery.services.exhibitions import ExhibitionService
from outsider_gallery.services.queries import ARTIST_QUERY, ARTISTS_QUERY

_ARTISTS_PAGE_SIZE = 100


@dataclass(frozen=True)
class ArtistDetail:
    profile: ArtistProfile
    artworks: ArtworkGrid
    exhibitions: list[ExhibitionCard]


@dataclass
class ArtistService:
    """Artist metaobjects with their works and exhibitions."""

    client: StorefrontClient
    artworks: ArtworkService
    exhibitions: ExhibitionService

    async def list_artists(self) -> list[ArtistCard]:
        """Public artists ordered by sort key."""
        data = await self.client.execute(ARTISTS_QUERY, {"first": _ARTISTS_PAGE_SIZE})
        nodes = (data.get("metaobjects") or {}).get("nodes") or []
        cards = [
            artist_card(node)
            for node in (parse_metaobject(raw) for raw in nodes)
            if node is not None and not is_draft_status(field_text(node.fields, "status"))
        ]
        return sorted(cards, key=lambda card: card.sort_key.lower())

    async def get_artist(self, handle: str) -> ArtistDetail | None:
        data = await self.client.execute(ARTIST_QUERY, {"handle": handle})
        node = parse_metaobject(data.get("metaobject"))
        if node is None:
            return None
        profile = artist_profile(node)
        if is_draft_status(profile.status):
            return None
        return ArtistDetail(
            profile=profile,
            artworks=await self.artworks.artist_works(profile.handle, profile.name),
            exhibitions=await self.exhibitions.for_artist(profile.handle, profile.name),
        )
