"""About page copy from the ``information`` metaobject."""

from dataclasses import dataclass

from outsider_gallery.adapters.shopify_client import StorefrontClient
from outsider_gallery.domain.fields import Metaobject, field_text, find_field, parse_metaobject
from outsider_gallery.domain.richtext import extract_long_copy, field_to_html
from outsider_gallery.services.queries import INFORMATION_QUERY

ABOUT_TITLE = "About Us Page"
SHORT_KEYS = ("aboutshort", "aboutusshort", "short", "shorttext")
LONG_KEYS = ("aboutlong", "aboutuslong", "long", "longtext")


@dataclass(frozen=True)
class AboutContent:
    handle: str
    title: str | None
    short_html: str | None
    long_html: str | None


def _pick(nodes: list[Metaobject]) -> Metaobject | None:
    titled = next(
        (node for node in nodes if field_text(node.fields, "title") == ABOUT_TITLE), None
    )
    return titled or (nodes[0] if nodes else None)


@dataclass
class AboutService:
    client: StorefrontClient

    async def get_about(self) -> AboutContent | None:
        data = await self.client.execute(INFORMATION_QUERY)
        raw_nodes = (data.get("metaobjects") or {}).get("nodes") or []
        node = _pick([n for n in (parse_metaobject(raw) for raw in raw_nodes) if n])
        if node is None:
            return None
        short_html = next(
            (
                html
                for html in (field_to_html(find_field(node.fields, key)) for key in SHORT_KEYS)
                if html
            ),
            None,
        )
        long_html = next(
            (
                html
                for html in (field_to_html(find_field(node.fields, key)) for key in LONG_KEYS)
                if html
            ),
            None,
        ) or extract_long_copy(node.fields)
        return AboutContent(
            handle=node.handle,
            title=field_text(node.fields, "title"),
            short_html=short_html,
            long_html=long_html,
        )
