"""Typed model of storefront content fields and their references.

Metaobjects and product metafields arrive as loosely typed ``{key, type, value,
reference, references}`` records. They are parsed once into the dataclasses
below so lookups never probe raw dictionaries.
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from outsider_gallery.domain.richtext import strip_html, to_html

ARTIST_NAME_KEYS = ("name", "title", "full_name", "fullName")
STATUS_KEYS = ("value", "status", "label", "name", "title")


@dataclass(frozen=True)
class Image:
    """Image asset resolved from a field or product."""

    url: str
    width: int | None = None
    height: int | None = None
    alt: str | None = None


@dataclass(frozen=True)
class ImageReference:
    image: Image


@dataclass(frozen=True)
class FileReference:
    url: str | None = None
    preview_url: str | None = None


@dataclass(frozen=True)
class VideoSource:
    url: str
    mime_type: str | None = None


@dataclass(frozen=True)
class VideoReference:
    sources: tuple[VideoSource, ...] = ()
    preview: Image | None = None


@dataclass(frozen=True)
class MetaobjectReference:
    handle: str | None = None
    type: str | None = None
    fields: tuple["ContentField", ...] = ()


Reference = ImageReference | FileReference | VideoReference | MetaobjectReference


@dataclass(frozen=True)
class ContentField:
    """Single metaobject field or product metafield."""

    key: str
    type: str = ""
    value: Any = None
    reference: Reference | None = None
    references: tuple[Reference, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Metaobject:
    """Top-level content object such as an exhibition or artist."""

    handle: str
    fields: tuple[ContentField, ...] = ()
    type: str | None = None
    updated_at: str | None = None


def _image(raw: Mapping[str, Any] | None) -> Image | None:
    if not raw or not raw.get("url"):
        return None
    return Image(
        url=raw["url"],
        width=raw.get("width"),
        height=raw.get("height"),
        alt=raw.get("altText"),
    )


def parse_reference(raw: Mapping[str, Any] | None) -> Reference | None:
    """Parse a GraphQL reference node by its ``__typename``."""
    if not raw:
        return None
    typename = raw.get("__typename")
    if typename == "MediaImage":
        image = _image(raw.get("image"))
        return ImageReference(image) if image else None
    if typename == "GenericFile":
        preview = raw.get("previewImage") or {}
        return FileReference(url=raw.get("url"), preview_url=preview.get("url"))
    if typename == "Video":
        sources = tuple(
            VideoSource(url=source["url"], mime_type=source.get("mimeType"))
            for source in raw.get("sources") or []
            if source and source.get("url")
        )
        return VideoReference(sources=sources, preview=_image(raw.get("previewImage")))
    if typename == "Metaobject":
        return MetaobjectReference(
            handle=raw.get("handle"),
            type=raw.get("type"),
            fields=parse_fields(raw.get("fields")),
        )
    return None


def parse_references(raw: Any) -> tuple[Reference, ...]:
    """Parse a ``references`` connection, given as ``{nodes: [...]}`` or a list."""
    if isinstance(raw, Mapping):
        raw = raw.get("nodes")
    if not isinstance(raw, list):
        return ()
    parsed = (parse_reference(node) for node in raw)
    return tuple(ref for ref in parsed if ref is not None)


def parse_field(raw: Mapping[str, Any], key: str | None = None) -> ContentField:
    return ContentField(
        key=key or raw.get("key") or "",
        type=raw.get("type") or "",
        value=raw.get("value"),
        reference=parse_reference(raw.get("reference")),
        references=parse_references(raw.get("references")),
    )


def parse_fields(raw: Iterable[Mapping[str, Any] | None] | None) -> tuple[ContentField, ...]:
    return tuple(parse_field(item) for item in raw or [] if item and "key" in item)


def parse_metaobject(raw: Mapping[str, Any] | None) -> Metaobject | None:
    if not raw or not raw.get("handle"):
        return None
    return Metaobject(
        handle=raw["handle"],
        fields=parse_fields(raw.get("fields")),
        type=raw.get("type"),
        updated_at=raw.get("updatedAt"),
    )


def parse_image(raw: Mapping[str, Any] | None) -> Image | None:
    """Parse a ``{url, width, height, altText}`` product image."""
    return _image(raw)


def parse_metafield(key: str, raw: Mapping[str, Any] | None) -> ContentField | None:
    """Parse an aliased product metafield; absent metafields yield None."""
    if not raw:
        return None
    return parse_field(raw, key=key)


def coerce_text(value: Any) -> str | None:
    if isinstance(value, str):
        return value
    if isinstance(value, Mapping):
        for key in ("text", "value"):
            if isinstance(value.get(key), str):
                return value[key]
    return None


def find_field(
    fields: Iterable[ContentField], *keys: str, ignore_case: bool = False
) -> ContentField | None:
    """Return the first field matching ``keys`` in priority order."""
    fields = tuple(fields)
    for key in keys:
        for item in fields:
            if item.key == key or (ignore_case and item.key.lower() == key.lower()):
                return item
    return None


def field_text(fields: Iterable[ContentField], *keys: str) -> str | None:
    """Return the first non-empty trimmed text among ``keys``."""
    fields = tuple(fields)
    for key in keys:
        match = find_field(fields, key)
        if match is None:
            continue
        text = (coerce_text(match.value) or "").strip()
        if text:
            return text
    return None


def metafield_text(item: ContentField | None) -> str | None:
    if item is None or not isinstance(item.value, str):
        return None
    return item.value.strip() or None


def image_from_reference(ref: Reference | None) -> Image | None:
    if isinstance(ref, ImageReference):
        return ref.image
    if isinstance(ref, FileReference):
        url = ref.url or ref.preview_url
        return Image(url=url) if url else None
    if isinstance(ref, VideoReference):
        return ref.preview
    if isinstance(ref, MetaobjectReference):
        portrait = find_field(ref.fields, "portrait")
        return image_from_field(portrait) if portrait else None
    return None


def image_from_field(item: ContentField | None) -> Image | None:
    if item is None:
        return None
    if not isinstance(item.reference, MetaobjectReference):
        image = image_from_reference(item.reference)
        if image:
            return image
    text = coerce_text(item.value)
    if text and text.startswith("http"):
        return Image(url=text)
    return None


def field_image(
    fields: Iterable[ContentField], *keys: str, ignore_case: bool = False
) -> Image | None:
    """Return the first image resolvable from ``keys`` in priority order."""
    fields = tuple(fields)
    for key in keys:
        image = image_from_field(find_field(fields, key, ignore_case=ignore_case))
        if image:
            return image
    return None


def reference_images(item: ContentField | None) -> list[Image]:
    if item is None:
        return []
    images = (image_from_reference(ref) for ref in item.references)
    return [image for image in images if image is not None]


def metaobject_references(item: ContentField | None) -> list[MetaobjectReference]:
    if item is None:
        return []
    refs = (item.reference, *item.references)
    return [ref for ref in refs if isinstance(ref, MetaobjectReference)]


def reference_lookup(ref: Reference | None, keys: Iterable[str]) -> str | None:
    """Case-insensitive lookup of the first non-empty value on a metaobject."""
    if not isinstance(ref, MetaobjectReference):
        return None
    for key in keys:
        match = find_field(ref.fields, key, ignore_case=True)
        text = metafield_text(match)
        if text:
            return text
    return None


def resolve_label(item: ContentField | None, candidate_keys: Iterable[str]) -> str | None:
    """Resolve a human label from a field.

    Tries a declared rich-text value, then the plain value, then the linked
    metaobject's fields by ``candidate_keys`` and finally its handle.
    """
    if item is None:
        return None
    raw = metafield_text(item)
    if raw and "rich_text" in item.type:
        plain = strip_html(to_html(raw))
        if plain:
            return plain
    if raw:
        return raw
    from_ref = reference_lookup(item.reference, candidate_keys)
    if from_ref:
        return from_ref
    if isinstance(item.reference, MetaobjectReference) and item.reference.handle:
        return item.reference.handle.strip() or None
    return None


def resolve_status(item: ContentField | None) -> str | None:
    return resolve_label(item, STATUS_KEYS)


def resolve_artist_name(item: ContentField | None) -> str | None:
    """Artist name, preferring the referenced artist metaobject over the raw value."""
    if item is None:
        return None
    return reference_lookup(item.reference, ARTIST_NAME_KEYS) or metafield_text(item)
