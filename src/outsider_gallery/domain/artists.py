"""Artist view models built from artist metaobjects."""

import re
from dataclasses import dataclass

from outsider_gallery.domain.fields import (
    ContentField,
    FileReference,
    Image,
    Metaobject,
    VideoReference,
    coerce_text,
    field_image,
    find_field,
    image_from_field,
    reference_images,
)
from outsider_gallery.domain.richtext import extract_long_copy, field_to_html

_VIDEO_URL_RE = re.compile(r"\.(mp4|webm|mov|m4v|ogg)(\?|$)", re.IGNORECASE)
_BIO_KEY_RE = re.compile(r"bio", re.IGNORECASE)


@dataclass(frozen=True)
class ArtistCard:
    handle: str
    label: str
    cover: Image | None
    sort_key: str


@dataclass(frozen=True)
class PortraitVideo:
    url: str
    mime_type: str | None = None
    poster: Image | None = None


@dataclass(frozen=True)
class ArtistProfile:
    handle: str
    name: str
    nationality: str | None
    birth_year: str | None
    cover: Image | None
    short_bio_html: str | None
    long_bio_html: str | None
    portrait_video: PortraitVideo | None
    carousel: list[Image]
    status: str | None
    updated_at: str | None = None


def _value(fields: tuple[ContentField, ...], *keys: str) -> str | None:
    """First present value by exact key, matching plain ``fields[key]`` lookups."""
    for key in keys:
        match = find_field(fields, key)
        if match is not None and match.value is not None:
            text = coerce_text(match.value)
            if text:
                return text
    return None


def artist_card(node: Metaobject) -> ArtistCard:
    fields = node.fields
    return ArtistCard(
        handle=node.handle,
        label=_value(fields, "name") or _value(fields, "title") or node.handle,
        cover=field_image(fields, "coverimage"),
        sort_key=_value(fields, "sortkey") or _value(fields, "name") or node.handle,
    )


def _is_probably_video(url: str) -> bool:
    return bool(_VIDEO_URL_RE.search(url))


def portrait_video(item: ContentField | None) -> PortraitVideo | None:
    """Video from a Video reference, a video-like file, or a plain URL value."""
    if item is None:
        return None
    ref = item.reference
    value = coerce_text(item.value) or ""
    if isinstance(ref, VideoReference) and ref.sources:
        source = ref.sources[0]
        return PortraitVideo(url=source.url, mime_type=source.mime_type, poster=ref.preview)
    if isinstance(ref, FileReference):
        url = ref.url or (value if value.startswith("http") else None)
        if url and _is_probably_video(url):
            poster = Image(url=ref.preview_url) if ref.preview_url else None
            return PortraitVideo(url=url, poster=poster)
    if value.startswith("http") and _is_probably_video(value):
        return PortraitVideo(url=value)
    return None


def cover_image(fields: tuple[ContentField, ...]) -> Image | None:
    """Portrait image when present, otherwise the cover image."""
    portrait = find_field(fields, "portrait", "portrait_image", "portraitimage", ignore_case=True)
    return image_from_field(portrait) or image_from_field(
        find_field(fields, "coverimage", "cover_image", "cover", ignore_case=True)
    )


def carousel_images(fields: tuple[ContentField, ...]) -> list[Image]:
    item = find_field(fields, "carousel", "carousel_images", "image_carousel", ignore_case=True)
    if item is None:
        return []
    images = reference_images(item)
    if images:
        return images
    single = image_from_field(item)
    return [single] if single else []


def artist_profile(node: Metaobject) -> ArtistProfile:
    fields = node.fields
    status_field = find_field(fields, "status", ignore_case=True)
    long_bio = field_to_html(
        find_field(fields, "long_bio", "longbio", "bio_long", ignore_case=True)
    ) or extract_long_copy(item for item in fields if _BIO_KEY_RE.search(item.key))
    return ArtistProfile(
        handle=node.handle,
        name=_value(fields, "name") or _value(fields, "title") or node.handle,
        nationality=_value(fields, "nationality", "country", "origin", "nationalityshort"),
        birth_year=_value(fields, "birthyear", "birth_year", "birth", "born", "birthdate"),
        cover=cover_image(fields),
        short_bio_html=field_to_html(
            find_field(fields, "short_bio", "shortbio", "bio_short", ignore_case=True)
        ),
        long_bio_html=long_bio,
        portrait_video=portrait_video(
            find_field(fields, "video", "portrait_video", "artist_video", ignore_case=True)
        ),
        carousel=carousel_images(fields),
        status=status_field.value if status_field and isinstance(status_field.value, str) else None,
        updated_at=node.updated_at,
    )
