"""Rich text and long-copy helpers.

Storefront ``rich_text`` fields hold a JSON document rather than HTML; ``to_html``
renders the small subset of that AST the site uses and passes HTML or plain
text through.
"""

import json
import re
from collections.abc import Iterable
from html import escape
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from outsider_gallery.domain.fields import ContentField

_HTML_RE = re.compile(r"<\s*[a-z][\s\S]*>", re.IGNORECASE)
_TAG_RE = re.compile(r"</?[^>]+(>|$)")
_BLANK_LINES_RE = re.compile(r"\n{2,}")
_NEWLINES_RE = re.compile(r"\n+")
_HTML_KEY_RE = re.compile(r"html$", re.IGNORECASE)


def looks_like_html(value: str) -> bool:
    return bool(_HTML_RE.search(value))


def strip_html(value: str | None) -> str | None:
    """Collapse markup to plain text; empty results yield None."""
    if not value:
        return None
    text = " ".join(_TAG_RE.sub(" ", value).split())
    return text or None


def multiline_to_html(value: str) -> str:
    """Wrap blank-line separated paragraphs in ``<p>`` with ``<br/>`` for newlines."""
    paragraphs = (chunk.strip() for chunk in _BLANK_LINES_RE.split(value))
    return "".join(
        f"<p>{escape(chunk, quote=False).replace(chr(10), '<br/>')}</p>"
        for chunk in paragraphs
        if chunk
    )


def _render(node: Any) -> str:
    if isinstance(node, list):
        return "".join(_render(child) for child in node)
    if not isinstance(node, dict):
        return ""
    children = "".join(_render(child) for child in node.get("children") or [])
    kind = node.get("type")
    if kind == "paragraph":
        return f"<p>{children}</p>"
    if kind == "text":
        out = escape(str(node.get("value") or ""))
        for flag, tag in (("bold", "strong"), ("italic", "em"), ("underline", "u"), ("code", "code")):
            if node.get(flag):
                out = f"<{tag}>{out}</{tag}>"
        return out
    if kind == "heading":
        try:
            level = int(node.get("level") or 2)
        except (TypeError, ValueError):
            level = 2
        level = max(1, min(6, level))
        return f"<h{level}>{children}</h{level}>"
    if kind == "link":
        href = escape(str(node.get("url") or node.get("href") or "#"), quote=True)
        return f'<a href="{href}" target="_blank" rel="noopener noreferrer">{children}</a>'
    if kind == "list":
        tag = "ol" if node.get("listType") in {"number", "ordered"} else "ul"
        return f"<{tag}>{children}</{tag}>"
    if kind == "list-item":
        return f"<li>{children}</li>"
    if kind in {"line_break", "lineBreak"}:
        return "<br/>"
    return children


def to_html(raw: str | None) -> str | None:
    """Convert a rich_text JSON document, HTML or plain text to HTML."""
    if not raw:
        return None
    text = str(raw).strip()
    if not text:
        return None
    if "<" in text and ">" in text:
        return text
    try:
        document = json.loads(text)
    except json.JSONDecodeError:
        return "".join(
            f"<p>{escape(chunk, quote=False).replace(chr(10), '<br/>')}</p>"
            for chunk in _BLANK_LINES_RE.split(text)
        )
    return _render(document)


def field_to_html(item: "ContentField | None") -> str | None:
    """Render a text-like field, honouring its declared rich_text type."""
    if item is None or not isinstance(item.value, str):
        return None
    text = item.value.strip()
    if not text:
        return None
    if "rich_text" in item.type.lower():
        return to_html(text)
    if looks_like_html(text):
        return text
    return multiline_to_html(text)


def metafield_html(item: "ContentField | None") -> str | None:
    """Render a product metafield; plain text becomes a single paragraph."""
    if item is None or not isinstance(item.value, str):
        return None
    text = item.value.strip()
    if not text:
        return None
    if "rich_text" in item.type:
        return to_html(text)
    if looks_like_html(text):
        return text
    return f"<p>{_NEWLINES_RE.sub('<br/>', escape(text, quote=False))}</p>"


def extract_long_copy(fields: Iterable["ContentField"]) -> str | None:
    """Pick the best long copy from a set of fields by type rather than key."""
    fields = tuple(fields)
    rich = next(
        (item for item in fields if item.type in {"rich_text", "rich_text_field"}), None
    )
    if rich is not None and isinstance(rich.value, str) and rich.value.strip():
        return to_html(rich.value.strip())

    for item in fields:
        if not isinstance(item.value, str) or not item.value.strip():
            continue
        if looks_like_html(item.value) or _HTML_KEY_RE.search(item.key):
            return item.value.strip()

    multi = [
        item
        for item in fields
        if item.type == "multi_line_text_field" and isinstance(item.value, str)
    ]
    if multi:
        longest = max(multi, key=lambda item: len(item.value))
        if longest.value.strip():
            return multiline_to_html(longest.value.strip()) or None
    return None
