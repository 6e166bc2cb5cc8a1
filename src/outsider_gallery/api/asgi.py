"""ASGI entrypoint for the gallery storefront API."""

from outsider_gallery.api.app import create_app
from outsider_gallery.containers import build_container

app = create_app(build_container())
