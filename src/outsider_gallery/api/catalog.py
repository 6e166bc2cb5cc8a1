"""Read-only catalog endpoints backing the gallery pages."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING, Literal

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import Response

if TYPE_CHECKING:
    from outsider_gallery.containers import AppContainer

router = APIRouter(prefix="/api", tags=["catalog"])
sitemap_router = APIRouter(tags=["sitemap"])


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not found")


@router.get("/home")
async def home(request: Request) -> dict[str, object]:
    """Hero exhibition with upcoming and past shows."""
    container: AppContainer = request.app.state.container
    return {"home": await container.exhibition_service.home(date.today())}


@router.get("/exhibitions")
async def list_exhibitions(
    request: Request,
    status_filter: Literal["current", "upcoming", "past"] = Query(
        default="current", alias="status"
    ),
    year: int | None = None,
    page: int = Query(default=1, ge=1),
    page_size: int = Query(default=12, ge=1, le=100, alias="pageSize"),
) -> dict[str, object]:
    """One page of exhibitions in a phase, optionally limited to a year."""
    container: AppContainer = request.app.state.container
    result = await container.exhibition_service.list_exhibitions(
        status_filter, date.today(), year=year, page=page, page_size=page_size
    )
    return {"exhibitions": result}


@router.get("/exhibitions/{handle}")
async def exhibition_detail(handle: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    detail = await container.exhibition_service.get_exhibition(handle, date.today())
    if detail is None:
        raise _not_found()
    return {"exhibition": detail}


@router.get("/exhibitions/{handle}/artworks/{artwork_handle}")
async def exhibition_artwork(
    handle: str, artwork_handle: str, request: Request
) -> dict[str, object]:
    """Artwork page opened from an exhibition."""
    container: AppContainer = request.app.state.container
    artwork = await container.artwork_service.get_artwork(artwork_handle, handle)
    if artwork is None:
        raise _not_found()
    return {"artwork": artwork}


@router.get("/artworks/{handle}")
async def artwork_detail(handle: str, request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    artwork = await container.artwork_service.get_artwork(handle)
    if artwork is None:
        raise _not_found()
    return {"artwork": artwork}


@router.get("/artists")
async def list_artists(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"artists": await container.artist_service.list_artists()}


@router.get("/artists/{handle}")
async def artist_detail(handle: str, request: Request) -> dict[str, object]:
    """Artist profile with works and exhibitions."""
    container: AppContainer = request.app.state.container
    artist = await container.artist_service.get_artist(handle)
    if artist is None:
        raise _not_found()
    return {"artist": artist}


@router.get("/stockroom")
async def stockroom(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"stockroom": await container.stockroom_service.stockroom()}


@router.get("/collect")
async def collect(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    return {"collect": await container.stockroom_service.collect()}


@router.get("/about")
async def about(request: Request) -> dict[str, object]:
    container: AppContainer = request.app.state.container
    content = await container.about_service.get_about()
    if content is None:
        raise _not_found()
    return {"about": content}


@sitemap_router.get("/sitemap.xml")
async def sitemap(request: Request) -> Response:
    """Sitemap of static pages and public content."""
    container: AppContainer = request.app.state.container
    xml = await container.sitemap_service.render_xml()
    return Response(content=xml, media_type="application/xml")
