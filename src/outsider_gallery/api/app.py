"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from outsider_gallery.adapters.errors import UpstreamError
from outsider_gallery.api.cart import router as cart_router
from outsider_gallery.api.catalog import router as catalog_router
from outsider_gallery.api.catalog import sitemap_router
from outsider_gallery.api.leads import router as leads_router
from outsider_gallery.app_logging import configure_logging
from outsider_gallery.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(cart_router)
    app.include_router(leads_router)
    app.include_router(catalog_router)
    app.include_router(sitemap_router)

    @app.exception_handler(UpstreamError)
    async def upstream_error(request: Request, exc: UpstreamError) -> JSONResponse:
        logger.exception(
            "Upstream failure on %s",
            request.url.path,
            exc_info=exc,
            extra={"component": "catalog"},
        )
        return JSONResponse(
            {"detail": "Upstream service unavailable"},
            status_code=status.HTTP_502_BAD_GATEWAY,
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app
