"""
FastAPI application factory.

Serve with `uvicorn --factory audiocity.app:create_app` (installed by the
`serve` extra). The MediaLibrary is built once here and handed to the
routers through `app.state`.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from loguru import logger

from audiocity import __version__
from audiocity.core.config import Settings, get_settings
from audiocity.core.logging import setup_logging
from audiocity.repositories.errors import (
    ConflictError,
    NotFoundError,
    RepositoryError,
    StorageError,
    UnauthorizedError,
    ValidationError,
)
from audiocity.routers import playlists as playlists_router
from audiocity.routers import songs as songs_router
from audiocity.routers import users as users_router
from audiocity.services.library import MediaLibrary
from audiocity.services.youtube import YouTubeMediaSource

ERROR_STATUS = {
    ValidationError: 400,
    UnauthorizedError: 403,
    NotFoundError: 404,
    ConflictError: 409,
    StorageError: 500,
}


async def _repository_error_handler(request: Request, exc: RepositoryError) -> JSONResponse:
    status = ERROR_STATUS.get(type(exc), 500)
    if isinstance(exc, StorageError):
        logger.opt(exception=exc).error(f"Storage failure on {request.method} {request.url.path}")
    return JSONResponse({"error": type(exc).__name__, "detail": exc.message}, status_code=status)


def create_app(settings: Optional[Settings] = None, library: Optional[MediaLibrary] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level, settings.log_file)

    owned_source: Optional[YouTubeMediaSource] = None
    if library is None:
        owned_source = YouTubeMediaSource(max_workers=settings.download_workers)
        library = MediaLibrary.from_settings(settings, media_source=owned_source)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        if owned_source is not None:
            owned_source.shutdown(wait=True)
            logger.info("Media transfers stopped")

    app = FastAPI(title="AudioCity", version=__version__, lifespan=lifespan)
    app.state.settings = settings
    app.state.library = library
    app.add_exception_handler(RepositoryError, _repository_error_handler)

    app.include_router(songs_router.router)
    app.include_router(playlists_router.router)
    app.include_router(users_router.router)

    @app.get("/health")
    def health():
        return {"ok": True, "songs": len(library.songs.songs), "playlists": len(library.playlists.playlists)}

    banner = f"AudioCity ready for http://localhost:{settings.port}/"
    if settings.ngrok_url:
        banner += f" (ngrok: {settings.ngrok_url})"
    logger.info(banner)
    return app
