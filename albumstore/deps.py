"""
Album Store — Route Dependencies
================================

What:  FastAPI dependencies that hand the shared store handles to routes.
Why:   Handles live on `app.state` (set by create_app or the lifespan), so
       routes never import a module-level client and tests can inject fakes.
"""

from typing import Optional

from fastapi import Request

from albumstore.cache import AlbumCache
from albumstore.repository import AlbumRepository
from albumstore.services.album_service import AlbumService


def get_album_service(request: Request) -> AlbumService:
    service = getattr(request.app.state, "album_service", None)
    if service is None:
        raise RuntimeError("AlbumService not available on app.state (lifespan not initialized).")
    return service


def get_repository(request: Request) -> Optional[AlbumRepository]:
    return getattr(request.app.state, "repository", None)


def get_cache(request: Request) -> Optional[AlbumCache]:
    return getattr(request.app.state, "cache", None)
