"""
Album Store — Album Route Handlers
==================================

What:  The five CRUD endpoints under /albums.
How:   Path ids and bodies are decoded by FastAPI before the handler runs, so
       a non-integer id or malformed JSON becomes a 400 without touching the
       store. Handlers then make one AlbumService call each.
Who:   Any HTTP client; there is no authentication.

Route Inventory:
    POST   /albums        → 201 + submitted album
    GET    /albums        → 200 + array of albums ([] when empty)
    GET    /albums/{id}   → 200 + album
    PUT    /albums/{id}   → 200 + submitted album (full replace)
    DELETE /albums/{id}   → 200 + {"message": "Album deleted"}
"""

import logging
from typing import Annotated, List

from fastapi import APIRouter, Depends, Path, status

from albumstore.deps import get_album_service
from albumstore.exceptions import ValidationError
from albumstore.schemas.album import (
    INT64_MAX,
    INT64_MIN,
    Album,
    ErrorResponse,
    MessageResponse,
)
from albumstore.services.album_service import AlbumService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/albums", tags=["Albums"])

_BAD_REQUEST = {400: {"description": "Malformed id or body", "model": ErrorResponse}}
_NOT_FOUND = {404: {"description": "No album has this id", "model": ErrorResponse}}
_SERVER_ERROR = {500: {"description": "Database error", "model": ErrorResponse}}

# Optional sign, ASCII digits, nothing else: no spaces, "_", "." or exponent
DECIMAL_ID_PATTERN = r"^[+-]?[0-9]+$"


def parse_album_id(
    album_id: Annotated[
        str,
        Path(
            pattern=DECIMAL_ID_PATTERN,
            max_length=64,
            description="Album id (decimal, signed 64-bit)",
        ),
    ],
) -> int:
    """
    Converts the path segment into an album id.

    The segment is matched as text first, so nothing reaches the store unless
    it is a plain decimal integer inside the signed 64-bit range.
    """
    value = int(album_id)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValidationError(
            message=f"album_id: {album_id} is out of range for a signed 64-bit integer",
            field="album_id",
        )
    return value


# Path parameter shared by the single-album routes
AlbumIdPath = Annotated[int, Depends(parse_album_id)]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=Album,
    responses={**_BAD_REQUEST, **_SERVER_ERROR},
    summary="Create an album",
)
async def create_album(
    album: Album,
    service: AlbumService = Depends(get_album_service),
) -> Album:
    """Stores the submitted album as-is and echoes it back."""
    return await service.create_album(album)


@router.get(
    "",
    response_model=List[Album],
    responses=_SERVER_ERROR,
    summary="List all albums",
)
async def list_albums(
    service: AlbumService = Depends(get_album_service),
) -> List[Album]:
    return await service.list_albums()


@router.get(
    "/{album_id}",
    response_model=Album,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Get one album by id",
)
async def get_album(
    album_id: AlbumIdPath,
    service: AlbumService = Depends(get_album_service),
) -> Album:
    return await service.get_album(album_id)


@router.put(
    "/{album_id}",
    response_model=Album,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Replace an album",
    description=(
        "Replaces the whole stored document matching the path id with the request body. "
        "Fields omitted from the body are stored as zero values."
    ),
)
async def update_album(
    album_id: AlbumIdPath,
    album: Album,
    service: AlbumService = Depends(get_album_service),
) -> Album:
    return await service.update_album(album_id, album)


@router.delete(
    "/{album_id}",
    response_model=MessageResponse,
    responses={**_BAD_REQUEST, **_NOT_FOUND, **_SERVER_ERROR},
    summary="Delete an album",
)
async def delete_album(
    album_id: AlbumIdPath,
    service: AlbumService = Depends(get_album_service),
) -> MessageResponse:
    await service.delete_album(album_id)
    return MessageResponse(message="Album deleted")
