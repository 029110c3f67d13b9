"""
Album Store — Album Service (Business Logic)
============================================

What:  The five album operations behind the HTTP routes.
Why:   Keeps status-code decisions (via exceptions) out of the route handlers
       and driver details out of the service.
How:   Each method makes one repository call with a typed filter, converts
       "nothing matched" into NotFoundError, and wraps any backend failure
       in DatabaseError.

Semantics worth knowing:
    - create: echoes the submitted album; no id is generated, duplicates
      are accepted.
    - update: full-document replace keyed by the path id. The stored document
      becomes exactly the submitted album, including its own `id` field.
    - No retries, no transactions. Concurrent writes to one id: last writer wins.
"""

import logging
from typing import List

from albumstore.exceptions import DatabaseError, NotFoundError
from albumstore.queries import AlbumFilter, AlbumReplacement
from albumstore.repository import AlbumRepository
from albumstore.schemas.album import Album

logger = logging.getLogger(__name__)


class AlbumService:
    """
    Business logic layer for album operations.

    Stateless apart from the repository handle it is constructed with; one
    instance is shared by all requests (see main.create_app).
    """

    def __init__(self, repository: AlbumRepository):
        self.repository = repository

    async def create_album(self, album: Album) -> Album:
        try:
            await self.repository.insert(album)
        except Exception as e:
            raise _database_error("inserting album", e, album_id=album.id)
        logger.info("Album %s created", album.id)
        return album

    async def list_albums(self) -> List[Album]:
        """
        Returns every stored album, or an empty list.

        Raises:
            DatabaseError: Read failed or a stored document did not decode.
        """
        try:
            return await self.repository.find_all()
        except Exception as e:
            raise _database_error("listing albums", e)

    async def get_album(self, album_id: int) -> Album:
        """
        Retrieve a single album by id.

        Raises:
            NotFoundError: No document has this id (→ 404)
            DatabaseError: Query failed (→ 500)
        """
        try:
            album = await self.repository.find_one(AlbumFilter(id=album_id))
        except Exception as e:
            raise _database_error("fetching album", e, album_id=album_id)

        if album is None:
            raise NotFoundError(resource="album", resource_id=album_id)
        return album

    async def update_album(self, album_id: int, album: Album) -> Album:
        """
        Replace the document whose id equals `album_id` with `album`.

        Fields missing from the request body were already defaulted to zero
        values by the schema, so they overwrite whatever was stored.

        Raises:
            NotFoundError: No document matched (→ 404)
            DatabaseError: Replace failed (→ 500)
        """
        try:
            matched = await self.repository.replace_one(
                AlbumFilter(id=album_id), AlbumReplacement(album)
            )
        except Exception as e:
            raise _database_error("replacing album", e, album_id=album_id)

        if matched == 0:
            raise NotFoundError(resource="album", resource_id=album_id)
        logger.info("Album %s replaced", album_id)
        return album

    async def delete_album(self, album_id: int) -> None:
        try:
            deleted = await self.repository.delete_one(AlbumFilter(id=album_id))
        except Exception as e:
            raise _database_error("deleting album", e, album_id=album_id)

        if deleted == 0:
            raise NotFoundError(resource="album", resource_id=album_id)
        logger.info("Album %s deleted", album_id)


def _database_error(operation: str, error: Exception, **context) -> DatabaseError:
    """Logs a backend failure and wraps it for the 500 handler."""
    logger.error("Database error %s: %s", operation, error, exc_info=True)
    context["operation"] = operation
    context["original_error"] = str(error)
    context["error_type"] = type(error).__name__
    return DatabaseError(
        message=f"A database error occurred while {operation}.",
        context=context,
    )
