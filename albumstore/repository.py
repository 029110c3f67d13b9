"""
Album Store — Album Repository
==============================

What:  Persistence contract for albums plus its MongoDB implementation.
Why:   AlbumService depends on the abstract `AlbumRepository`, so tests can
       substitute an in-memory fake and the service never imports the driver.
How:   `MongoAlbumRepository` wraps one `AsyncCollection` from PyMongo's
       asyncio API. Driver errors propagate unchanged; translating them into
       HTTP responses is the service layer's job.

Document shape:
    {"_id": ObjectId(...), "id": 1, "title": "...", "artist": "...", "price": 56.99}
    `_id` belongs to MongoDB and is projected away on every read.
"""

import logging
from abc import ABC, abstractmethod
from typing import AsyncIterator, List, Optional

from pymongo.asynchronous.collection import AsyncCollection

from albumstore.queries import AlbumFilter, AlbumReplacement
from albumstore.schemas.album import Album

logger = logging.getLogger(__name__)

# Projection applied to reads so documents decode straight into Album
_ALBUM_PROJECTION = {"_id": False}


def _decode(document) -> Album:
    # Lax on the way out: BSON int64 comes back as bson.int64.Int64
    return Album.model_validate(document, strict=False)


class AlbumRepository(ABC):
    """
    Abstract interface to the album collection.

    Contract:
        - Filters are exact matches on `id` (see AlbumFilter)
        - Backend errors are raised unchanged to the caller
        - A stored document that does not decode as an Album raises
          pydantic.ValidationError
    """

    @abstractmethod
    def iter_all(self) -> AsyncIterator[Album]:
        """Lazily yields every stored album, in no particular order."""
        ...

    async def find_all(self) -> List[Album]:
        """Drains `iter_all()` into a list."""
        return [album async for album in self.iter_all()]

    @abstractmethod
    async def find_one(self, query: AlbumFilter) -> Optional[Album]:
        """Returns the first album matching the filter, or None."""
        ...

    @abstractmethod
    async def insert(self, album: Album) -> None:
        ...

    @abstractmethod
    async def replace_one(self, query: AlbumFilter, replacement: AlbumReplacement) -> int:
        """Replaces the first matching document; returns the matched count."""
        ...

    @abstractmethod
    async def delete_one(self, query: AlbumFilter) -> int:
        """Deletes the first matching document; returns the deleted count."""
        ...

    @abstractmethod
    async def ping(self) -> None:
        """Raises if the backend is unreachable."""
        ...


class MongoAlbumRepository(AlbumRepository):
    """AlbumRepository backed by a MongoDB collection."""

    def __init__(self, collection: AsyncCollection):
        self._collection = collection

    async def iter_all(self) -> AsyncIterator[Album]:
        cursor = self._collection.find({}, _ALBUM_PROJECTION)
        async for document in cursor:
            yield _decode(document)

    async def find_one(self, query: AlbumFilter) -> Optional[Album]:
        document = await self._collection.find_one(query.to_document(), _ALBUM_PROJECTION)
        if document is None:
            return None
        return _decode(document)

    async def insert(self, album: Album) -> None:
        result = await self._collection.insert_one(album.model_dump())
        logger.debug("Inserted album id=%s as %s", album.id, result.inserted_id)

    async def replace_one(self, query: AlbumFilter, replacement: AlbumReplacement) -> int:
        result = await self._collection.replace_one(
            query.to_document(), replacement.to_document()
        )
        return result.matched_count

    async def delete_one(self, query: AlbumFilter) -> int:
        result = await self._collection.delete_one(query.to_document())
        return result.deleted_count

    async def ping(self) -> None:
        await self._collection.database.command("ping")
