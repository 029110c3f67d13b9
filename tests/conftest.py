"""
Album Store — Test Configuration (conftest.py)
==============================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Inventory:
    ├── fake_repository: In-memory AlbumRepository (no MongoDB needed)
    ├── fake_cache:      In-memory AlbumCache (no Redis needed)
    ├── mock_repository: AsyncMock repository for service unit tests
    ├── blue_train:      The sample album used across tests
    ├── app:             create_app() wired to the fakes
    └── test_client:     HTTPX AsyncClient talking to `app` in-process
"""

import os

# Override settings for testing BEFORE any app imports
os.environ["MONGO_URL"] = "mongodb://localhost:27017"
os.environ["MONGO_DATABASE"] = "albumstore_test"
os.environ["CACHE_ENABLED"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from typing import Any, AsyncIterator, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest
import pytest_asyncio
from httpx import AsyncClient, ASGITransport

from albumstore.cache import AlbumCache
from albumstore.queries import AlbumFilter, AlbumReplacement
from albumstore.repository import AlbumRepository
from albumstore.schemas.album import Album


# ══════════════════════════════════════════════════════════════════════════
# In-Memory Fakes
# ══════════════════════════════════════════════════════════════════════════

def _matches(query: AlbumFilter, document: Dict[str, Any]) -> bool:
    return all(document.get(field) == value for field, value in query.to_document().items())


class InMemoryAlbumRepository(AlbumRepository):
    """
    Stores plain dict documents, like the MongoDB collection does, so that
    replace semantics (whole document swapped) are exercised for real.
    """

    def __init__(self, documents: Optional[List[Dict[str, Any]]] = None):
        self.documents: List[Dict[str, Any]] = [dict(d) for d in documents or []]
        self.calls: List[str] = []
        self.ping_error: Optional[Exception] = None

    async def iter_all(self) -> AsyncIterator[Album]:
        self.calls.append("iter_all")
        for document in list(self.documents):
            yield Album.model_validate(document)

    async def find_one(self, query: AlbumFilter) -> Optional[Album]:
        self.calls.append("find_one")
        for document in self.documents:
            if _matches(query, document):
                return Album.model_validate(document)
        return None

    async def insert(self, album: Album) -> None:
        self.calls.append("insert")
        self.documents.append(album.model_dump())

    async def replace_one(self, query: AlbumFilter, replacement: AlbumReplacement) -> int:
        self.calls.append("replace_one")
        for index, document in enumerate(self.documents):
            if _matches(query, document):
                self.documents[index] = replacement.to_document()
                return 1
        return 0

    async def delete_one(self, query: AlbumFilter) -> int:
        self.calls.append("delete_one")
        for index, document in enumerate(self.documents):
            if _matches(query, document):
                del self.documents[index]
                return 1
        return 0

    async def ping(self) -> None:
        if self.ping_error is not None:
            raise self.ping_error


class InMemoryAlbumCache(AlbumCache):
    def __init__(self):
        self.entries: Dict[str, str] = {}
        self.set_error: Optional[Exception] = None
        self.closed = False

    async def set(self, key: str, value: str) -> None:
        if self.set_error is not None:
            raise self.set_error
        self.entries[key] = value

    async def get(self, key: str) -> Optional[str]:
        return self.entries.get(key)

    async def ping(self) -> None:
        pass

    async def close(self) -> None:
        self.closed = True


# ══════════════════════════════════════════════════════════════════════════
# Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def blue_train() -> Dict[str, Any]:
    return {"id": 1, "title": "Blue Train", "artist": "John Coltrane", "price": 56.99}


@pytest.fixture
def fake_repository():
    return InMemoryAlbumRepository()


@pytest.fixture
def fake_cache():
    return InMemoryAlbumCache()


@pytest.fixture
def mock_repository():
    """
    AsyncMock with the AlbumRepository method names.

    Usage:
        mock_repository.find_one.return_value = Album(id=1)
    """
    repository = AsyncMock(spec=AlbumRepository)
    repository.find_all = AsyncMock(return_value=[])
    repository.find_one = AsyncMock(return_value=None)
    repository.insert = AsyncMock(return_value=None)
    repository.replace_one = AsyncMock(return_value=1)
    repository.delete_one = AsyncMock(return_value=1)
    return repository


@pytest.fixture
def app(fake_repository):
    from albumstore.main import create_app
    return create_app(repository=fake_repository)


@pytest_asyncio.fixture
async def test_client(app):
    """
    HTTPX AsyncClient routed directly into the ASGI app (no server, no lifespan).

    Usage:
        async def test_list(test_client):
            response = await test_client.get("/albums")
    """
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
