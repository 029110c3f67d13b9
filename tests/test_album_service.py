"""
Album Store — Album Service Unit Tests
======================================

What:  Tests for AlbumService (create, list, get, update, delete).
How:   Uses an AsyncMock repository (no MongoDB, no HTTP).

What we test:
    ✅ Each operation passes a typed id filter to the repository
    ✅ Zero matches raise NotFoundError
    ✅ Backend failures are wrapped in DatabaseError with the raw text in context
"""

import pytest

from albumstore.exceptions import DatabaseError, NotFoundError
from albumstore.queries import AlbumFilter, AlbumReplacement
from albumstore.schemas.album import Album
from albumstore.services.album_service import AlbumService


class TestAlbumServiceCreate:

    @pytest.mark.asyncio
    async def test_create_inserts_and_echoes(self, mock_repository):
        service = AlbumService(mock_repository)
        album = Album(id=1, title="Blue Train", artist="John Coltrane", price=56.99)

        result = await service.create_album(album)

        assert result == album
        mock_repository.insert.assert_awaited_once_with(album)

    @pytest.mark.asyncio
    async def test_create_wraps_backend_error(self, mock_repository):
        mock_repository.insert.side_effect = RuntimeError("write concern failed")
        service = AlbumService(mock_repository)

        with pytest.raises(DatabaseError) as exc_info:
            await service.create_album(Album(id=1))

        assert exc_info.value.original_error == "write concern failed"
        assert exc_info.value.context["album_id"] == 1


class TestAlbumServiceList:

    @pytest.mark.asyncio
    async def test_list_empty(self, mock_repository):
        service = AlbumService(mock_repository)

        assert await service.list_albums() == []

    @pytest.mark.asyncio
    async def test_list_wraps_backend_error(self, mock_repository):
        mock_repository.find_all.side_effect = TimeoutError("server selection timed out")
        service = AlbumService(mock_repository)

        with pytest.raises(DatabaseError):
            await service.list_albums()


class TestAlbumServiceGet:

    @pytest.mark.asyncio
    async def test_get_found(self, mock_repository):
        album = Album(id=3, title="Sarah Vaughan", artist="Sarah Vaughan", price=39.99)
        mock_repository.find_one.return_value = album
        service = AlbumService(mock_repository)

        result = await service.get_album(3)

        assert result == album
        mock_repository.find_one.assert_awaited_once_with(AlbumFilter(id=3))

    @pytest.mark.asyncio
    async def test_get_not_found(self, mock_repository):
        service = AlbumService(mock_repository)

        with pytest.raises(NotFoundError) as exc_info:
            await service.get_album(404)

        assert exc_info.value.message == "album not found"
        assert exc_info.value.context["resource_id"] == 404


class TestAlbumServiceUpdate:

    @pytest.mark.asyncio
    async def test_update_replaces_by_path_id(self, mock_repository):
        service = AlbumService(mock_repository)
        album = Album(id=1, title="Blue Train", artist="John Coltrane", price=45.0)

        result = await service.update_album(1, album)

        assert result == album
        mock_repository.replace_one.assert_awaited_once_with(
            AlbumFilter(id=1), AlbumReplacement(album)
        )

    @pytest.mark.asyncio
    async def test_update_no_match(self, mock_repository):
        mock_repository.replace_one.return_value = 0
        service = AlbumService(mock_repository)

        with pytest.raises(NotFoundError):
            await service.update_album(1, Album(id=1))

    @pytest.mark.asyncio
    async def test_update_wraps_backend_error(self, mock_repository):
        mock_repository.replace_one.side_effect = ConnectionError("connection reset")
        service = AlbumService(mock_repository)

        with pytest.raises(DatabaseError) as exc_info:
            await service.update_album(1, Album(id=1))

        assert exc_info.value.context["operation"] == "replacing album"


class TestAlbumServiceDelete:

    @pytest.mark.asyncio
    async def test_delete_found(self, mock_repository):
        service = AlbumService(mock_repository)

        await service.delete_album(1)

        mock_repository.delete_one.assert_awaited_once_with(AlbumFilter(id=1))

    @pytest.mark.asyncio
    async def test_delete_no_match(self, mock_repository):
        mock_repository.delete_one.return_value = 0
        service = AlbumService(mock_repository)

        with pytest.raises(NotFoundError):
            await service.delete_album(1)
