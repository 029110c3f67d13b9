"""
Album Store — Startup Cache Sync
================================

What:  Copies every album title from MongoDB into the cache, once, at startup.
How:   Streams the collection and writes `album:{id}` → title per document.
When:  From the lifespan, after both store connections succeeded and before
       the server accepts requests.

Failure policy:
    The first read, decode, or write error aborts the whole sync and is
    raised as StartupError, which stops the process. Nothing is retried
    and already-written keys are left in place.
"""

import logging

from albumstore.cache import AlbumCache, cache_key
from albumstore.exceptions import StartupError
from albumstore.repository import AlbumRepository

logger = logging.getLogger(__name__)


async def sync_album_titles(repository: AlbumRepository, cache: AlbumCache) -> int:
    """
    Write one title entry per stored album.

    Returns:
        Number of cache entries written.

    Raises:
        StartupError: Reading an album or writing its entry failed.
    """
    written = 0
    try:
        async for album in repository.iter_all():
            await cache.set(cache_key(album.id), album.title)
            written += 1
    except Exception as e:
        raise StartupError(
            message=f"Cache sync failed after {written} entries: {e}",
            context={"written": written, "error_type": type(e).__name__},
        ) from e

    logger.info("Cache sync complete: %d album titles written", written)
    return written
