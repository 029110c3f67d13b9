"""
Album Store — Typed Query Builders
==================================

What:  Small value objects that render MongoDB filter and replacement documents.
Why:   Field names live in one place instead of being retyped as dict keys at
       every call site; a typo becomes an AttributeError in tests, not a
       filter that silently matches nothing.
Who:   Built by AlbumService, consumed by AlbumRepository implementations.
"""

from dataclasses import dataclass
from typing import Any, Dict

from albumstore.schemas.album import Album

# Document field used for every equality filter
ID_FIELD = "id"


@dataclass(frozen=True)
class AlbumFilter:
    """Exact-match filter on the album `id` field."""
    id: int

    def to_document(self) -> Dict[str, Any]:
        return {ID_FIELD: self.id}


@dataclass(frozen=True)
class AlbumReplacement:
    """
    Full-document replacement.

    The rendered document contains every album field, so fields the client
    omitted are written as their zero values rather than left untouched.
    """
    album: Album

    def to_document(self) -> Dict[str, Any]:
        return self.album.model_dump()
