# Services package init
"""
Album Store — Services Layer
============================

What:  Business logic between routes (HTTP) and the repository (persistence).

Service Inventory:
    - AlbumService:       create / list / get / replace / delete albums
    - sync_album_titles:  startup projection of titles into the cache
"""
