# Routes package init
"""
Album Store — API Routes Package
================================

Route Inventory:
    - albums.py:  POST/GET /albums, GET/PUT/DELETE /albums/{id}
    - health.py:  GET /health

Routes stay thin: decode the request, call AlbumService, return the model.
Status codes for failures come from the exception handlers in main.py.
"""
