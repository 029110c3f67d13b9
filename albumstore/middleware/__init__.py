# Middleware package init
"""
Album Store — Middleware Package
================================

Middleware Chain:
    Request → [Request ID] → [Logging] → [CORS] → Route Handler

Request ID runs first so the access log line carries the id.
"""
