"""
Album Store — Application Package Initializer
=============================================

What: Marks the `albumstore` directory as a Python package.
Who:  Imported by uvicorn (`albumstore.main:app`), pytest, and the console script.

Architecture Note:
    ┌─────────────────────────────────────┐
    │           Routes (API Layer)        │  ← HTTP concerns only
    ├─────────────────────────────────────┤
    │         Services (Business Logic)   │  ← Not-found / error translation
    ├─────────────────────────────────────┤
    │       Schemas & Queries (Data)      │  ← Pydantic album + typed filters
    ├─────────────────────────────────────┤
    │   Repository / Cache (Persistence)  │  ← MongoDB documents, Redis keys
    └─────────────────────────────────────┘
"""

__version__ = "1.0.0"
