"""
Album Store — Pydantic Request/Response Schemas
===============================================

What:  The album record shared by request bodies, responses, and stored documents.
How:   FastAPI validates request bodies against `Album` and serializes responses
       from it; the repository validates documents read from MongoDB against it.

Decoding rules:
    - Every field has a zero-value default, so `{}` decodes to
      `{"id": 0, "title": "", "artist": "", "price": 0.0}`.
    - Unknown fields are ignored.
    - `id` must fit a signed 64-bit integer (the BSON int64 range).
    - Types are strict: `true` or `1.0` is not an id, `"56.99"` is not a price.
    - `NaN` and `Infinity` are rejected for `price`.
"""

from typing import Annotated

from pydantic import BaseModel, Field

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

AlbumID = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


class Album(BaseModel):
    """
    What:  One album record.
    Who:   Body of POST/PUT /albums, items of GET /albums, body of GET /albums/{id}.

    `id` is supplied by the client and is not unique by any constraint.
    """
    id: AlbumID = Field(default=0, description="Client-supplied identifier")
    title: str = Field(default="", description="Album title")
    artist: str = Field(default="", description="Performing artist")
    price: float = Field(default=0.0, allow_inf_nan=False, description="Price, no validated range")

    model_config = {
        "extra": "ignore",
        # JSON types must match: no bool or 1.0 for id, no "56.99" for price.
        # A JSON integer is still a valid price.
        "strict": True,
        "json_schema_extra": {
            "examples": [
                {"id": 1, "title": "Blue Train", "artist": "John Coltrane", "price": 56.99}
            ]
        },
    }


class MessageResponse(BaseModel):
    """Confirmation body, e.g. `{"message": "Album deleted"}`."""
    message: str


class ErrorResponse(BaseModel):
    """
    What:  Error body for every 4xx/5xx response.

    Example:
        {"error": "album not found"}
    """
    error: str = Field(description="Human-readable error description")


class HealthResponse(BaseModel):
    """Health check response showing service and dependency status."""
    status: str = Field(description="Overall status: healthy, degraded, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Persistence connectivity: connected, disconnected")
    cache: str = Field(description="Cache connectivity: connected, disconnected, disabled")
    uptime_seconds: float = Field(description="Seconds since service started")
