"""
Tremu Backend — Shared Schema Building Blocks
===============================================

What:  The response envelope used by every endpoint, plus error and health
       payloads.

Envelope:
    {"message": "...", "data": {...} | [...]}      success
    {"message": "...", "error": "..."}             failure (error optional)
"""

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

# Primary keys are 32-bit INTEGER columns
MAX_ID = 2**31 - 1


class CamelModel(BaseModel):
    """Base for API payloads: camelCase aliases, readable from ORM objects."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Envelope(BaseModel, Generic[DataT]):
    message: str = Field(description="Human-readable outcome")
    data: DataT = Field(description="Response payload")


class MessageResponse(BaseModel):
    """Envelope for operations that return no payload (deletes, invites)."""
    message: str = Field(description="Human-readable outcome")


class ErrorResponse(BaseModel):
    """
    Error envelope returned by every exception handler.

    ``error`` carries a machine-oriented detail: the underlying exception
    message for 500s, the decoder message for 401s, and so on.
    """
    message: str = Field(description="Human-readable error description")
    error: Optional[str] = Field(default=None, description="Underlying error detail")


class HealthResponse(CamelModel):
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
