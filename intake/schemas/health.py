"""Pydantic schemas for health check responses."""

from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    storage_backend: Literal["file", "remote"] = Field(
        description="Active record storage backend",
    )
    storage: Literal["available", "unavailable"] | None = Field(
        default=None,
        description="Whether the storage backend answered a read",
    )
