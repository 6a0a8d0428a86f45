"""Pydantic schemas for health check responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok", "error"] = Field(default="ok", description="Service status")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    timestamp: datetime = Field(description="Server time when the check ran")
    uptime: float = Field(description="Seconds since the process started")
    database: Literal["connected", "disconnected"] = Field(
        description="Database connectivity status",
    )
