"""Pydantic schemas for health check responses."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field


class HealthResponse(BaseModel):
    """Response body for the health check endpoint."""

    status: Literal["ok"] = Field(default="ok", description="Service status")
    service: str = Field(default="nas-api", description="Service name")
    environment: str = Field(description="Current app environment (e.g. dev, prod)")
    timestamp: datetime = Field(description="Server time when the check ran")
