"""
Pydantic request/response models for the API.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict


class HealthResponse(BaseModel):
    """Response model for GET /health."""

    model_config = ConfigDict(extra="forbid")
    status: Literal["ok"]
    uptime_seconds: float
    started_at: str


class ErrorResponse(BaseModel):
    """Standard error response model."""

    model_config = ConfigDict(extra="forbid")
    error: str
    message: str
    details: dict[str, Any]


class FinancialDataResponse(BaseModel):
    """Response model for GET /financial-data."""

    model_config = ConfigDict(extra="forbid")
    internal_id: str
    vppa_id: str
