"""Common DTOs for API responses and error handling."""
from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response model."""
    error: str = Field(..., description="Error message describing what went wrong")
    details: Optional[Any] = Field(None, description="Raw backend error (diagnostic routes only)")


class HealthResponse(BaseModel):
    """Health check response model."""
    status: str = Field(..., description="Health status", examples=["healthy"])


class RootResponse(BaseModel):
    """Root endpoint response model."""
    status: str = Field(..., description="API status", examples=["ok"])
    service: str = Field(..., description="Service name", examples=["lendbridge-backend"])
    version: str = Field(..., description="API version", examples=["0.1.0"])


ERROR_RESPONSES: dict[int | str, dict[str, Any]] = {
    401: {"model": ErrorResponse, "description": "Unauthenticated - No valid session"},
    500: {"model": ErrorResponse, "description": "Backend failure"},
}
