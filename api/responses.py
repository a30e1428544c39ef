"""
Standardized API response models and utilities.
Provides consistent response formatting across all endpoints.
"""

from typing import Optional, Any, Mapping
from pydantic import BaseModel, Field
from datetime import datetime, timezone


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ErrorDetail(BaseModel):
    """Detailed error information"""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Error message")
    details: Optional[Any] = Field(None, description="Additional error details")


class ErrorResponse(BaseModel):
    """Standardized error response"""

    success: bool = Field(False, description="Always false for errors")
    error: ErrorDetail = Field(..., description="Error details")
    timestamp: datetime = Field(default_factory=_now, description="Error timestamp")


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    store_open: bool = Field(..., description="Whether the favorites store is open")
    favorites: int = Field(..., description="Number of saved restaurants")
    timestamp: datetime = Field(default_factory=_now, description="Check timestamp")


class DeleteResponse(BaseModel):
    """Acknowledgement for delete operations"""

    status: str = "ok"
    removed: str


def error_response(code: str, message: str, details: Optional[Mapping[str, Any]] = None) -> dict:
    """Create a standardized, JSON-ready error response body"""
    return ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details)
    ).model_dump(mode="json")
