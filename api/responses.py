"""
Standardized API response models and utilities.
Provides consistent response formatting across all endpoints.
"""

from typing import Any, Optional
from datetime import datetime, timezone

from pydantic import BaseModel, Field


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


class StatusResponse(BaseModel):
    """Acknowledgement for operations without a resource to return"""

    status: str = Field("ok", description="Operation status")
    id: Optional[str] = Field(None, description="Affected resource id")


class HealthResponse(BaseModel):
    """Health check response"""

    status: str = Field(..., description="Service status")
    service: str = Field(..., description="Service name")
    version: Optional[str] = Field(None, description="Service version")
    database: Optional[str] = Field(None, description="Database connectivity")
    timestamp: datetime = Field(default_factory=_now, description="Check timestamp")


# Documented on routers so clients see the error envelope in the OpenAPI schema
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid input"},
    401: {"model": ErrorResponse, "description": "Not signed in"},
    403: {"model": ErrorResponse, "description": "Not allowed"},
    404: {"model": ErrorResponse, "description": "Not found"},
}


def error_response(code: str, message: str, details: Any = None) -> dict:
    """Create a standardized, JSON-ready error payload"""
    payload = ErrorResponse(
        error=ErrorDetail(code=code, message=message, details=details)
    )
    return payload.model_dump(mode="json", exclude_none=True)
