from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain acknowledgement, e.g. {"message": "Success"} after login."""
    message: str = Field(..., description="Human readable message")
    details: Optional[dict] = Field(default=None, description="Optional extra data")


class ErrorInfo(BaseModel):
    type: str = Field(..., description="http_error, validation_error or internal_error")
    message: str = Field(..., description="Human-readable error message")
    details: Optional[Any] = Field(default=None, description="Validation issues or upstream payload")


# PUBLIC_INTERFACE
class ErrorResponse(BaseModel):
    """Body of every error response produced by the exception handlers."""
    status: int = Field(..., description="HTTP status code")
    error: ErrorInfo
    correlation_id: Optional[str] = Field(default=None, description="Value of X-Correlation-ID")
    user: Optional[str] = Field(default=None, description="Session user, when the request was authenticated")
    path: Optional[str] = Field(default=None)
    method: Optional[str] = Field(default=None)
    timestamp: datetime = Field(..., description="When the error was produced (UTC)")
