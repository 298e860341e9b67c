"""
Common schema types used across the API.
"""

from typing import Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing endpoint."""

    error: str
    request_id: Optional[str] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    version: str
    ai_configured: bool = False
