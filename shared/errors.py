"""
Shared error handling for the Cosmos exporter.
"""

from typing import Dict, Any, Optional
from pydantic import BaseModel


class ErrorResponse(BaseModel):
    """Standard error response format."""

    request_id: Optional[str] = None
    code: str
    message: str
    details: Dict[str, Any] = {}


class ExporterException(Exception):
    """Base exception for exporter services."""

    def __init__(self, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        self.code = code
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def to_response(self, request_id: Optional[str] = None) -> ErrorResponse:
        """Convert to error response."""
        return ErrorResponse(
            request_id=request_id,
            code=self.code,
            message=self.message,
            details=self.details
        )


class UpstreamError(ExporterException):
    """Upstream node or directory errors (transport failures, bad status codes)."""

    def __init__(self, service: str, message: str = "Upstream error", details: Optional[Dict[str, Any]] = None):
        self.service = service
        super().__init__("UPSTREAM_ERROR", f"{service}: {message}", details)


class UpstreamDecodeError(ExporterException):
    """Upstream response did not match the expected shape."""

    def __init__(self, service: str, message: str = "Could not decode response", details: Optional[Dict[str, Any]] = None):
        self.service = service
        super().__init__("DECODE_ERROR", f"{service}: {message}", details)

