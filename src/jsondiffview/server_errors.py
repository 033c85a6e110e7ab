"""Request tracing and error envelopes for the HTTP API.

Provides:
- Request ID tracing
- Error taxonomy with consistent envelopes
"""

from __future__ import annotations

import logging
import secrets
import time
import traceback
import uuid
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

logger = logging.getLogger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class ErrorCategory(str, Enum):
    """Error categories for classification."""

    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


class ErrorSeverity(str, Enum):
    """Error severity levels."""

    ERROR = "error"
    WARNING = "warning"


@dataclass
class ErrorEnvelope:
    """Standard error response envelope."""

    success: bool = False
    error_id: str = ""
    request_id: str = ""
    timestamp: str = ""
    category: ErrorCategory = ErrorCategory.INTERNAL
    severity: ErrorSeverity = ErrorSeverity.ERROR
    message: str = ""
    code: str = ""
    traceback: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "success": self.success,
            "error_id": self.error_id,
            "request_id": self.request_id,
            "timestamp": self.timestamp,
            "error": {
                "category": self.category.value,
                "severity": self.severity.value,
                "message": self.message,
                "code": self.code,
            },
            "meta": {
                "traceback": self.traceback,
            },
        }


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Request ID middleware for tracing."""

    def __init__(self, app, header_name: str = REQUEST_ID_HEADER):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        """Add request ID to response."""
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[self.header_name] = request_id

        return response


def generate_error_id() -> str:
    """Generate unique error ID."""
    timestamp = int(time.time() * 1000)
    random_part = secrets.token_hex(8)
    return f"err_{timestamp}_{random_part}"


def create_error_response(
    request_id: str,
    error: Exception | str,
    category: ErrorCategory = ErrorCategory.INTERNAL,
    severity: ErrorSeverity = ErrorSeverity.ERROR,
    include_traceback: bool = False,
) -> dict[str, Any]:
    """Create a standardized error response.

    Args:
        request_id: Request trace ID
        error: The exception (or message) to report
        category: Error category
        severity: Error severity
        include_traceback: Whether to include the current traceback

    Returns:
        Error envelope as dictionary
    """
    envelope = ErrorEnvelope(
        error_id=generate_error_id(),
        request_id=request_id,
        timestamp=datetime.now(UTC).isoformat(),
        category=category,
        severity=severity,
        message=str(error),
        code=f"JSONDIFF_{category.value.upper()}_{severity.value.upper()}",
    )

    if include_traceback:
        envelope.traceback = traceback.format_exc()

    return envelope.to_dict()
