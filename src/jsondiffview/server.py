"""JSON diff HTTP server with API endpoints."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi import status as http_status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.exceptions import HTTPException

from jsondiffview import __version__
from jsondiffview.config import DiffConfig
from jsondiffview.errors import ConfigError, ParseFailure
from jsondiffview.formatter import format_failure
from jsondiffview.pipeline import compare, format_document, swap_documents
from jsondiffview.server_errors import (
    ErrorCategory,
    ErrorSeverity,
    REQUEST_ID_HEADER,
    RequestIDMiddleware,
    create_error_response,
)

logger = logging.getLogger(__name__)


class DiffRequest(BaseModel):
    """Request model for the diff endpoint.

    Options left unset fall back to the server configuration.
    """

    before: str
    after: str
    sort_keys: bool | None = None
    ignore_array_order: bool | None = None


class FormatRequest(BaseModel):
    """Request model for the format endpoint."""

    text: str


class SwapRequest(BaseModel):
    """Request model for the swap endpoint."""

    before: str
    after: str


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    timestamp: str


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan."""
    logger.info("JSON diff server starting up")
    yield
    logger.info("JSON diff server shutting down")


def create_app(config: DiffConfig | None = None, debug: bool = False) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        config: Default options and limits (read from the environment if None)
        debug: Include tracebacks in error envelopes

    Returns:
        Configured FastAPI application
    """
    config = config or DiffConfig.from_env()

    app = FastAPI(
        title="JSON Diff API",
        description="Line diffs of JSON documents with key and array order normalization",
        version=__version__,
        lifespan=lifespan,
    )
    app.add_middleware(RequestIDMiddleware)

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        """Handle uncaught exceptions with standardized error envelopes.

        These responses bypass RequestIDMiddleware, so the header is set here.
        """
        request_id = (
            getattr(request.state, "request_id", None)
            or request.headers.get(REQUEST_ID_HEADER)
            or "unknown"
        )

        if isinstance(exc, ConfigError):
            category = ErrorCategory.CONFIGURATION
        else:
            category = ErrorCategory.INTERNAL

        logger.error(f"Unhandled error (request: {request_id}): {exc}", exc_info=debug)

        return JSONResponse(
            status_code=http_status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=create_error_response(request_id, exc, category=category, include_traceback=debug),
            headers={REQUEST_ID_HEADER: request_id},
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Wrap HTTP exceptions in a standardized error envelope."""
        request_id = getattr(request.state, "request_id", "unknown")
        category = ErrorCategory.NOT_FOUND if exc.status_code == 404 else ErrorCategory.VALIDATION
        content = create_error_response(
            request_id,
            exc.detail,
            category=category if exc.status_code < 500 else ErrorCategory.INTERNAL,
            severity=ErrorSeverity.WARNING if exc.status_code < 500 else ErrorSeverity.ERROR,
        )
        return JSONResponse(status_code=exc.status_code, content=content)

    @app.exception_handler(RequestValidationError)
    async def request_validation_exception_handler(request: Request, exc: RequestValidationError):
        """Wrap request validation errors in a standardized envelope."""
        request_id = getattr(request.state, "request_id", "unknown")
        content = create_error_response(
            request_id,
            exc,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.WARNING,
        )
        return JSONResponse(status_code=http_status.HTTP_422_UNPROCESSABLE_ENTITY, content=content)

    @app.get("/health", response_model=HealthResponse)
    async def health():
        """Health check endpoint."""
        return HealthResponse(
            status="healthy",
            version=__version__,
            timestamp=datetime.now(UTC).strftime("%Y-%m-%dT%H:%M:%SZ"),
        )

    @app.get("/api/v1/config")
    async def get_config():
        """Default options and limits applied to requests."""
        return config.to_dict()

    @app.post("/api/v1/diff")
    def diff(request: DiffRequest):
        """Compare two documents.

        Parse failures are a normal outcome and come back with ok=false.
        """
        request_config = config.with_overrides(
            sort_keys=request.sort_keys,
            ignore_array_order=request.ignore_array_order,
        )
        result = compare(request.before, request.after, config=request_config)
        if isinstance(result, ParseFailure):
            return {"ok": False, "error": result.to_dict(), "text": format_failure(result)}
        return result.to_dict()

    @app.post("/api/v1/format")
    def format_text(request: FormatRequest):
        """Pretty-print one document; unparseable text is echoed back."""
        formatted = format_document(request.text, config)
        return {"text": formatted, "changed": formatted != request.text}

    @app.post("/api/v1/swap")
    async def swap(request: SwapRequest):
        """Exchange the two sides."""
        before, after = swap_documents(request.before, request.after)
        return {"before": before, "after": after}

    return app
