"""
Global middleware and exception handlers.
"""

from __future__ import annotations

import logging
import time

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from auth.errors import AuthServiceError, ErrorKind, HashFormatError

logger = logging.getLogger(__name__)

INTERNAL_ERROR = "Something went wrong!"


def _error_body(message: str, code: str) -> dict:
    return {"detail": message, "code": code}


def register_middleware(app: FastAPI) -> None:
    """Attach any app-level middleware and error handlers."""

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response

    @app.exception_handler(AuthServiceError)
    async def auth_service_error(request: Request, exc: AuthServiceError) -> JSONResponse:
        if isinstance(exc, HashFormatError):
            logger.error("Corrupt password hash on %s %s", request.method, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content=_error_body(INTERNAL_ERROR, "internal_error"),
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.message, exc.kind.value),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        fields = [".".join(str(p) for p in err.get("loc", ()) if p != "body") for err in exc.errors()]
        fields = [f for f in fields if f]
        message = "Invalid request body"
        if fields:
            message = "Invalid or missing fields: " + ", ".join(fields)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body(message, ErrorKind.VALIDATION.value),
        )

    @app.exception_handler(Exception)
    async def unhandled_error(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(INTERNAL_ERROR, "internal_error"),
        )
