# app/core/middleware.py
"""
Core middleware registration for the FastAPI application.

Request IDs and timing are attached to every response so allocation
requests can be traced through the logs.
"""
from __future__ import annotations

import logging
import time
import uuid
from typing import Callable, Optional

from fastapi import FastAPI, Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

logger = logging.getLogger(__name__)


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Attach a request ID to request.state and the X-Request-ID header.

    An ID supplied by an upstream proxy is reused.
    """

    def __init__(self, app: ASGIApp, header_name: str = "X-Request-ID"):
        super().__init__(app)
        self.header_name = header_name

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get(self.header_name) or str(uuid.uuid4())
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[self.header_name] = request_id
        return response


class TimingMiddleware(BaseHTTPMiddleware):
    """Adds X-Process-Time and logs each completed request."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        start_time = time.perf_counter()
        response = await call_next(request)
        process_time = time.perf_counter() - start_time

        response.headers["X-Process-Time"] = f"{process_time:.4f}"
        logger.info(
            "%s %s -> %s in %.4fs",
            request.method,
            request.url.path,
            response.status_code,
            process_time,
            extra={
                "request_id": getattr(request.state, "request_id", "unknown"),
                "actor_id": request.headers.get("X-Actor-Id"),
                "client_host": request.client.host if request.client else None,
            },
        )
        return response


class ErrorLoggingMiddleware(BaseHTTPMiddleware):
    """Logs requests that escape the exception handlers."""

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "Request processing failed: %s %s: %s",
                request.method,
                request.url.path,
                exc,
                extra={
                    "request_id": getattr(request.state, "request_id", "unknown"),
                    "error_type": type(exc).__name__,
                },
                exc_info=True,
            )
            raise


def register_middlewares(app: FastAPI) -> None:
    """
    Register the core middlewares.

    Starlette runs the last added middleware first, so the request ID is
    assigned before timing and error logging see the request.
    """
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(TimingMiddleware)
    app.add_middleware(RequestIDMiddleware)
    logger.debug("Core middlewares registered")


def get_request_id(request: Request) -> Optional[str]:
    return getattr(request.state, "request_id", None)


__all__ = [
    "RequestIDMiddleware",
    "TimingMiddleware",
    "ErrorLoggingMiddleware",
    "register_middlewares",
    "get_request_id",
]
