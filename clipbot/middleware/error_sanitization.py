"""
Error Sanitization Middleware

Turns unhandled exceptions into a generic JSON 500 so upstream error bodies
and credentials never reach the caller.
"""

from typing import Callable

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from clipbot.config import logger


class ErrorSanitizationMiddleware(BaseHTTPMiddleware):
    """
    Sanitizes error responses to prevent information leakage.

    In production:
    - Provides a generic error message with the request ID
    - Logs full errors server-side
    """

    def __init__(self, app: ASGIApp, debug: bool = False):
        super().__init__(app)
        self.debug = debug

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        try:
            return await call_next(request)
        except Exception as exc:
            request_id = getattr(request.state, "request_id", "unknown")
            logger.exception("Unhandled exception in request %s: %s", request_id, exc)

            if self.debug:
                raise

            return JSONResponse(
                status_code=500,
                content={"detail": "Internal server error", "request_id": request_id},
            )
