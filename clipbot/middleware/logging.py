"""
Request Logging Middleware

One line when a clip command arrives and one when it is answered. The
request ID comes from the log format, so it is not repeated here.
"""

import time
from typing import Callable, Optional

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from clipbot.config import logger


def client_address(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Logs method, path, caller and how long the answer took.

    Clip requests include the announce delay in their duration. Query strings
    are left out since they carry chatter names.
    """

    def __init__(self, app: ASGIApp, exclude_paths: Optional[set] = None):
        super().__init__(app)
        self.exclude_paths = exclude_paths or {"/health", "/healthz"}

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if request.url.path in self.exclude_paths:
            return await call_next(request)

        started = time.monotonic()
        logger.info("%s %s from %s", request.method, request.url.path, client_address(request))

        try:
            response = await call_next(request)
        except Exception:
            logger.error(
                "%s %s crashed after %.0fms",
                request.method,
                request.url.path,
                (time.monotonic() - started) * 1000,
            )
            raise

        logger.info(
            "%s %s answered %d in %.0fms",
            request.method,
            request.url.path,
            response.status_code,
            (time.monotonic() - started) * 1000,
        )
        return response
