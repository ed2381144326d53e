"""
Request ID Middleware

Tags each request with an ID that is echoed back to the caller and stamped
on every log line written while the request is served.
"""

from typing import Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from clipbot.config import request_id_var
from clipbot.core.security import REQUEST_ID_HEADER, get_request_id


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Binds the request ID to the logging context for the request's lifetime.

    A chat bot can pass its own X-Request-ID to correlate a clip command
    with the service logs; otherwise a fresh ID is generated.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = get_request_id(request)
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
