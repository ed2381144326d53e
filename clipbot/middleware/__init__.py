"""
Middleware stack for clipbot.

Provides:
- Request ID injection
- Request/response logging
- Error sanitization
"""

from clipbot.middleware.request_id import RequestIDMiddleware
from clipbot.middleware.logging import RequestLoggingMiddleware
from clipbot.middleware.error_sanitization import ErrorSanitizationMiddleware

__all__ = [
    "RequestIDMiddleware",
    "RequestLoggingMiddleware",
    "ErrorSanitizationMiddleware",
]
