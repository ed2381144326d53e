"""
Security Constants

Centralized constants for security module.
"""

# Request ID header
REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64

# Keys whose values never appear in logs
SENSITIVE_KEYS = frozenset({
    "token",
    "secret",
    "password",
    "authorization",
    "client-id",
})
