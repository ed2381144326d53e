"""
Security Utilities

Request ID tracking, token hashing and masking for safe logging.
"""

import hashlib
import re
import secrets
from typing import Dict

from fastapi import Request

from clipbot.core.security.constants import (
    MAX_REQUEST_ID_LENGTH,
    REQUEST_ID_HEADER,
    SENSITIVE_KEYS,
)

_REQUEST_ID_RE = re.compile(r"^[a-zA-Z0-9_-]+$")


def generate_request_id() -> str:
    """Generate a unique request ID."""
    return secrets.token_hex(16)


def get_request_id(request: Request) -> str:
    """Get or generate request ID from request."""
    request_id = request.headers.get(REQUEST_ID_HEADER)
    if request_id and len(request_id) <= MAX_REQUEST_ID_LENGTH and _REQUEST_ID_RE.match(request_id):
        return request_id
    return generate_request_id()


def hash_token(token: str) -> str:
    """
    Create a short fingerprint of a token for logging.

    Never log raw tokens - use this to correlate runs instead.
    """
    return hashlib.sha256(token.encode()).hexdigest()[:16]


def mask_headers(
    headers: Dict[str, str],
    sensitive_keys: frozenset = SENSITIVE_KEYS,
) -> Dict[str, str]:
    """Replace credential-bearing header values for safe logging."""
    return {
        key: "[REDACTED]" if any(s in key.lower() for s in sensitive_keys) else value
        for key, value in headers.items()
    }
