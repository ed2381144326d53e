"""
Security helpers for clipbot.

Provides:
- Request ID tracking
- Token fingerprinting and header masking for logs
"""

from clipbot.core.security.constants import REQUEST_ID_HEADER
from clipbot.core.security.utils import (
    get_request_id,
    hash_token,
    mask_headers,
)

__all__ = [
    "REQUEST_ID_HEADER",
    "get_request_id",
    "hash_token",
    "mask_headers",
]
