"""
Error types for the clip pipeline.

Components raise these; only the orchestrator turns them into user-facing
status messages.
"""

import json
from typing import Iterable, Optional

CHANNEL_OFFLINE_MARKER = "Clipping is not possible for an offline channel."


class ClipBotError(Exception):
    """Base exception for all clipbot errors."""
    pass


class ConfigurationError(ClipBotError):
    """Raised when required configuration is missing or malformed."""

    def __init__(self, message: str, missing: Optional[Iterable[str]] = None):
        super().__init__(message)
        self.missing = list(missing or [])


class TransportError(ClipBotError):
    """Network-level failure (DNS, connection reset, timeout)."""
    pass


class HttpStatusError(ClipBotError):
    """Upstream answered with a non-2xx status. Carries the raw body."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"HTTP {status_code}: {body}")
        self.status_code = status_code
        self.body = body


class ParseError(ClipBotError):
    """Upstream response was not valid JSON or lacked an expected field."""
    pass


class ChannelOfflineError(ClipBotError):
    """Twitch refused to clip because the channel is offline."""
    pass


class ServiceUnavailableError(ClipBotError):
    """Twitch reported its clip service as unavailable (503)."""
    pass


class UnclassifiedError(ClipBotError):
    """A clip failure whose body matched no known shape."""

    def __init__(self, raw: str):
        super().__init__(raw)
        self.raw = raw


def _is_service_unavailable(body: str) -> bool:
    try:
        payload = json.loads(body)
    except (TypeError, ValueError):
        return False
    return (
        isinstance(payload, dict)
        and payload.get("error") == "Service Unavailable"
        and payload.get("status") == 503
    )


def classify_clip_failure(error: HttpStatusError) -> ClipBotError:
    """Map a failed clip-creation response to a specific error type."""
    body = error.body or ""
    if CHANNEL_OFFLINE_MARKER in body:
        return ChannelOfflineError("Someone tried to clip while the channel is offline")
    if _is_service_unavailable(body):
        return ServiceUnavailableError(body)
    return UnclassifiedError(body)
