"""
Pydantic models for API responses.
"""

from datetime import datetime, timezone
from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

PLAIN_TEXT_CONTENT_TYPE = "text/plain; charset=UTF-8"


# -----------------------------------------------------------------------------
# Base Models
# -----------------------------------------------------------------------------

class BaseSchema(BaseModel):
    """Base schema with common configuration."""
    model_config = ConfigDict(
        str_strip_whitespace=True,
        populate_by_name=True,
    )


# -----------------------------------------------------------------------------
# Clip Endpoint
# -----------------------------------------------------------------------------

class ClipStatusResponse(BaseSchema):
    """
    Envelope returned by the clip endpoint.

    The transport status is always 200; the outcome is only in ``body``.
    """
    status_code: int = Field(default=200, alias="statusCode")
    headers: Dict[str, str] = Field(
        default_factory=lambda: {"content-type": PLAIN_TEXT_CONTENT_TYPE}
    )
    body: str


# -----------------------------------------------------------------------------
# Health
# -----------------------------------------------------------------------------

class HealthResponse(BaseSchema):
    """Health check response."""
    status: str = "healthy"
    version: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
