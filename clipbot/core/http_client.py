"""
Thin async HTTPS client used by every upstream integration.

Returns the response body as text on 2xx, raises HttpStatusError with the
raw body otherwise.
"""

from typing import Any, Dict, Optional, Union

import httpx

from clipbot.config import DEFAULT_HTTP_TIMEOUT_SECONDS, logger
from clipbot.core.errors import HttpStatusError, TransportError
from clipbot.core.security import mask_headers


class HttpClient:
    """Performs single HTTPS requests against a host on port 443."""

    def __init__(
        self,
        timeout: float = DEFAULT_HTTP_TIMEOUT_SECONDS,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.timeout = timeout
        self._transport = transport

    async def request(
        self,
        method: str,
        host: str,
        path: str,
        body: Optional[Union[str, bytes]] = None,
        headers: Optional[Dict[str, str]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> str:
        url = f"https://{host}{path}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            try:
                response = await client.request(
                    method,
                    url,
                    content=body,
                    headers=headers,
                    params=params,
                )
            except httpx.TransportError as exc:
                logger.warning("%s %s%s failed: %s", method, host, path, exc)
                raise TransportError(f"{method} {host}{path} failed: {exc}") from exc

        # Query strings carry credentials, so only host and path are logged
        logger.debug(
            "%s %s%s -> %d | headers=%s",
            method,
            host,
            path,
            response.status_code,
            mask_headers(headers or {}),
        )

        if response.status_code < 200 or response.status_code >= 300:
            raise HttpStatusError(response.status_code, response.text)
        return response.text
