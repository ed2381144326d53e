"""Shared fixtures: settings and a fake Twitch/Discord upstream."""

import json
import time
from typing import Any, Callable, Dict, List, Tuple, Union

import httpx
import pytest

from clipbot.config import Settings
from clipbot.core.http_client import HttpClient

TOKEN_ROUTE = ("id.twitch.tv", "/oauth2/token")
CLIPS_ROUTE = ("api.twitch.tv", "/helix/clips")
WEBHOOK_ROUTE = ("discordapp.com", "/api/webhooks/hook-id/hook-token")

Reply = Union[Tuple[int, Any], Callable[[httpx.Request], httpx.Response]]


class FakeUpstream:
    """
    Answers outbound requests by (host, path) and records every request.

    A reply is either ``(status, payload)`` where a str payload is sent as
    is and anything else as JSON, or a callable taking the request.
    """

    def __init__(self):
        self.requests: List[httpx.Request] = []
        self.sent_at: List[float] = []
        self.replies: Dict[Tuple[str, str], Reply] = {
            TOKEN_ROUTE: (200, {"access_token": "tok-abc", "expires_in": 14000}),
            CLIPS_ROUTE: (202, {"data": [{"id": "abc123", "edit_url": "https://clips.twitch.tv/abc123/edit"}]}),
            WEBHOOK_ROUTE: (204, ""),
        }

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        self.sent_at.append(time.monotonic())
        reply = self.replies.get((request.url.host, request.url.path))
        if reply is None:
            return httpx.Response(404, text="no route")
        if callable(reply):
            return reply(request)
        status, payload = reply
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, json=payload)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def routes(self) -> List[Tuple[str, str]]:
        return [(r.url.host, r.url.path) for r in self.requests]

    def webhook_payloads(self) -> List[Dict[str, Any]]:
        return [
            json.loads(r.content)
            for r in self.requests
            if (r.url.host, r.url.path) == WEBHOOK_ROUTE
        ]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        client_id="client-id",
        client_secret="client-secret",
        refresh_token="refresh-token",
        webhook_id="hook-id",
        webhook_token="hook-token",
        broadcaster_id="12345",
        announce_delay_seconds=0,
    )


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http(upstream: FakeUpstream) -> HttpClient:
    return HttpClient(timeout=5.0, transport=upstream.transport)
