"""
Twitch Helix clip creation.

Failed requests are classified into ChannelOfflineError,
ServiceUnavailableError or UnclassifiedError before they leave this module.
"""

import json
from dataclasses import dataclass

from clipbot.config import TWITCH_API_HOST, TWITCH_CLIPS_URL, Settings, logger
from clipbot.core.errors import HttpStatusError, ParseError, classify_clip_failure
from clipbot.core.http_client import HttpClient

CLIPS_PATH = "/helix/clips"


@dataclass(frozen=True)
class ClipResult:
    """A freshly created clip."""

    clip_id: str
    clip_url: str


def build_clip_url(clip_id: str) -> str:
    return f"{TWITCH_CLIPS_URL}/{clip_id}"


class TwitchClipCreator:
    """Creates clips of the configured broadcaster's live stream."""

    def __init__(self, settings: Settings, http: HttpClient):
        self.settings = settings
        self.http = http

    async def create_clip(self, access_token: str) -> ClipResult:
        try:
            response = await self.http.request(
                "POST",
                TWITCH_API_HOST,
                CLIPS_PATH,
                headers={
                    "Authorization": f"Bearer {access_token}",
                    "Client-ID": self.settings.client_id,
                },
                params={
                    "has_delay": "false",
                    "broadcaster_id": self.settings.broadcaster_id,
                },
            )
        except HttpStatusError as exc:
            raise classify_clip_failure(exc) from exc

        return self._parse_clip(response)

    def _parse_clip(self, response: str) -> ClipResult:
        try:
            payload = json.loads(response)
        except ValueError as exc:
            raise ParseError(f"Clip response is not valid JSON: {response[:200]}") from exc

        data = payload.get("data") if isinstance(payload, dict) else None
        if not isinstance(data, list) or not data:
            raise ParseError("Clip response has no data")

        clip_data = data[0]
        clip_id = clip_data.get("id") if isinstance(clip_data, dict) else None
        if not clip_id or not isinstance(clip_id, str):
            raise ParseError("Clip response has no clip id")

        logger.debug("Clip data: %s", clip_data)
        logger.info("Created clip %s", clip_id)
        return ClipResult(clip_id=clip_id, clip_url=build_clip_url(clip_id))
