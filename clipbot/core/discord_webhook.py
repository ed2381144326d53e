import json

from clipbot.config import DISCORD_HOST, Settings, logger
from clipbot.core.http_client import HttpClient


class DiscordAnnouncer:
    """Posts plain text messages to a Discord channel through a webhook."""

    def __init__(self, settings: Settings, http: HttpClient):
        self.settings = settings
        self.http = http

    @property
    def webhook_path(self) -> str:
        return f"/api/webhooks/{self.settings.webhook_id}/{self.settings.webhook_token}"

    async def announce(self, message: str) -> None:
        await self.http.request(
            "POST",
            DISCORD_HOST,
            self.webhook_path,
            body=json.dumps({"content": message}),
            headers={"Content-Type": "application/json"},
        )
        logger.info("Posted clip announcement to Discord")
