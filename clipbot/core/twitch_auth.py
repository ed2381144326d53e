import json

from clipbot.config import TWITCH_AUTH_HOST, Settings, logger
from clipbot.core.errors import ParseError
from clipbot.core.http_client import HttpClient
from clipbot.core.security import hash_token

TOKEN_PATH = "/oauth2/token"


class TwitchTokenProvider:
    """Exchanges the configured refresh token for a fresh access token."""

    def __init__(self, settings: Settings, http: HttpClient):
        self.settings = settings
        self.http = http

    async def get_access_token(self) -> str:
        response = await self.http.request(
            "POST",
            TWITCH_AUTH_HOST,
            TOKEN_PATH,
            params={
                "grant_type": "refresh_token",
                "refresh_token": self.settings.refresh_token,
                "client_id": self.settings.client_id,
                "client_secret": self.settings.client_secret,
            },
        )

        try:
            payload = json.loads(response)
        except ValueError as exc:
            raise ParseError(f"Token response is not valid JSON: {response[:200]}") from exc

        token = payload.get("access_token") if isinstance(payload, dict) else None
        if not token or not isinstance(token, str):
            raise ParseError("Token response has no access_token")

        logger.debug("Fetched access token %s", hash_token(token))
        return token
