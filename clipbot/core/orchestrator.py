"""
Clip pipeline: token -> clip -> delay -> Discord announcement.

Each stage is guarded on its own. The first failure ends the run and is
reported as a status string; nothing is retried or rolled back.
"""

from typing import Callable, Optional

from clipbot.config import Settings, logger
from clipbot.core import messages
from clipbot.core.discord_webhook import DiscordAnnouncer
from clipbot.core.errors import ChannelOfflineError, ServiceUnavailableError
from clipbot.core.http_client import HttpClient
from clipbot.core.security import hash_token
from clipbot.core.timer import CancellableDelay
from clipbot.core.twitch_auth import TwitchTokenProvider
from clipbot.core.twitch_clips import ClipResult, TwitchClipCreator


class ClipOrchestrator:
    """Runs one clip request end to end and returns a status message."""

    def __init__(
        self,
        token_provider: TwitchTokenProvider,
        clip_creator: TwitchClipCreator,
        announcer: DiscordAnnouncer,
        announce_delay_seconds: float,
        delay_factory: Callable[[float], CancellableDelay] = CancellableDelay,
    ):
        self.token_provider = token_provider
        self.clip_creator = clip_creator
        self.announcer = announcer
        self.announce_delay_seconds = announce_delay_seconds
        self.delay_factory = delay_factory

    @classmethod
    def from_settings(cls, settings: Settings, http: HttpClient) -> "ClipOrchestrator":
        return cls(
            token_provider=TwitchTokenProvider(settings, http),
            clip_creator=TwitchClipCreator(settings, http),
            announcer=DiscordAnnouncer(settings, http),
            announce_delay_seconds=settings.announce_delay_seconds,
        )

    async def run(
        self,
        display_name: Optional[str] = None,
        delay: Optional[CancellableDelay] = None,
    ) -> str:
        """
        Create a clip and announce it.

        Args:
            display_name: Chatter who asked for the clip, credited in Discord.
            delay: Pre-built delay, so a caller holding it can cancel the run
                between clip creation and announcement.

        Returns:
            One of the status strings in clipbot.core.messages.
        """
        try:
            access_token = await self.token_provider.get_access_token()
        except Exception as exc:
            logger.error("problem-fetching-access-token: %s", exc, exc_info=True)
            return messages.STATUS_TOKEN_FAILED

        try:
            logger.info("Using access token %s", hash_token(access_token))
            clip: ClipResult = await self.clip_creator.create_clip(access_token)

            delay = delay or self.delay_factory(self.announce_delay_seconds)
            logger.debug("Waiting %.1fs before announcing clip %s", delay.seconds, clip.clip_id)
            if not await delay.wait():
                logger.warning("Announcement of clip %s cancelled", clip.clip_id)
                return messages.STATUS_CLIP_FAILED
        except ServiceUnavailableError as exc:
            logger.error("problem-creating-clip: Twitch unavailable: %s", exc)
            return messages.STATUS_SERVICE_UNAVAILABLE
        except ChannelOfflineError as exc:
            logger.error("problem-creating-clip: %s", exc)
            return messages.STATUS_CHANNEL_OFFLINE
        except Exception as exc:
            logger.error("problem-creating-clip: %s", exc, exc_info=True)
            return messages.STATUS_CLIP_FAILED

        try:
            await self.announcer.announce(messages.discord_message(clip.clip_url, display_name))
        except Exception as exc:
            logger.error("problem-sending-to-discord: %s", exc, exc_info=True)
            return messages.STATUS_DISCORD_FAILED

        try:
            return messages.twitch_chat_message()
        except Exception as exc:
            logger.error("problem-getting-twitch-chat-response: %s", exc, exc_info=True)
            return messages.STATUS_RESPONSE_FAILED
