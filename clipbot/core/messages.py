"""
User-facing status strings.

Chat users get the STATUS_* strings back as the endpoint response; Discord
gets the announcement built by discord_message().
"""

from typing import Optional

STATUS_SUCCESS = "A new clip was created in the Discord server! :)"

STATUS_TOKEN_FAILED = "Unexpected problem when fetching the access token."
STATUS_CLIP_FAILED = "Unexpected problem when creating the clip."
STATUS_CHANNEL_OFFLINE = "I can't clip while the channel is offline :("
STATUS_SERVICE_UNAVAILABLE = (
    "Twitch API didn't want to create a clip right now, you need to manually create the clip :("
)
STATUS_DISCORD_FAILED = "Unexpected problem when posting to Discord."
STATUS_RESPONSE_FAILED = "Unexpected problem getting response to Twitch chat"


def twitch_chat_message() -> str:
    return STATUS_SUCCESS


def discord_message(clip_url: str, display_name: Optional[str] = None) -> str:
    """Announcement posted to Discord, crediting the chatter when known."""
    credit = f" by @{display_name}" if display_name else ""
    return f"A new clip was created{credit}! :)\n\n{clip_url}"
