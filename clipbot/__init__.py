"""Creates Twitch clips on demand and announces them in Discord."""

from clipbot.version import __version__

__all__ = ["__version__"]
