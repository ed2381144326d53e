import os
import logging
import logging.config
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values, find_dotenv, load_dotenv

from clipbot.core.errors import ConfigurationError

# .env is looked up from the working directory, like the process environment
load_dotenv(find_dotenv(usecwd=True))

# Request ID of the inbound request being served, "-" outside a request
request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class RequestIDFilter(logging.Filter):
    """Stamps every record with the current request ID."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()
        return True


# Logging Setup
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(request_id)s] - %(message)s"
LOG_FILE_PATH = os.getenv("LOG_FILE_PATH", "")

LOGGING_CONFIG = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": LOG_FORMAT,
        }
    },
    "filters": {
        "request_id": {
            "()": RequestIDFilter,
        }
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "level": LOG_LEVEL,
            "formatter": "standard",
            "filters": ["request_id"],
            "stream": "ext://sys.stdout",
        },
    },
    "loggers": {
        "clipbot": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        # Let uvicorn log to console using its own handlers
        "uvicorn.error": {"level": "INFO"},
        "uvicorn.access": {"level": "INFO"},
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
}

if LOG_FILE_PATH:
    Path(LOG_FILE_PATH).parent.mkdir(parents=True, exist_ok=True)
    LOGGING_CONFIG["handlers"]["file"] = {
        "class": "logging.handlers.RotatingFileHandler",
        "level": LOG_LEVEL,
        "formatter": "standard",
        "filters": ["request_id"],
        "filename": LOG_FILE_PATH,
        "maxBytes": 10 * 1024 * 1024,  # 10 MB
        "backupCount": 5,
        "encoding": "utf8",
    }
    LOGGING_CONFIG["loggers"]["clipbot"]["handlers"].append("file")

logging.config.dictConfig(LOGGING_CONFIG)
logger = logging.getLogger("clipbot")


# -----------------------------------------------------------------------------
# Upstream endpoints
# -----------------------------------------------------------------------------

TWITCH_AUTH_HOST = "id.twitch.tv"
TWITCH_API_HOST = "api.twitch.tv"
TWITCH_CLIPS_URL = "https://clips.twitch.tv"
DISCORD_HOST = "discordapp.com"

# Twitch needs a moment to finish processing a new clip before the link works
DEFAULT_ANNOUNCE_DELAY_SECONDS = 4.0
DEFAULT_HTTP_TIMEOUT_SECONDS = 30.0

# Server
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 3000

# Environment
ENVIRONMENT = os.getenv("ENVIRONMENT", "development").lower()
IS_PRODUCTION = ENVIRONMENT == "production"
DEBUG = not IS_PRODUCTION

REQUIRED_ENV_VARS = (
    "APP_CLIENT_ID",
    "APP_CLIENT_SECRET",
    "APP_REFRESH_TOKEN",
    "DISCORD_WEBHOOK_ID",
    "DISCORD_WEBHOOK_TOKEN",
    "CHANNEL_BROADCAST_ID",
)


@dataclass(frozen=True)
class Settings:
    """Immutable runtime configuration shared by every component."""

    client_id: str
    client_secret: str
    refresh_token: str
    webhook_id: str
    webhook_token: str
    broadcaster_id: str
    announce_delay_seconds: float = DEFAULT_ANNOUNCE_DELAY_SECONDS
    http_timeout_seconds: float = DEFAULT_HTTP_TIMEOUT_SECONDS
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT


def _read_float(environ: Mapping[str, str], name: str, default: float) -> float:
    raw = environ.get(name, "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from exc
    if value < 0:
        raise ConfigurationError(f"{name} must not be negative, got {raw!r}")
    return value


def _read_environment() -> Dict[str, str]:
    dotenv = {
        key: value
        for key, value in dotenv_values(find_dotenv(usecwd=True)).items()
        if value is not None
    }
    return {**dotenv, **os.environ}


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build settings from the environment.

    Without an explicit mapping, the process environment is read on top of
    the nearest .env found from the current working directory.

    Raises ConfigurationError listing every required variable that is
    missing or empty.
    """
    env = _read_environment() if environ is None else environ

    missing = [name for name in REQUIRED_ENV_VARS if not env.get(name, "").strip()]
    if missing:
        raise ConfigurationError(
            "Missing required environment variables: " + ", ".join(missing),
            missing=missing,
        )

    port_raw = env.get("PORT", "").strip()
    try:
        port = int(port_raw) if port_raw else DEFAULT_PORT
    except ValueError as exc:
        raise ConfigurationError(f"PORT must be an integer, got {port_raw!r}") from exc

    return Settings(
        client_id=env["APP_CLIENT_ID"].strip(),
        client_secret=env["APP_CLIENT_SECRET"].strip(),
        refresh_token=env["APP_REFRESH_TOKEN"].strip(),
        webhook_id=env["DISCORD_WEBHOOK_ID"].strip(),
        webhook_token=env["DISCORD_WEBHOOK_TOKEN"].strip(),
        broadcaster_id=env["CHANNEL_BROADCAST_ID"].strip(),
        announce_delay_seconds=_read_float(
            env, "CLIP_ANNOUNCE_DELAY_SECONDS", DEFAULT_ANNOUNCE_DELAY_SECONDS
        ),
        http_timeout_seconds=_read_float(
            env, "HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS
        ),
        host=env.get("HOST", "").strip() or DEFAULT_HOST,
        port=port,
    )
