"""
Configuration file for the Book Advice & VPN Sponsor Bot.
Contains all string constants, default values, and configuration settings.
"""

import os

from dotenv import load_dotenv

from bookbot.errors import ConfigError
from bookbot.models import Settings

# Environment variable names
ENV_BOT_TOKEN = "TELEGRAM_BOT_TOKEN"
ENV_ADMIN_PASSWORD = "ADMIN_PASSWORD"
ENV_CHANNELS_FILE = "CHANNELS_FILE"

# File paths
DEFAULT_CHANNELS_FILE = "channels.json"

# Google Books catalog (no API key required)
GOOGLE_BOOKS_API_URL = "https://www.googleapis.com/books/v1/volumes"
DEFAULT_MAX_RESULTS = 5
DESCRIPTION_LIMIT = 200
DESCRIPTION_SUFFIX = "..."

# Placeholders for missing volume fields
UNKNOWN_TITLE = "Unknown Title"
UNKNOWN_AUTHOR = "Unknown Author"
NO_DESCRIPTION = "No description available."
NO_LINK = "#"

# Rate limiting defaults
RATE_LIMIT_MAX_REQUESTS = 10
RATE_LIMIT_WINDOW = 60  # seconds

# Channels
CHANNEL_MARKER = "@"
TELEGRAM_JOIN_URL = "https://t.me/"
SUBSCRIBED_STATUSES = ("member", "administrator", "creator")
BOT_ADMIN_STATUSES = ("administrator", "creator")

# VPN codes
VPN_CODE_PREFIX = "VPN-"
VPN_CODE_LENGTH = 8


def resolve_channels_file(channels_file: str | None = None) -> str:
    """Pick the channels file: explicit path, then env, then the default."""
    load_dotenv()
    return channels_file or os.getenv(ENV_CHANNELS_FILE) or DEFAULT_CHANNELS_FILE


def load_settings(channels_file: str | None = None) -> Settings:
    """Load settings from the environment (and .env if present)."""
    load_dotenv()

    bot_token = os.getenv(ENV_BOT_TOKEN)
    if not bot_token:
        raise ConfigError(f"Missing {ENV_BOT_TOKEN} in .env")

    admin_password = os.getenv(ENV_ADMIN_PASSWORD)
    if not admin_password:
        raise ConfigError(f"Missing {ENV_ADMIN_PASSWORD} in .env")

    return Settings(
        bot_token=bot_token,
        admin_password=admin_password,
        channels_file=resolve_channels_file(channels_file),
        catalog_url=GOOGLE_BOOKS_API_URL,
    )
