"""
The /admin workflow: replace the required channels and grant admin status.
"""

import hmac
import json
import logging
import re
from typing import Any

from telegram import Bot

from config import BOT_ADMIN_STATUSES, CHANNEL_MARKER

from .channel_store import ChannelStore
from .errors import (
    AuthError,
    ChannelValidationError,
    ParseError,
    PrivilegeError,
    SubscriptionCheckError,
)
from .subscription_checker import fetch_member_status

logger = logging.getLogger(__name__)

ADMIN_ARGS_RE = re.compile(r"^(\S+)\s+(.+)$", re.DOTALL)

USAGE_MESSAGE = (
    "Please provide a password and channels. "
    'Example: /admin <password> ["@channel1","@channel2"]'
)
FORMAT_MESSAGE = '❌ Invalid format. Use: /admin <password> ["@channel1","@channel2"]'
INVALID_PASSWORD_MESSAGE = "❌ Invalid password."
INVALID_CHANNELS_MESSAGE = (
    "❌ Channels must be an array of valid Telegram usernames starting with @."
)


def parse_admin_args(args: str) -> tuple[str, Any]:
    """Split ``<password> <json>`` and decode the JSON part."""
    if not args:
        raise ParseError("empty /admin arguments", USAGE_MESSAGE)

    match = ADMIN_ARGS_RE.match(args)
    if not match:
        raise ParseError(f"invalid /admin input: {args}", FORMAT_MESSAGE)

    password, raw_channels = match.groups()
    try:
        channels = json.loads(raw_channels)
    except json.JSONDecodeError as e:
        raise ParseError(f"invalid channel JSON: {e}", FORMAT_MESSAGE) from e
    return password, channels


def validate_channels(channels: Any) -> list[str]:
    """Accept only a list of strings that all start with the marker."""
    if not isinstance(channels, list) or not all(
        isinstance(ch, str) and ch.startswith(CHANNEL_MARKER) for ch in channels
    ):
        raise ChannelValidationError(
            f"invalid channels: {json.dumps(channels)}", INVALID_CHANNELS_MESSAGE
        )
    return channels


async def verify_bot_is_admin(bot: Bot, channels: list[str]):
    """Ensure the bot administers every channel; stop at the first failure."""
    for channel in channels:
        try:
            status = await fetch_member_status(bot, channel, bot.id)
        except SubscriptionCheckError as e:
            logger.error(f"Failed to verify bot admin status in {channel}: {e}")
            raise PrivilegeError(
                channel,
                str(e),
                f"❌ Error verifying bot admin status in {channel}. "
                "Ensure the channel is public and the bot is an admin.",
            ) from e

        if status not in BOT_ADMIN_STATUSES:
            logger.info(f"Bot is not admin in {channel}")
            raise PrivilegeError(
                channel,
                f"bot status in {channel} is {status}",
                f"❌ Bot must be an admin in {channel}. "
                "Please add the bot as an admin and try again.",
            )


class AdminWorkflow:
    """Validates an /admin request and applies it to the shared state."""

    def __init__(self, admin_password: str, store: ChannelStore, admins: set[int]):
        self.admin_password = admin_password
        self.store = store
        self.admins = admins

    def check_password(self, password: str) -> bool:
        return hmac.compare_digest(password.encode(), self.admin_password.encode())

    async def run(self, bot: Bot, user_id: int, args: str) -> str:
        """Apply ``args`` for ``user_id`` and return the confirmation text.

        Raises a ``BotError`` subclass on the first failing step; nothing is
        changed in that case.
        """
        password, channels = parse_admin_args(args)
        logger.info(f"Parsed /admin input from user {user_id}: channels={json.dumps(channels)}")

        if not self.check_password(password):
            logger.info(f"Invalid password attempt for /admin by user {user_id}")
            raise AuthError("invalid admin password", INVALID_PASSWORD_MESSAGE)

        channels = validate_channels(channels)
        await verify_bot_is_admin(bot, channels)

        old_channels = self.store.replace(channels)
        self.admins.add(user_id)
        logger.info(
            f"Admin {user_id} updated required channels from "
            f"{json.dumps(old_channels)} to {json.dumps(channels)}"
        )
        return (
            "✅ You are now an admin! Required channels updated from "
            f"[{', '.join(old_channels)}] to [{', '.join(channels)}]"
        )
