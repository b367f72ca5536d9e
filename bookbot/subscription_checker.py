"""
Channel subscription checks against the Telegram Bot API.
"""

import json
import logging

from telegram import Bot
from telegram.error import TelegramError

from config import SUBSCRIBED_STATUSES

from .errors import SubscriptionCheckError
from .models import SubscriptionResult

logger = logging.getLogger(__name__)


async def fetch_member_status(bot: Bot, channel: str, user_id: int) -> str:
    """Return the chat-member status of ``user_id`` in ``channel``."""
    try:
        member = await bot.get_chat_member(channel, user_id)
    except TelegramError as e:
        raise SubscriptionCheckError(channel, str(e)) from e
    return member.status


async def check_subscriptions(
    bot: Bot, user_id: int, channels: list[str]
) -> SubscriptionResult:
    """Check that a user is subscribed to every channel in ``channels``.

    Channels are checked one after another. A failed lookup counts as not
    subscribed for that channel and does not stop the remaining checks.
    """
    if not channels:
        logger.info("No channels required; granting VPN code access")
        return SubscriptionResult()

    failing = []
    for channel in channels:
        try:
            status = await fetch_member_status(bot, channel, user_id)
        except SubscriptionCheckError as e:
            logger.error(f"Failed to check subscription for {channel}: {e}")
            failing.append(channel)
            continue

        if status in SUBSCRIBED_STATUSES:
            logger.info(f"User {user_id} is subscribed to {channel}")
        else:
            logger.info(f"User {user_id} is not subscribed to {channel}")
            failing.append(channel)

    result = SubscriptionResult(failing=failing)
    logger.info(
        f"User {user_id} subscription check: subscribed={result.subscribed}, "
        f"failing={json.dumps(failing)}"
    )
    return result
