"""
Per-user request limiting for inbound updates.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from telegram import Update
from telegram.ext import ApplicationHandlerStop, ContextTypes

from config import RATE_LIMIT_MAX_REQUESTS, RATE_LIMIT_WINDOW

from .markup import plain_reply, send_reply

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "🚫 Too many requests. Please try again later."

Scheduler = Callable[[float, Callable[[], None]], Any]


def _call_later(delay: float, callback: Callable[[], None]) -> Any:
    return asyncio.get_running_loop().call_later(delay, callback)


class RateLimiter:
    """Leaky per-user counter.

    Every accepted request increments the user's counter and schedules its
    own decrement ``window`` seconds later, independent of later requests.
    A request arriving while the counter is at ``max_requests`` is rejected
    and not counted.
    """

    def __init__(
        self,
        max_requests: int = RATE_LIMIT_MAX_REQUESTS,
        window: float = RATE_LIMIT_WINDOW,
        scheduler: Scheduler | None = None,
    ):
        self.max_requests = max_requests
        self.window = window
        self._schedule = scheduler or _call_later
        self._counts: dict[int, int] = {}

    def count(self, user_id: int) -> int:
        return self._counts.get(user_id, 0)

    def hit(self, user_id: int) -> bool:
        """Register a request; return False if the user is over the limit."""
        if self.count(user_id) >= self.max_requests:
            return False
        self._counts[user_id] = self.count(user_id) + 1
        self._schedule(self.window, lambda: self._release(user_id))
        return True

    def _release(self, user_id: int):
        remaining = self.count(user_id) - 1
        if remaining > 0:
            self._counts[user_id] = remaining
        else:
            self._counts.pop(user_id, None)

    async def middleware(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Run ahead of every handler; stops dispatch for limited users."""
        user = update.effective_user
        if user is None:
            return

        if self.hit(user.id):
            return

        logger.info(f"Rate limit exceeded for user {user.id}")
        if update.effective_message:
            await send_reply(update.effective_message, plain_reply(RATE_LIMIT_MESSAGE))
        raise ApplicationHandlerStop
