"""
Unit tests for the subscription checker module.
"""

import pytest

from bookbot.errors import SubscriptionCheckError
from bookbot.subscription_checker import check_subscriptions, fetch_member_status

from conftest import make_bot


class TestCheckSubscriptions:
    """Test check_subscriptions."""

    @pytest.mark.asyncio
    async def test_no_channels_always_subscribed(self):
        bot = make_bot()

        result = await check_subscriptions(bot, 42, [])

        assert result.subscribed is True
        assert result.failing == []
        bot.get_chat_member.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["member", "administrator", "creator"])
    async def test_good_standing_statuses(self, status):
        bot = make_bot({"@a": status})

        result = await check_subscriptions(bot, 42, ["@a"])

        assert result.subscribed is True

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status", ["left", "kicked", "restricted"])
    async def test_other_statuses_fail(self, status):
        bot = make_bot({"@a": status})

        result = await check_subscriptions(bot, 42, ["@a"])

        assert result.subscribed is False
        assert result.failing == ["@a"]

    @pytest.mark.asyncio
    async def test_lookup_failure_is_not_subscribed(self):
        """A failing lookup counts against that channel only."""
        bot = make_bot({"@a": None, "@b": "member", "@c": "left"})

        result = await check_subscriptions(bot, 42, ["@a", "@b", "@c"])

        assert result.failing == ["@a", "@c"]
        assert result.subscribed is False
        assert bot.get_chat_member.call_count == 3

    @pytest.mark.asyncio
    async def test_failing_preserves_input_order(self):
        bot = make_bot({"@b": "member"})

        result = await check_subscriptions(bot, 42, ["@c", "@b", "@a"])

        assert result.failing == ["@c", "@a"]


class TestFetchMemberStatus:
    """Test fetch_member_status."""

    @pytest.mark.asyncio
    async def test_returns_status(self):
        bot = make_bot({"@a": "member"})

        assert await fetch_member_status(bot, "@a", 42) == "member"

    @pytest.mark.asyncio
    async def test_wraps_transport_error(self):
        bot = make_bot({"@a": None})

        with pytest.raises(SubscriptionCheckError) as exc_info:
            await fetch_member_status(bot, "@a", 42)

        assert exc_info.value.channel == "@a"
