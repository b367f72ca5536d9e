"""
Unit tests for the markup module.
"""

from unittest.mock import AsyncMock, Mock

import pytest

from bookbot.markup import escape, escape_markdown, escape_markdown_v2, plain_reply, send_reply
from bookbot.models import MarkupMode, Reply


class TestEscaping:
    """Test the two escaping dialects."""

    def test_markdown_v2_escapes_full_set(self):
        assert escape_markdown_v2("a_b*c[d]e(f)g~h`i>j#k+l-m=n|o{p}q.r!s") == (
            "a\\_b\\*c\\[d\\]e\\(f\\)g\\~h\\`i\\>j\\#k\\+l\\-m\\=n\\|o\\{p\\}q\\.r\\!s"
        )

    def test_legacy_markdown_escapes_minimal_set(self):
        assert escape_markdown("@my_chan: *x* `y` [z] (w).") == (
            "@my\\_chan: \\*x\\* \\`y\\` \\[z] (w)."
        )

    def test_escape_selects_by_mode(self):
        assert escape("a.b", MarkupMode.MARKDOWN_V2) == "a\\.b"
        assert escape("a.b", MarkupMode.MARKDOWN) == "a.b"

    def test_plain_reply_uses_one_mode(self):
        reply = plain_reply("x_y.", MarkupMode.MARKDOWN)

        assert reply.text == "x\\_y."
        assert reply.mode is MarkupMode.MARKDOWN


class TestSendReply:
    """Test send_reply."""

    @pytest.mark.asyncio
    async def test_parse_mode_matches_reply_mode(self):
        message = Mock()
        message.reply_text = AsyncMock()

        await send_reply(message, Reply(text="hi", mode=MarkupMode.MARKDOWN))

        kwargs = message.reply_text.call_args.kwargs
        assert kwargs["parse_mode"] == "Markdown"
        assert kwargs["link_preview_options"] is None

    @pytest.mark.asyncio
    async def test_disable_preview(self):
        message = Mock()
        message.reply_text = AsyncMock()

        await send_reply(message, Reply(text="hi", disable_web_page_preview=True))

        kwargs = message.reply_text.call_args.kwargs
        assert kwargs["parse_mode"] == "MarkdownV2"
        assert kwargs["link_preview_options"].is_disabled is True
