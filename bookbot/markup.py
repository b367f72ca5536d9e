"""
Markup escaping for outgoing Telegram replies.

Two dialects are in play: strict MarkdownV2 for almost every reply and legacy
Markdown for the subscription reminder. The reply's ``MarkupMode`` picks the
escaping function and the ``parse_mode`` together so they cannot disagree.
"""

from telegram import LinkPreviewOptions, Message
from telegram.helpers import escape_markdown as _escape_markdown

from .models import MarkupMode, Reply


def escape_markdown_v2(text: str) -> str:
    """Escape the full MarkdownV2 special-character set."""
    return _escape_markdown(text, version=2)


def escape_markdown(text: str) -> str:
    """Escape the minimal legacy Markdown set (_ * ` [)."""
    return _escape_markdown(text, version=1)


def escape_link(url: str) -> str:
    """Escape a URL placed inside a MarkdownV2 inline link."""
    return _escape_markdown(url, version=2, entity_type="text_link")


_ESCAPERS = {
    MarkupMode.MARKDOWN_V2: escape_markdown_v2,
    MarkupMode.MARKDOWN: escape_markdown,
}


def escape(text: str, mode: MarkupMode) -> str:
    return _ESCAPERS[mode](text)


def plain_reply(text: str, mode: MarkupMode = MarkupMode.MARKDOWN_V2, **kwargs) -> Reply:
    """Build a reply whose whole text is escaped for ``mode``."""
    return Reply(text=escape(text, mode), mode=mode, **kwargs)


async def send_reply(message: Message, reply: Reply) -> Message:
    """Send ``reply`` as a response to ``message`` using its declared mode."""
    return await message.reply_text(
        reply.text,
        parse_mode=reply.mode.parse_mode,
        reply_markup=reply.reply_markup,
        link_preview_options=(
            LinkPreviewOptions(is_disabled=True)
            if reply.disable_web_page_preview
            else None
        ),
    )
