"""
Common test fixtures and configuration for the Book Advice & VPN Sponsor Bot tests.
"""

import json
from unittest.mock import AsyncMock, Mock

import pytest
from telegram.error import BadRequest

# Add the parent directory to the Python path
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from bookbot.admin_workflow import AdminWorkflow
from bookbot.catalog_client import GoogleBooksClient
from bookbot.channel_store import ChannelStore

ADMIN_PASSWORD = "s3cret"
BOT_ID = 999


def make_bot(statuses=None, bot_statuses=None):
    """Mock bot whose get_chat_member answers from per-channel status maps.

    ``statuses`` applies to any user, ``bot_statuses`` to the bot itself.
    A status of ``None`` makes the lookup fail with ``BadRequest``.
    """
    statuses = statuses or {}
    bot_statuses = bot_statuses or {}

    async def get_chat_member(channel, user_id):
        table = bot_statuses if user_id == BOT_ID else statuses
        status = table.get(channel, "left")
        if status is None:
            raise BadRequest("Chat not found")
        return Mock(status=status)

    bot = Mock()
    bot.id = BOT_ID
    bot.get_chat_member = AsyncMock(side_effect=get_chat_member)
    return bot


def make_update(text="", user_id=42):
    """Mock update carrying a text message from ``user_id``."""
    update = Mock()
    update.effective_user.id = user_id
    update.effective_message.text = text
    update.effective_message.reply_text = AsyncMock()
    return update


def sent_text(update):
    """Text of the last reply sent for ``update``."""
    return update.effective_message.reply_text.call_args.args[0]


@pytest.fixture
def channels_file(tmp_path):
    """Path to a channels file that does not exist yet."""
    return tmp_path / "channels.json"


@pytest.fixture
def populated_channels_file(channels_file):
    """Channels file holding two required channels."""
    channels_file.write_text(json.dumps(["@books", "@news"], indent=2))
    return channels_file


@pytest.fixture
def store(channels_file):
    """Loaded channel store backed by a temporary file."""
    store = ChannelStore(channels_file)
    store.load()
    return store


@pytest.fixture
def admins():
    return set()


@pytest.fixture
def admin_workflow(store, admins):
    return AdminWorkflow(ADMIN_PASSWORD, store, admins)


@pytest.fixture
def catalog():
    """Catalog client with a mocked search."""
    client = GoogleBooksClient()
    client.search = AsyncMock(return_value=[])
    return client
