"""
Data models for the Book Advice & VPN Sponsor Bot.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field
from telegram.constants import ParseMode


@dataclass
class Settings:
    """Runtime settings loaded once at process start."""

    bot_token: str
    admin_password: str
    channels_file: str
    catalog_url: str


@dataclass
class SubscriptionResult:
    """Outcome of checking a user against the required channels."""

    failing: list[str] = field(default_factory=list)

    @property
    def subscribed(self) -> bool:
        return not self.failing


class MarkupMode(Enum):
    """Markup dialect declared on an outgoing reply."""

    MARKDOWN_V2 = ParseMode.MARKDOWN_V2
    MARKDOWN = ParseMode.MARKDOWN

    @property
    def parse_mode(self) -> str:
        return self.value


@dataclass
class Reply:
    """An outgoing message whose text is already escaped for ``mode``."""

    text: str
    mode: MarkupMode = MarkupMode.MARKDOWN_V2
    reply_markup: Any = None
    disable_web_page_preview: bool = False


class VolumeInfo(BaseModel):
    """Subset of a Google Books ``volumeInfo`` object."""

    title: str | None = None
    authors: list[str] = Field(default_factory=list)
    description: str | None = None
    info_link: str | None = Field(default=None, alias="infoLink")


class Volume(BaseModel):
    """A single entry of the catalog ``items`` array."""

    volume_info: VolumeInfo = Field(default_factory=VolumeInfo, alias="volumeInfo")


class BookRecord(BaseModel):
    """Display-ready book record with placeholders already applied."""

    title: str
    authors: list[str]
    description: str
    link: str

    @property
    def authors_display(self) -> str:
        return ", ".join(self.authors)
