"""
Google Books catalog client and book reply formatting.
"""

import asyncio
import logging
from typing import Any

import aiohttp
from pydantic import ValidationError

from config import (
    DEFAULT_MAX_RESULTS,
    DESCRIPTION_LIMIT,
    DESCRIPTION_SUFFIX,
    GOOGLE_BOOKS_API_URL,
    NO_DESCRIPTION,
    NO_LINK,
    UNKNOWN_AUTHOR,
    UNKNOWN_TITLE,
)

from .errors import CatalogError
from .markup import escape_link, escape_markdown_v2
from .models import BookRecord, Volume

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No books found. Try a different query."


def truncate_description(description: str) -> str:
    """Cut to the description budget. The suffix is always appended."""
    return description[:DESCRIPTION_LIMIT] + DESCRIPTION_SUFFIX


def to_book_record(item: dict[str, Any]) -> BookRecord:
    """Map a catalog ``items`` entry to a display record."""
    try:
        info = Volume.model_validate(item).volume_info
    except ValidationError as e:
        logger.warning(f"Malformed volume record, using placeholders: {e}")
        info = Volume().volume_info

    return BookRecord(
        title=info.title or UNKNOWN_TITLE,
        authors=info.authors or [UNKNOWN_AUTHOR],
        description=truncate_description(info.description or NO_DESCRIPTION),
        link=info.info_link or NO_LINK,
    )


def format_book_response(books: list[BookRecord]) -> str:
    """Render book records as a MarkdownV2 message."""
    if not books:
        return escape_markdown_v2(NO_RESULTS_MESSAGE)

    response = "📚 *Book Recommendations* 📚\n\n"
    for book in books:
        response += (
            f"📖 *{escape_markdown_v2(book.title)}*\n"
            f"✍️ Authors: {escape_markdown_v2(book.authors_display)}\n"
            f"ℹ️ Description: {escape_markdown_v2(book.description)}\n"
            f"🔗 [More Info]({escape_link(book.link)})\n\n"
        )
    return response


class GoogleBooksClient:
    """Async client for the Google Books volumes endpoint."""

    def __init__(self, api_url: str = GOOGLE_BOOKS_API_URL):
        self.api_url = api_url
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self):
        """Async context manager entry."""
        await self.open()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit."""
        await self.close()

    async def open(self):
        if self.session is None:
            self.session = aiohttp.ClientSession()

    async def close(self):
        if self.session:
            await self.session.close()
            self.session = None

    async def search(
        self, query: str, max_results: int = DEFAULT_MAX_RESULTS
    ) -> list[BookRecord]:
        """Search the catalog and return at most ``max_results`` records."""
        if self.session is None:
            raise CatalogError("Failed to fetch books: client not started")

        params = {"q": query, "maxResults": str(max_results)}
        try:
            async with self.session.get(self.api_url, params=params) as response:
                if response.status < 200 or response.status >= 300:
                    body = await response.text()
                    logger.error(
                        f"Error fetching books: (Status: {response.status}, Data: {body[:200]})"
                    )
                    raise CatalogError(
                        f"Failed to fetch books: {response.status}",
                        status=response.status,
                    )
                data = await response.json()
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Error fetching books: {e}")
            raise CatalogError("Failed to fetch books: Unknown error") from e

        if not isinstance(data, dict):
            logger.error(f"Error fetching books: unexpected payload {type(data).__name__}")
            raise CatalogError("Failed to fetch books: Unknown error")

        items = data.get("items") or []
        if not items:
            logger.warning(f"No books found for query: {query}")
            return []

        return [to_book_record(item) for item in items]
