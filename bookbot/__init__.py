"""
Core Modules

This package contains the core functionality for the Book Advice & VPN Sponsor Bot.
It provides the channel store, subscription checks, catalog search and command handlers.
"""

from .errors import BotError, CatalogError, ConfigError, PersistenceError
from .models import BookRecord, MarkupMode, Reply, Settings, SubscriptionResult

__all__ = [
    'BookRecord',
    'BotError',
    'CatalogError',
    'ConfigError',
    'MarkupMode',
    'PersistenceError',
    'Reply',
    'Settings',
    'SubscriptionResult',
]
