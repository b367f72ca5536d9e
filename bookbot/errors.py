"""
Exception types raised by the bot core.

Every user-triggered error carries a ``user_message`` that the handlers
escape and send back instead of letting the exception escape the update.
"""


class BotError(Exception):
    """Base class for errors that end up as a reply to the user."""

    def __init__(self, message: str, user_message: str | None = None):
        super().__init__(message)
        self.user_message = user_message or message


class ConfigError(Exception):
    """Required configuration is missing at startup."""


class ParseError(BotError):
    """Malformed /admin arguments."""


class AuthError(BotError):
    """Wrong admin password."""


class ChannelValidationError(BotError):
    """A proposed channel identifier does not start with the marker."""


class PrivilegeError(BotError):
    """The bot is not an administrator in a target channel."""

    def __init__(self, channel: str, message: str, user_message: str | None = None):
        super().__init__(message, user_message)
        self.channel = channel


class SubscriptionCheckError(Exception):
    """A membership lookup for one channel failed at the transport level."""

    def __init__(self, channel: str, message: str):
        super().__init__(message)
        self.channel = channel


class CatalogError(BotError):
    """The book catalog request failed."""

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class PersistenceError(Exception):
    """Reading or writing the channels file failed."""
