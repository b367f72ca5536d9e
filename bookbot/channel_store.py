"""
Persistent store for the list of channels a user must join to get a VPN code.
"""

import json
import logging
from pathlib import Path

from config import DEFAULT_CHANNELS_FILE

from .errors import PersistenceError

logger = logging.getLogger(__name__)


class ChannelStore:
    """Process-wide required-channel list mirrored to a JSON file.

    The in-memory list is authoritative for the running process. Writes
    are not locked; concurrent replacements resolve as last writer wins.
    """

    def __init__(self, path: str | Path = DEFAULT_CHANNELS_FILE):
        self.path = Path(path)
        self._channels: list[str] = []

    @property
    def channels(self) -> list[str]:
        """Copy of the current required channels, in persisted order."""
        return list(self._channels)

    def load(self) -> list[str]:
        """Load channels from disk, creating an empty file on first run."""
        try:
            self._channels = self._read()
            logger.info(
                f"Loaded channels from {self.path}: {json.dumps(self._channels)}"
            )
        except FileNotFoundError:
            logger.info(f"No {self.path} found; starting with empty channels")
            self._channels = []
            self.save()
        except PersistenceError as e:
            logger.error(f"Failed to load channels from {self.path}: {e}")
            self._channels = []
        return self.channels

    def save(self) -> bool:
        """Write the current list to disk. Memory is kept even on failure."""
        try:
            self._write(self._channels)
        except PersistenceError as e:
            logger.error(f"Failed to save channels to {self.path}: {e}")
            return False
        logger.info(f"Saved channels to {self.path}: {json.dumps(self._channels)}")
        return True

    def replace(self, channels: list[str]) -> list[str]:
        """Swap in a new channel list, persist it and return the old one."""
        old_channels = self._channels
        self._channels = list(channels)
        self.save()
        return list(old_channels)

    def _read(self) -> list[str]:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            raise
        except (OSError, ValueError) as e:
            raise PersistenceError(str(e)) from e

        if not isinstance(data, list) or not all(isinstance(ch, str) for ch in data):
            raise PersistenceError("expected a JSON array of strings")
        return data

    def _write(self, channels: list[str]) -> None:
        try:
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(channels, f, ensure_ascii=False, indent=2)
        except OSError as e:
            raise PersistenceError(str(e)) from e
