"""One-time messages carried between requests (Post/Redirect/Get)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator


@dataclass
class FlashData:
    """A flash message and whether it has been read."""

    data: str = ""
    loaded: bool = False


class Flash:
    """A container of flash messages keyed by name.

    A message that has been read is dropped by :meth:`delete_loaded`.
    """

    def __init__(self) -> None:
        self._messages: dict[str, FlashData] = {}

    def get(self, key: str) -> str:
        """Return the message for ``key`` and mark it read; ``""`` if absent."""
        entry = self._messages.get(key)
        if entry is None:
            return ""
        entry.loaded = True
        return entry.data

    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key`` as an unread message."""
        entry = self._messages.setdefault(key, FlashData())
        entry.data = value
        entry.loaded = False

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, key: object) -> bool:
        return key in self._messages

    def __iter__(self) -> Iterator[str]:
        return iter(self._messages)

    def items(self):
        """Return the stored ``(key, FlashData)`` pairs."""
        return self._messages.items()

    def delete_loaded(self) -> None:
        """Drop every message that has been read."""
        self._messages = {
            key: entry for key, entry in self._messages.items() if not entry.loaded
        }