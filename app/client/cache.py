from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Callable, Hashable

Key = tuple[Hashable, ...]

COLLECTION: Key = ("notes",)

def note_key(uuid: str) -> Key:
    return ("notes", uuid)


@dataclass
class Entry:
    value: Any
    stale: bool = False


class QueryCache:
    """Client-side query cache with exact-key entries.

    `invalidate` marks an entry stale so the next `fetch` reloads it;
    `remove` evicts it. Keys are matched exactly, so invalidating the
    collection leaves per-note entries alone.
    """

    def __init__(self):
        self._entries: dict[Key, Entry] = {}

    def __contains__(self, key: Key) -> bool:
        return key in self._entries

    def get(self, key: Key) -> Entry | None:
        return self._entries.get(key)

    def set(self, key: Key, value: Any) -> None:
        # last write wins
        self._entries[key] = Entry(value)

    def fetch(self, key: Key, loader: Callable[[], Any]) -> Any:
        entry = self._entries.get(key)
        if entry is not None and not entry.stale:
            return entry.value
        value = loader()
        self.set(key, value)
        return value

    def invalidate(self, key: Key) -> None:
        entry = self._entries.get(key)
        if entry is not None:
            entry.stale = True

    def remove(self, key: Key) -> None:
        self._entries.pop(key, None)

    def is_stale(self, key: Key) -> bool:
        entry = self._entries.get(key)
        return entry is None or entry.stale

    def clear(self) -> None:
        self._entries.clear()
