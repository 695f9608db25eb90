"""Ordered, case-insensitive HTTP header collection.

:class:`Headers` keeps at most one entry per header name, where names are
compared case-insensitively. Entries are stored in insertion order in a list
and indexed by a normalised key, so lookups never fold strings across the
whole collection.

Setting a name that already exists replaces its value in place: the entry
keeps both its position and the spelling under which it was first stored.
Setting a new name appends it.

Example::

    headers = Headers()
    headers.set("User-Agent", "httpsh/0.1.0")
    headers.set("accept", "text/html")
    headers.set("Accept", "application/json")
    headers.to_ordered_list()
    # [('User-Agent', 'httpsh/0.1.0'), ('accept', 'application/json')]
"""

from __future__ import annotations

from typing import Iterable, Iterator, Optional


def normalize_name(name: str) -> str:
    """Return the lookup key for a header *name*."""
    return name.casefold()


class Headers:
    """An ordered sequence of unique (case-insensitively) name/value pairs.

    Args:
        items: Optional initial pairs, applied in order through :meth:`set`
            so duplicates collapse onto the first occurrence.
    """

    def __init__(self, items: Optional[Iterable[tuple[str, str]]] = None) -> None:
        self._entries: list[list[str]] = []
        self._index: dict[str, int] = {}
        for name, value in items or ():
            self.set(name, value)

    def set(self, name: str, value: str) -> None:
        """Update the entry matching *name* in place, or append a new one."""
        key = normalize_name(name)
        position = self._index.get(key)
        if position is None:
            self._index[key] = len(self._entries)
            self._entries.append([name, value])
        else:
            self._entries[position][1] = value

    def unset(self, name: str) -> bool:
        """Remove the entry matching *name*.

        Returns:
            ``True`` if an entry was removed, ``False`` if none matched.
            Removing an absent header is not an error.
        """
        key = normalize_name(name)
        position = self._index.pop(key, None)
        if position is None:
            return False
        del self._entries[position]
        for entry_key, entry_position in self._index.items():
            if entry_position > position:
                self._index[entry_key] = entry_position - 1
        return True

    def unset_all(self) -> None:
        self._entries.clear()
        self._index.clear()

    def get(self, name: str, default: Optional[str] = None) -> Optional[str]:
        position = self._index.get(normalize_name(name))
        if position is None:
            return default
        return self._entries[position][1]

    def to_ordered_list(self) -> list[tuple[str, str]]:
        """Return the pairs in insertion order as a fresh list."""
        return [(name, value) for name, value in self._entries]

    def to_wire(self) -> str:
        """Render the headers as ``Name: value`` lines joined with CRLF."""
        return "\r\n".join(f"{name}: {value}" for name, value in self._entries)

    def copy(self) -> Headers:
        return Headers(self.to_ordered_list())

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.to_ordered_list())

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and normalize_name(name) in self._index

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Headers):
            return self.to_ordered_list() == other.to_ordered_list()
        if isinstance(other, list):
            return self.to_ordered_list() == [tuple(pair) for pair in other]
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"Headers({self.to_ordered_list()!r})"
