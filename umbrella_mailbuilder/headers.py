"""RFC 5322 header block parsing.

Produces a :class:`HeaderMap` — an ordered, duplicate-tolerant multimap
with case-insensitive lookup.  Folded values are unfolded in place;
malformed lines are dropped instead of raising.
"""

from __future__ import annotations

from collections.abc import Iterator


class HeaderMap:
    """Ordered ``(name, value)`` pairs plus a case-insensitive name index."""

    def __init__(self, entries: list[tuple[str, str]] | None = None) -> None:
        self._entries: list[list[str]] = []
        self._index: dict[str, list[int]] = {}
        for name, value in entries or []:
            self._append(name, value)

    # ------------------------------------------------------------------
    # Building (used by parse_mail_header only)
    # ------------------------------------------------------------------

    def _append(self, name: str, value: str) -> int:
        position = len(self._entries)
        self._entries.append([name, value])
        self._index.setdefault(name.lower(), []).append(position)
        return position

    def _extend(self, position: int, text: str) -> None:
        self._entries[position][1] += text

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the most recent value for *name*, or *default*."""
        positions = self._index.get(name.lower())
        if not positions:
            return default
        return self._entries[positions[-1]][1]

    def get_all(self, name: str) -> list[str]:
        """Return every value for *name* in insertion order."""
        return [self._entries[i][1] for i in self._index.get(name.lower(), [])]

    def names(self) -> list[str]:
        """Distinct field names, as first written, in first-seen order."""
        seen: dict[str, str] = {}
        for name, _ in self._entries:
            seen.setdefault(name.lower(), name)
        return list(seen.values())

    def items(self) -> list[tuple[str, str]]:
        return [(name, value) for name, value in self._entries]

    def __getitem__(self, name: str) -> str:
        value = self.get(name)
        if value is None:
            raise KeyError(name)
        return value

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.lower() in self._index

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, HeaderMap):
            return NotImplemented
        return self.items() == other.items()

    def __repr__(self) -> str:
        return f"HeaderMap({self.items()!r})"


def parse_mail_header(text: str) -> HeaderMap:
    """Parse a raw header block into a :class:`HeaderMap`.

    * Blank lines are skipped (upstream already cut the block at the body).
    * A line starting with a space or tab continues the current field: its
      first character is dropped, trailing whitespace trimmed, and the rest
      appended with no extra separator.
    * A line without a colon is dropped.
    * Otherwise the line is split at the first colon and both sides trimmed.
    """
    headers = HeaderMap()
    current: int | None = None

    for line in text.splitlines():
        if not line:
            continue
        if line[0] in (" ", "\t"):
            if current is not None:
                headers._extend(current, line[1:].rstrip())
            continue
        name, sep, value = line.partition(":")
        if not sep:
            continue
        name = name.strip()
        if not name:
            continue
        current = headers._append(name, value.strip())

    return headers
