"""Address-list and message-id parsing.

The address grammar here is deliberately loose: lists are split on raw
commas, so a quoted display name containing a comma is cut in two.  Each
segment either yields a well-formed ``local@domain`` address or nothing.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

from .errors import InvalidMessageIdError

logger = structlog.get_logger()

_MAILBOX_RE = re.compile(
    r"<?([A-Z0-9._%-]+@[A-Z0-9.-]+\.[A-Z]{2,4})>?",
    re.IGNORECASE,
)
_MESSAGE_ID_RE = re.compile(r"<(.+)>")


@dataclass(frozen=True)
class Address:
    """A single mailbox with an optional display name."""

    address: str
    display_name: str | None = None

    @property
    def user(self) -> str:
        return self.address.split("@", 1)[0]

    @property
    def host(self) -> str:
        return self.address.split("@", 1)[1]

    def __str__(self) -> str:
        if self.display_name:
            return f"{self.display_name} <{self.address}>"
        return self.address


def _display_name(prefix: str) -> str | None:
    name = prefix.strip().strip("<>").strip()
    if len(name) >= 2 and name[0] == name[-1] == '"':
        name = name[1:-1].strip()
    return name or None


def parse_address(segment: str) -> Address | None:
    """Parse one address-list segment; ``None`` if it holds no mailbox."""
    segment = segment.strip()
    last = None
    for last in _MAILBOX_RE.finditer(segment):
        pass
    if last is None:
        return None
    return Address(address=last.group(1), display_name=_display_name(segment[: last.start()]))


def parse_address_list(value: str) -> list[Address]:
    """Parse an address-list field such as To, Cc or Bcc.

    Segments that do not contain a ``local@domain`` mailbox are dropped.
    """
    addresses: list[Address] = []
    for segment in value.split(","):
        address = parse_address(segment)
        if address is None:
            logger.debug("address_segment_skipped", segment=segment.strip())
            continue
        addresses.append(address)
    return addresses


def parse_message_id(field_value: str) -> str:
    """Return the identifier enclosed in ``< >`` brackets.

    Raises :class:`InvalidMessageIdError` when *field_value* holds no
    bracketed identifier.
    """
    match = _MESSAGE_ID_RE.search(field_value)
    if match is None:
        raise InvalidMessageIdError(field_value)
    return match.group(1)


def try_parse_message_id(field_value: str | None) -> str | None:
    """Like :func:`parse_message_id` but returns ``None`` instead of raising."""
    if not field_value:
        return None
    match = _MESSAGE_ID_RE.search(field_value)
    return match.group(1) if match else None
