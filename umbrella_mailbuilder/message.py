"""The assembled mail message and its parts."""

from __future__ import annotations

import base64
import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .addresses import Address
from .errors import HeaderRejectedError

# RFC 5322 ftext: printable US-ASCII except colon
_FIELD_NAME_RE = re.compile(r"^[\x21-\x39\x3b-\x7e]+$")


class MailPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"


class HeaderStore:
    """Validated, ordered header fields of a :class:`MailMessage`.

    Rejects empty names, names outside RFC 5322 ``ftext``, empty values and
    values carrying line breaks.  Use :meth:`accepts` to test first when a
    rejection should be skipped rather than raised.
    """

    def __init__(self) -> None:
        self._fields: list[tuple[str, str]] = []

    @staticmethod
    def accepts(name: str, value: str) -> bool:
        if not name or not _FIELD_NAME_RE.match(name):
            return False
        if not value or not value.strip():
            return False
        return "\r" not in value and "\n" not in value

    def add(self, name: str, value: str) -> None:
        if not self.accepts(name, value):
            raise HeaderRejectedError(name, value)
        self._fields.append((name, value))

    def get(self, name: str, default: str | None = None) -> str | None:
        lowered = name.lower()
        for key, value in reversed(self._fields):
            if key.lower() == lowered:
                return value
        return default

    def get_all(self, name: str) -> list[str]:
        lowered = name.lower()
        return [value for key, value in self._fields if key.lower() == lowered]

    def items(self) -> list[tuple[str, str]]:
        return list(self._fields)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.get(name) is not None

    def __iter__(self) -> Iterator[tuple[str, str]]:
        return iter(self.items())

    def __len__(self) -> int:
        return len(self._fields)


@dataclass
class Attachment:
    """A named attachment extracted from a body part."""

    name: str
    content: bytes
    content_type: str
    content_id: str | None = None


@dataclass
class AlternateView:
    """An additional rendering of the message body."""

    content: bytes
    content_type: str
    content_id: str | None = None


@dataclass
class MailMessage:
    """Structured representation of a mail message.

    Mutated only by the builder functions while a message is assembled;
    callers own the instance and must apply body parts one at a time.
    """

    headers: HeaderStore = field(default_factory=HeaderStore)
    subject: str | None = None
    subject_encoding: str = "ascii"
    priority: MailPriority = MailPriority.NORMAL
    from_address: Address | None = None
    sender: Address | None = None
    to: list[Address] = field(default_factory=list)
    cc: list[Address] = field(default_factory=list)
    bcc: list[Address] = field(default_factory=list)
    reply_to: list[Address] = field(default_factory=list)
    body: str = ""
    body_encoding: str | None = None
    is_body_html: bool = False
    attachments: list[Attachment] = field(default_factory=list)
    alternate_views: list[AlternateView] = field(default_factory=list)

    @property
    def has_body(self) -> bool:
        return self.body_encoding is not None

    def to_summary(self) -> dict[str, Any]:
        """JSON-serialisable view of the message (binary content as base64)."""
        return {
            "subject": self.subject,
            "subject_encoding": self.subject_encoding,
            "priority": self.priority.value,
            "from": str(self.from_address) if self.from_address else None,
            "sender": str(self.sender) if self.sender else None,
            "to": [str(a) for a in self.to],
            "cc": [str(a) for a in self.cc],
            "bcc": [str(a) for a in self.bcc],
            "reply_to": [str(a) for a in self.reply_to],
            "headers": [[name, value] for name, value in self.headers],
            "body": self.body,
            "body_encoding": self.body_encoding,
            "is_body_html": self.is_body_html,
            "attachments": [
                {
                    "name": a.name,
                    "content_type": a.content_type,
                    "content_id": a.content_id,
                    "size": len(a.content),
                    "content_base64": base64.b64encode(a.content).decode("ascii"),
                }
                for a in self.attachments
            ],
            "alternate_views": [
                {
                    "content_type": v.content_type,
                    "content_id": v.content_id,
                    "size": len(v.content),
                    "content_base64": base64.b64encode(v.content).decode("ascii"),
                }
                for v in self.alternate_views
            ],
        }
