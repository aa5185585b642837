"""Descriptors for MIME body parts.

A :class:`BodyPart` normally comes from the IMAP BODYSTRUCTURE exchange,
which lives outside this package.  :func:`bodypart_from_headers` builds one
from a part's own MIME headers for callers that hold raw RFC 822 text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping

from .headers import HeaderMap
from .mime import parse_mime_field


class ContentType(str, Enum):
    """Top-level MIME media type."""

    TEXT = "text"
    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"
    APPLICATION = "application"
    MULTIPART = "multipart"
    MESSAGE = "message"
    OTHER = "other"

    @classmethod
    def parse(cls, value: str) -> ContentType:
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.OTHER


class ContentTransferEncoding(str, Enum):
    """Declared Content-Transfer-Encoding of a part."""

    SEVEN_BIT = "7bit"
    EIGHT_BIT = "8bit"
    BINARY = "binary"
    QUOTED_PRINTABLE = "quoted-printable"
    BASE64 = "base64"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> ContentTransferEncoding:
        if not value:
            return cls.SEVEN_BIT
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


class ContentDispositionType(str, Enum):
    INLINE = "inline"
    ATTACHMENT = "attachment"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: str | None) -> ContentDispositionType:
        if not value:
            return cls.UNKNOWN
        try:
            return cls(value.strip().lower())
        except ValueError:
            return cls.UNKNOWN


@dataclass(frozen=True)
class ContentDisposition:
    type: ContentDispositionType = ContentDispositionType.UNKNOWN
    filename: str | None = None


@dataclass(frozen=True)
class BodyPart:
    """Metadata describing one MIME body part (without its content)."""

    part_id: str | None
    type: ContentType
    subtype: str
    encoding: ContentTransferEncoding = ContentTransferEncoding.SEVEN_BIT
    disposition: ContentDisposition = field(default_factory=ContentDisposition)
    parameters: Mapping[str, str] = field(default_factory=dict)

    @property
    def charset(self) -> str | None:
        """The ``Charset`` parameter, looked up case-insensitively."""
        for key, value in self.parameters.items():
            if key.lower() == "charset":
                return value
        return None

    @property
    def content_type(self) -> str:
        return f"{self.type.value}/{self.subtype}".lower()

def bodypart_from_headers(headers: HeaderMap, filename: str | None = None) -> BodyPart:
    """Describe a part from its own Content-* headers.

    A missing Content-Type means ``text/plain``.  The filename is supplied
    by the caller, who usually has it from ``Message.get_filename()``.
    """
    content_type = parse_mime_field(headers.get("Content-Type") or "text/plain")
    media_type, _, subtype = (content_type.value or "text/plain").partition("/")
    disposition = parse_mime_field(headers.get("Content-Disposition") or "")

    return BodyPart(
        part_id=headers.get("Content-Id"),
        type=ContentType.parse(media_type),
        subtype=subtype or "plain",
        encoding=ContentTransferEncoding.parse(headers.get("Content-Transfer-Encoding")),
        disposition=ContentDisposition(
            type=ContentDispositionType.parse(disposition.value),
            filename=filename,
        ),
        parameters=dict(content_type.parameters),
    )
