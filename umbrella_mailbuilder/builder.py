"""Assemble :class:`MailMessage` instances from header text and body parts.

Stateless functions: each call works on the message it is handed, and no
step aborts because a single field is malformed.  Forged or broken header
fields are dropped one by one; body parts are classified into the primary
body, an attachment or an alternate view.
"""

from __future__ import annotations

import email
import email.message
import email.policy
import secrets
from types import MappingProxyType
from typing import Mapping

import structlog

from .addresses import parse_address_list, try_parse_message_id
from .bodypart import (
    BodyPart,
    ContentDispositionType,
    ContentType,
    bodypart_from_headers,
)
from .encoding import (
    DEFAULT_CHARSET,
    content_charset,
    decode_content,
    decode_subject,
    decode_text,
    decode_words,
)
from .headers import HeaderMap, parse_mail_header
from .message import AlternateView, Attachment, MailMessage, MailPriority

logger = structlog.get_logger()

PRIORITIES: Mapping[str, MailPriority] = MappingProxyType({
    "non-urgent": MailPriority.LOW,
    "normal": MailPriority.NORMAL,
    "urgent": MailPriority.HIGH,
})

_LIST_FIELDS = (
    ("To", "to"),
    ("Cc", "cc"),
    ("Bcc", "bcc"),
    ("Reply-To", "reply_to"),
)
_SINGLE_FIELDS = (
    ("From", "from_address"),
    ("Sender", "sender"),
)


# ----------------------------------------------------------------------
# Header application
# ----------------------------------------------------------------------


def from_header(text: str, default_charset: str = DEFAULT_CHARSET) -> MailMessage:
    """Create a message with header fields set but no content."""
    return from_header_map(parse_mail_header(text), default_charset)


def from_header_map(header: HeaderMap, default_charset: str = DEFAULT_CHARSET) -> MailMessage:
    """Like :func:`from_header` for an already parsed header block."""
    message = MailMessage()

    apply_headers(message, header)
    message.subject, message.subject_encoding = decode_subject(
        header.get("Subject"), default_charset
    )
    message.priority = parse_priority(header.get("Priority"))
    set_address_fields(message, header)
    return message


def apply_headers(message: MailMessage, header: HeaderMap) -> int:
    """Copy every acceptable field into the message's header store.

    Returns the number of fields dropped.  Empty subjects and forged
    header names are rejected by the store and skipped.
    """
    dropped = 0
    for name, value in header:
        if not message.headers.accepts(name, value):
            logger.debug("header_rejected", field=name)
            dropped += 1
            continue
        message.headers.add(name, value)
    return dropped


def parse_priority(value: str | None) -> MailPriority:
    """Map a Priority header value to :class:`MailPriority`.

    Missing or unknown values mean normal priority.
    """
    if value is None:
        return MailPriority.NORMAL
    return PRIORITIES.get(value.strip().lower(), MailPriority.NORMAL)


def set_address_fields(message: MailMessage, header: HeaderMap) -> None:
    """Set From, Sender, To, Cc, Bcc and Reply-To from *header*.

    List fields append every parsed address; From and Sender take the first
    address of the field and overwrite any earlier value.
    """
    for name, attribute in _LIST_FIELDS:
        value = header.get(name)
        if value is not None:
            getattr(message, attribute).extend(parse_address_list(value))

    for name, attribute in _SINGLE_FIELDS:
        value = header.get(name)
        if value is None:
            continue
        addresses = parse_address_list(value)
        if addresses:
            setattr(message, attribute, addresses[0])


# ----------------------------------------------------------------------
# Body parts
# ----------------------------------------------------------------------


def add_body_part(
    message: MailMessage,
    part: BodyPart,
    content: str,
    default_charset: str = DEFAULT_CHARSET,
) -> MailMessage:
    """Decode *content* and add it to *message* as body, attachment or view.

    The first text part becomes the primary body; later parts are
    attachments when their disposition says so and alternate views
    otherwise.
    """
    charset = content_charset(part, default_charset)
    data = decode_content(part, content, default_charset)

    if not message.has_body and part.type is ContentType.TEXT:
        message.body = decode_text(data, charset)
        message.body_encoding = charset
        message.is_body_html = part.subtype.lower() == "html"
        logger.debug("body_part_classified", part_id=part.part_id, role="body")
        return message

    if part.disposition.type is ContentDispositionType.ATTACHMENT:
        message.attachments.append(create_attachment(part, data))
        role = "attachment"
    else:
        message.alternate_views.append(create_alternate_view(part, data))
        role = "alternate_view"
    logger.debug("body_part_classified", part_id=part.part_id, role=role)
    return message


def _random_file_name() -> str:
    token = secrets.token_hex(6)
    return f"{token[:8]}.{token[8:11]}"


def _content_id(part: BodyPart) -> str | None:
    content_id = try_parse_message_id(part.part_id)
    if content_id is None and part.part_id:
        logger.debug("message_id_unparsable", part_id=part.part_id)
    return content_id


def create_attachment(part: BodyPart, data: bytes) -> Attachment:
    return Attachment(
        name=part.disposition.filename or _random_file_name(),
        content=data,
        content_type=part.content_type,
        content_id=_content_id(part),
    )


def create_alternate_view(part: BodyPart, data: bytes) -> AlternateView:
    return AlternateView(
        content=data,
        content_type=part.content_type,
        content_id=_content_id(part),
    )


# ----------------------------------------------------------------------
# Whole RFC 822 messages
# ----------------------------------------------------------------------


def headers_from_message(part: email.message.Message) -> HeaderMap:
    """Re-read the raw header fields of a parsed part into a :class:`HeaderMap`.

    Folded values keep their line breaks in ``raw_items()``, so they go
    through the same unfolding as :func:`from_header`.
    """
    return parse_mail_header("\n".join(f"{name}: {value}" for name, value in part.raw_items()))


def bodypart_from_message(part: email.message.Message) -> BodyPart:
    # get_filename() handles RFC 2231 parameters but leaves encoded-words alone
    filename = part.get_filename()
    if filename and "=?" in filename:
        filename = decode_words(filename)
    return bodypart_from_headers(headers_from_message(part), filename)


def from_mime822(text: str, default_charset: str = DEFAULT_CHARSET) -> MailMessage:
    """Build a complete message from raw RFC 822 text.

    The MIME tree is walked depth-first and every leaf part is added in
    document order with its payload still transfer-encoded, so the usual
    body/attachment/view rules apply.  Parts without a transfer encoding
    are taken as ASCII: 8-bit characters in such a part come out as ``?``.
    """
    msg = email.message_from_string(text, policy=email.policy.default)
    message = from_header_map(headers_from_message(msg), default_charset)

    for part in msg.walk():
        if part.is_multipart():
            continue
        payload = part.get_payload()
        if not isinstance(payload, str):
            payload = ""
        if part.get_content_maintype() == "multipart":
            # a multipart without a usable boundary is left as one flat payload
            logger.warning("multipart_boundary_missing", content_type=part.get_content_type())
            add_body_part(message, bodypart_from_headers(HeaderMap()), payload, default_charset)
            continue
        add_body_part(message, bodypart_from_message(part), payload, default_charset)

    return message
