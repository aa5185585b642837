"""Umbrella Mail Builder — turns raw mail headers and MIME body parts into
structured :class:`MailMessage` objects.
"""

from .addresses import Address, parse_address_list, parse_message_id, try_parse_message_id
from .bodypart import (
    BodyPart,
    ContentDisposition,
    ContentDispositionType,
    ContentTransferEncoding,
    ContentType,
    bodypart_from_headers,
)
from .builder import (
    add_body_part,
    apply_headers,
    bodypart_from_message,
    create_alternate_view,
    create_attachment,
    from_header,
    from_header_map,
    from_mime822,
    headers_from_message,
    parse_priority,
    set_address_fields,
)
from .config import MailBuilderConfig
from .encoding import (
    base64_decode,
    decode_content,
    decode_subject,
    decode_text,
    decode_words,
    encode_text,
    qp_decode,
    resolve_charset,
)
from .errors import HeaderRejectedError, InvalidMessageIdError, MailBuilderError
from .headers import HeaderMap, parse_mail_header
from .logging import setup_logging
from .message import AlternateView, Attachment, HeaderStore, MailMessage, MailPriority
from .mime import MimeParameters, parse_mime_field

__all__ = [
    "Address",
    "AlternateView",
    "Attachment",
    "BodyPart",
    "ContentDisposition",
    "ContentDispositionType",
    "ContentTransferEncoding",
    "ContentType",
    "HeaderMap",
    "HeaderRejectedError",
    "HeaderStore",
    "InvalidMessageIdError",
    "MailBuilderConfig",
    "MailBuilderError",
    "MailMessage",
    "MailPriority",
    "MimeParameters",
    "add_body_part",
    "apply_headers",
    "base64_decode",
    "bodypart_from_headers",
    "bodypart_from_message",
    "create_alternate_view",
    "create_attachment",
    "decode_content",
    "decode_subject",
    "decode_text",
    "decode_words",
    "encode_text",
    "from_header",
    "from_header_map",
    "from_mime822",
    "headers_from_message",
    "parse_address_list",
    "parse_mail_header",
    "parse_message_id",
    "parse_mime_field",
    "parse_priority",
    "qp_decode",
    "resolve_charset",
    "set_address_fields",
    "setup_logging",
    "try_parse_message_id",
]
