"""Charset resolution, RFC 2047 encoded-words and transfer decoding.

Everything in here degrades instead of raising: an unknown charset falls
back to the default, a corrupt encoded-word leaves the raw text in place,
and corrupt base64 yields the raw bytes of the encoded text.
"""

from __future__ import annotations

import binascii
import codecs
import email.errors
import email.header
import quopri
import re

import structlog

from .bodypart import BodyPart, ContentTransferEncoding

logger = structlog.get_logger()

DEFAULT_CHARSET = "ascii"

_CHARSET_MARKER_RE = re.compile(r"=\?([A-Za-z0-9\-]+)")
_WHITESPACE_RE = re.compile(r"\s+")


# ----------------------------------------------------------------------
# Charsets
# ----------------------------------------------------------------------


# Codecs that pass the text-encoding check but can never decode mail text
_UNUSABLE_CODECS = frozenset({"undefined"})


def resolve_charset(name: str | None, default: str = DEFAULT_CHARSET) -> str:
    """Map a MIME charset label to a Python codec name.

    Unknown or empty labels resolve to *default*, and so do codecs that are
    not text encodings (``hex``, ``base64``, ``rot13``, ``zlib`` ...).
    """
    if not name:
        return default
    try:
        info = codecs.lookup(name.strip().strip('"'))
    except LookupError:
        return default
    if not getattr(info, "_is_text_encoding", True) or info.name in _UNUSABLE_CODECS:
        logger.debug("charset_rejected", charset=name)
        return default
    return info.name


def content_charset(part: BodyPart, default: str = DEFAULT_CHARSET) -> str:
    """Charset of *part*: its Charset parameter if present, else *default*."""
    return resolve_charset(part.charset, default)


def decode_text(data: bytes, charset: str) -> str:
    """Decode *data* with *charset*, falling back to ASCII.

    Some text codecs (``idna`` for one) refuse the ``replace`` error handler
    or reject the input outright; those cases decode as ASCII instead.
    """
    try:
        return data.decode(charset, "replace")
    except (LookupError, UnicodeError):
        logger.debug("charset_decode_failed", charset=charset)
        return data.decode(DEFAULT_CHARSET, "replace")


def encode_text(text: str, charset: str) -> bytes:
    """Encode *text* with *charset*, falling back to ASCII."""
    try:
        return text.encode(charset, "replace")
    except (LookupError, UnicodeError):
        logger.debug("charset_encode_failed", charset=charset)
        return text.encode(DEFAULT_CHARSET, "replace")


# ----------------------------------------------------------------------
# Encoded-words
# ----------------------------------------------------------------------


def decode_words(text: str, default_charset: str = DEFAULT_CHARSET) -> str:
    """Decode every RFC 2047 encoded-word in *text*.

    Each word is decoded with its own charset; plain runs between words are
    kept as they are.  A malformed encoded-word returns *text* with any
    non-ASCII characters replaced.
    """
    try:
        chunks = email.header.decode_header(text)
    except email.errors.HeaderParseError:
        logger.debug("encoded_word_unparsable", text=text)
        return text.encode("ascii", "replace").decode("ascii")

    decoded: list[str] = []
    for chunk, charset in chunks:
        if isinstance(chunk, str):
            decoded.append(chunk)
        elif charset is None:
            # decode_header hands back unencoded runs as raw-unicode-escape bytes
            decoded.append(chunk.decode("raw-unicode-escape", "replace"))
        else:
            decoded.append(decode_text(chunk, resolve_charset(charset, default_charset)))
    return "".join(decoded)


def decode_subject(
    value: str | None,
    default_charset: str = DEFAULT_CHARSET,
) -> tuple[str | None, str]:
    """Return ``(subject, charset)`` for a raw Subject value.

    Only the first ``=?charset`` marker decides the recorded charset, even
    when later encoded-words use another one.  Without a marker the subject
    is returned verbatim and the charset is ASCII.
    """
    match = _CHARSET_MARKER_RE.search(value or "")
    if match is None:
        return value, DEFAULT_CHARSET
    return decode_words(value, default_charset), resolve_charset(match.group(1), default_charset)


# ----------------------------------------------------------------------
# Transfer encodings
# ----------------------------------------------------------------------


def qp_decode(text: str, charset: str = DEFAULT_CHARSET) -> str:
    """Decode quoted-printable *text* into a string using *charset*."""
    raw = quopri.decodestring(text.encode("ascii", "replace"))
    return decode_text(raw, charset)


def base64_decode(text: str) -> bytes:
    """Strictly decode base64 *text*, ignoring line breaks.

    Raises :class:`binascii.Error` on bad padding or characters outside the
    base64 alphabet.
    """
    compact = _WHITESPACE_RE.sub("", text)
    try:
        encoded = compact.encode("ascii")
    except UnicodeEncodeError as exc:
        raise binascii.Error("Non-ASCII character in base64 data") from exc
    return binascii.a2b_base64(encoded, strict_mode=True)


def try_base64_decode(text: str) -> bytes | None:
    """Like :func:`base64_decode` but returns ``None`` on corrupt input."""
    try:
        return base64_decode(text)
    except binascii.Error:
        return None


def decode_content(
    part: BodyPart,
    content: str,
    default_charset: str = DEFAULT_CHARSET,
) -> bytes:
    """Turn a part's transfer-encoded text into bytes.

    Quoted-printable text is decoded into a string with the part's charset
    and encoded back with the same charset, so charset-specific characters
    survive.  Corrupt base64 falls back to the raw ASCII bytes of *content*.
    """
    charset = content_charset(part, default_charset)

    if part.encoding is ContentTransferEncoding.QUOTED_PRINTABLE:
        return encode_text(qp_decode(content, charset), charset)

    if part.encoding is ContentTransferEncoding.BASE64:
        data = try_base64_decode(content)
        if data is not None:
            return data
        logger.debug("base64_fallback", part_id=part.part_id, length=len(content))

    return content.encode("ascii", "replace")
