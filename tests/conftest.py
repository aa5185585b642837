"""Shared test fixtures for the mail builder test suite."""

from __future__ import annotations

import logging
from email import encoders
from email.mime.base import MIMEBase
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText

import pytest

from umbrella_mailbuilder.bodypart import (
    BodyPart,
    ContentDisposition,
    ContentDispositionType,
    ContentTransferEncoding,
    ContentType,
)


# ------------------------------------------------------------------
# Sample header blocks
# ------------------------------------------------------------------

HEADER_TEXT = (
    "Return-Path: <bounce@lists.example.com>\r\n"
    "Received: from mx1.example.com by mail.example.org;\r\n"
    "\tMon, 01 Jun 2025 12:00:00 +0000\r\n"
    "Received: from relay.example.net by mx1.example.com\r\n"
    "From: Alice Example <alice@example.com>\r\n"
    "Sender: list-bounces@lists.example.com\r\n"
    "To: Bob <bob@example.org>, carol@example.net\r\n"
    "Cc: Dave <dave@example.com>\r\n"
    "Reply-To: replies@example.com\r\n"
    "Subject: =?UTF-8?Q?Quarterly_report_=E2=80=93_draft?=\r\n"
    "Priority: urgent\r\n"
    "Message-ID: <20250601120000.1234@example.com>\r\n"
    "Date: Mon, 01 Jun 2025 12:00:00 +0000\r\n"
)


@pytest.fixture
def header_text() -> str:
    return HEADER_TEXT


# ------------------------------------------------------------------
# Body part descriptors
# ------------------------------------------------------------------


@pytest.fixture
def make_part():
    """Factory to create BodyPart descriptors with overrides."""

    def _make(
        *,
        part_id: str | None = None,
        type: ContentType = ContentType.TEXT,
        subtype: str = "plain",
        encoding: ContentTransferEncoding = ContentTransferEncoding.SEVEN_BIT,
        disposition: ContentDispositionType = ContentDispositionType.INLINE,
        filename: str | None = None,
        parameters: dict[str, str] | None = None,
    ) -> BodyPart:
        return BodyPart(
            part_id=part_id,
            type=type,
            subtype=subtype,
            encoding=encoding,
            disposition=ContentDisposition(type=disposition, filename=filename),
            parameters=parameters or {},
        )

    return _make


# ------------------------------------------------------------------
# Sample EML builders
# ------------------------------------------------------------------


def _build_multipart_email(
    *,
    body_text: str = "Plain body",
    body_html: str = "<p>HTML body</p>",
    attachments: list[tuple[str, str, bytes, str | None]] | None = None,
) -> str:
    """Build a multipart/mixed email with a text/HTML alternative and attachments."""
    msg = MIMEMultipart("mixed")
    msg["Subject"] = "Multipart Email"
    msg["From"] = "Sender <sender@example.com>"
    msg["To"] = "recipient@example.com"
    msg["Message-ID"] = "<multi-001@example.com>"
    msg["Date"] = "Mon, 01 Jun 2025 12:00:00 +0000"

    alt = MIMEMultipart("alternative")
    alt.attach(MIMEText(body_text, "plain"))
    alt.attach(MIMEText(body_html, "html"))
    msg.attach(alt)

    for filename, content_type, payload, content_id in attachments or []:
        maintype, subtype = content_type.split("/", 1)
        part = MIMEBase(maintype, subtype)
        part.set_payload(payload)
        encoders.encode_base64(part)
        part.add_header("Content-Disposition", "attachment", filename=filename)
        if content_id:
            part.add_header("Content-ID", content_id)
        msg.attach(part)

    return msg.as_string()


@pytest.fixture
def multipart_eml() -> str:
    return _build_multipart_email(
        attachments=[
            ("report.pdf", "application/pdf", b"%PDF-1.4 fake pdf content", "<report@example.com>"),
            ("data.csv", "text/csv", b"col1,col2\na,b\n", None),
        ],
    )


@pytest.fixture
def html_eml() -> str:
    msg = MIMEText("<p>Hello</p>", "html", "utf-8")
    msg["Subject"] = "HTML Email"
    msg["From"] = "sender@example.com"
    msg["To"] = "recipient@example.com"
    return msg.as_string()


@pytest.fixture(autouse=True)
def _reset_root_handlers():
    yield
    logging.getLogger().handlers.clear()
