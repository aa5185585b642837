"""Entry point for the mail builder package.

Usage::

    python -m umbrella_mailbuilder message.eml   # print the assembled message as JSON
    python -m umbrella_mailbuilder -             # read the message from stdin
"""

from __future__ import annotations

import json
import sys

import structlog

logger = structlog.get_logger()


def main(argv: list[str] | None = None) -> int:
    args = sys.argv[1:] if argv is None else argv
    if len(args) != 1:
        print("Usage: python -m umbrella_mailbuilder <file.eml|->", file=sys.stderr)
        return 1

    from .builder import from_mime822
    from .config import MailBuilderConfig
    from .logging import setup_logging

    config = MailBuilderConfig()
    setup_logging(json=config.log_json, level=config.log_level)

    path = args[0]
    try:
        if path == "-":
            raw = sys.stdin.buffer.read()
        else:
            with open(path, "rb") as fh:
                raw = fh.read()
    except OSError as exc:
        logger.error("message_read_failed", path=path, error=str(exc))
        return 2

    # RFC 822 text is 7-bit in principle; latin-1 keeps stray 8-bit octets intact
    message = from_mime822(raw.decode("latin-1"), config.default_charset)
    json.dump(message.to_summary(), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    logger.info(
        "message_built",
        path=path,
        attachments=len(message.attachments),
        alternate_views=len(message.alternate_views),
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
