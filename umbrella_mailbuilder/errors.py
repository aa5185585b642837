"""Exception hierarchy for the mail builder."""

from __future__ import annotations


class MailBuilderError(Exception):
    """Base class for errors raised by umbrella_mailbuilder."""


class InvalidMessageIdError(MailBuilderError, ValueError):
    """The field does not contain a ``<...>`` enclosed message identifier."""

    def __init__(self, field: str) -> None:
        super().__init__(f"The field does not contain a valid message identifier: {field!r}")
        self.field = field


class HeaderRejectedError(MailBuilderError, ValueError):
    """The header store refused a field (empty name or empty value)."""

    def __init__(self, name: str, value: str) -> None:
        super().__init__(f"Header {name!r} rejected: empty name or value")
        self.name = name
        self.value = value
