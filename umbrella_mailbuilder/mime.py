"""Parsing of MIME structured field bodies such as Content-Type."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping

_PARAMETER_RE = re.compile(r"([\w\-]+)=\W*([\w\-/.]+)")
_VALUE_RE = re.compile(r"^\s*([\w/]+)")


@dataclass(frozen=True)
class MimeParameters:
    """A field's primary value plus its ``name=value`` parameters.

    For ``text/html; charset=iso-8859-1`` the value is ``text/html`` and
    the parameters are ``{"charset": "iso-8859-1"}``.
    """

    value: str
    parameters: Mapping[str, str] = field(default_factory=dict)

    def get(self, name: str, default: str | None = None) -> str | None:
        """Case-insensitive parameter lookup."""
        if name in self.parameters:
            return self.parameters[name]
        lowered = name.lower()
        for key, value in self.parameters.items():
            if key.lower() == lowered:
                return value
        return default


def parse_mime_field(field_body: str) -> MimeParameters:
    """Parse a MIME field which can carry ``parameter=value`` pairs.

    Quotes around a parameter value are skipped by the ``\\W*`` lead-in and
    terminate the value class, so ``name="a.pdf"`` yields ``a.pdf``.  A
    repeated parameter overwrites the earlier one.
    """
    parameters: dict[str, str] = {}
    for match in _PARAMETER_RE.finditer(field_body):
        parameters[match.group(1)] = match.group(2)

    value_match = _VALUE_RE.match(field_body)
    return MimeParameters(
        value=value_match.group(1) if value_match else "",
        parameters=MappingProxyType(parameters),
    )
