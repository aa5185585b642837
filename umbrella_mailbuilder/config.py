"""Mail builder settings loaded from environment variables."""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

from .encoding import resolve_charset


class MailBuilderConfig(BaseSettings):
    """Settings for the command line entry point and library defaults."""

    model_config = {"env_prefix": "MAILBUILDER_", "validate_default": True}

    default_charset: str = Field(
        default="us-ascii",
        description="Charset assumed for parts and encoded-words without a usable one",
    )
    log_level: str = Field(default="INFO", description="Root log level name")
    log_json: bool = Field(
        default=False,
        description="Emit JSON log lines instead of the console renderer",
    )

    @field_validator("default_charset")
    @classmethod
    def _known_charset(cls, value: str) -> str:
        resolved = resolve_charset(value, default="")
        if not resolved:
            raise ValueError(f"Unknown charset: {value}")
        return resolved
