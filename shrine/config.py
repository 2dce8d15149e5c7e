"""Configuration module for shrine validation.

This module defines the configuration models and the YAML parsing entry point.
"""

import sys

import yaml
from pydantic import BaseModel, ConfigDict, Field

from .validation.messages import CheckKind, Message


class StrictBaseModel(BaseModel):
    """Base model with immutable (frozen) configuration."""

    model_config = ConfigDict(frozen=True)


class ValidationConfig(StrictBaseModel):
    """Validation helpers configuration.

    Attributes:
        default_messages: Overrides for the built-in error messages, keyed by
            check kind. Values are literal strings or callables receiving the
            check's bound. Kinds left out keep their built-in message.
        skip_missing_dimensions: When True (default), width/height checks on a
            file whose dimensions are unknown are skipped with a deprecation
            warning. When False, such checks fail.
    """

    default_messages: dict[CheckKind, Message] = Field(
        default_factory=dict, alias="default_messages"
    )
    skip_missing_dimensions: bool = Field(default=True, alias="skip_missing_dimensions")

    @classmethod
    def parse_yaml(cls, path: str) -> "ValidationConfig":
        """Parse configuration from YAML file.

        Args:
            path: Path to YAML configuration file

        Returns:
            Validated ValidationConfig instance

        Raises:
            SystemExit: If config file is not found
        """
        try:
            with open(path, "r") as f:
                return cls.model_validate(yaml.safe_load(f) or {})
        except FileNotFoundError:
            print(f"Config file not found: {path}", file=sys.stderr)
            raise SystemExit(1)
