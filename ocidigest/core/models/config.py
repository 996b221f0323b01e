"""
Configuration models.

Provides Pydantic models for ocidigest configuration with validation.
"""

from __future__ import annotations

from typing import Literal

from pydantic import ConfigDict, Field, field_validator, model_validator

from .base import DigestBaseModel

# Type aliases
DefaultAlgorithm = Literal["sha256", "sha384", "sha512", "blake3"]
LogLevel = Literal["debug", "info", "warning", "error"]


class ConfigBaseModel(DigestBaseModel):
    """Base model for config sections with lenient coercion for TOML and env values."""

    model_config = ConfigDict(
        validate_assignment=True,
        extra="ignore",  # Ignore unknown keys in config files
        populate_by_name=True,
    )


class HashConfig(ConfigBaseModel):
    """Hash algorithm configuration section."""

    canonical: DefaultAlgorithm = "sha256"
    chunk_size: int = Field(default=1024, gt=0)
    blake3: bool = True

    @model_validator(mode="after")
    def check_canonical_registered(self) -> HashConfig:
        """blake3 cannot be canonical when it is not registered."""
        if self.canonical == "blake3" and not self.blake3:
            raise ValueError("hash.canonical is blake3 but hash.blake3 is disabled")
        return self


class LoggingConfig(ConfigBaseModel):
    """Logging configuration section."""

    level: LogLevel = "warning"
    console: bool = False
    file: bool = False
    file_path: str | None = None

    @field_validator("level", mode="before")
    @classmethod
    def normalize_level(cls, v: str) -> str:
        """Accept log levels in any case."""
        if isinstance(v, str):
            return v.lower()
        return v
