"""Pydantic models for ocidigest."""

from .base import DigestBaseModel, ImmutableModel
from .config import ConfigBaseModel, HashConfig, LoggingConfig

__all__ = [
    "ConfigBaseModel",
    "DigestBaseModel",
    "HashConfig",
    "ImmutableModel",
    "LoggingConfig",
]
