"""Core building blocks: exceptions, interfaces, models and settings."""

from .exceptions import (
    AlgorithmLengthMismatchError,
    ConfigFileError,
    ConfigValidationError,
    DigestError,
    DigestIOError,
    DigestMismatchError,
    HasherFinalizedError,
    MalformedDigestError,
    UnknownAlgorithmError,
)

__all__ = [
    "AlgorithmLengthMismatchError",
    "ConfigFileError",
    "ConfigValidationError",
    "DigestError",
    "DigestIOError",
    "DigestMismatchError",
    "HasherFinalizedError",
    "MalformedDigestError",
    "UnknownAlgorithmError",
]
