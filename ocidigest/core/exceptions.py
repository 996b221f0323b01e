"""
Custom exception hierarchy for ocidigest.

Data problems (unknown algorithms, malformed digests, unreadable input) are
raised as typed exceptions so callers can tell a misconfigured algorithm
name apart from a corrupted encoding.
"""

from __future__ import annotations


class DigestError(Exception):
    """
    Base exception for all ocidigest data errors.

    Attributes:
        message: Human-readable error description
        context: Additional debugging context (digest, algorithm, path, etc.)
    """

    def __init__(
        self,
        message: str,
        *,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.message = message
        self.context = context or {}
        if cause is not None:
            self.__cause__ = cause
        super().__init__(message)

    def __str__(self) -> str:
        if self.context:
            ctx_str = ", ".join(f"{k}={v!r}" for k, v in self.context.items())
            return f"{self.message} ({ctx_str})"
        return self.message


# =============================================================================
# Algorithm Errors
# =============================================================================


class UnknownAlgorithmError(DigestError, ValueError):
    """
    Algorithm name is not present in the registry.

    Raised by registry lookups and by digest validation.
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if algorithm is not None:
            ctx["algorithm"] = algorithm
        super().__init__(message, context=ctx, cause=cause)
        self.algorithm = algorithm


# =============================================================================
# Digest Format Errors
# =============================================================================


class MalformedDigestError(DigestError, ValueError):
    """
    Digest string does not follow the ``algorithm:encoded`` grammar.

    ``check`` names the failed check: ``"separator"`` or ``"grammar"``.
    """

    def __init__(
        self,
        message: str,
        *,
        digest: str | None = None,
        check: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if digest is not None:
            ctx["digest"] = digest
        if check:
            ctx["check"] = check
        super().__init__(message, context=ctx, cause=cause)
        self.digest = digest
        self.check = check


class AlgorithmLengthMismatchError(DigestError, ValueError):
    """
    Encoded segment does not match the length or alphabet of its algorithm.

    Only raised by strict validation.
    """

    def __init__(
        self,
        message: str,
        *,
        algorithm: str | None = None,
        expected_length: int | None = None,
        actual_length: int | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if algorithm is not None:
            ctx["algorithm"] = algorithm
        if expected_length is not None:
            ctx["expected_length"] = expected_length
        if actual_length is not None:
            ctx["actual_length"] = actual_length
        super().__init__(message, context=ctx, cause=cause)
        self.algorithm = algorithm


class DigestMismatchError(DigestError, ValueError):
    """Content does not hash to the expected digest."""

    def __init__(
        self,
        message: str,
        *,
        expected: str | None = None,
        found: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if expected is not None:
            ctx["expected"] = expected
        if found is not None:
            ctx["found"] = found
        super().__init__(message, context=ctx, cause=cause)
        self.expected = expected
        self.found = found


# =============================================================================
# I/O Errors
# =============================================================================


class DigestIOError(DigestError, OSError):
    """
    Reading a file or stream failed before the digest was finalized.

    No partial digest is returned when this is raised.
    """

    def __init__(
        self,
        message: str,
        *,
        path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if path is not None:
            ctx["path"] = path
        super().__init__(message, context=ctx, cause=cause)
        self.path = path


# =============================================================================
# Programming Errors
# =============================================================================


class HasherFinalizedError(RuntimeError):
    """
    A streaming hasher was used after finalize().

    This is a caller bug, not a data problem, so it is not a DigestError.
    """

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class DigestConfigError(DigestError):
    """Base class for configuration-related errors."""

    pass


class ConfigFileError(DigestConfigError):
    """
    Error reading or parsing a configuration or layout file.

    Raised for TOML parsing errors, file not found, permission errors, etc.
    """

    def __init__(
        self,
        message: str,
        *,
        file_path: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if file_path:
            ctx["file_path"] = file_path
        super().__init__(message, context=ctx, cause=cause)


class ConfigValidationError(DigestConfigError, ValueError):
    """Invalid or missing configuration value."""

    def __init__(
        self,
        message: str,
        *,
        key: str | None = None,
        value: str | None = None,
        context: dict | None = None,
        cause: Exception | None = None,
    ) -> None:
        ctx = context or {}
        if key:
            ctx["key"] = key
        if value is not None:
            ctx["value"] = value
        super().__init__(message, context=ctx, cause=cause)
