"""
Digest computation.

Routes input (bytes, text, binary streams or files) through an algorithm's
streaming hasher in fixed-size chunks, so large inputs are never held in
memory whole.
"""

from __future__ import annotations

import os
from typing import IO, TYPE_CHECKING

from .core.exceptions import DigestIOError, DigestMismatchError
from .digest import CANONICAL, Digest
from .hashing import AlgorithmRegistry, HashStrategy, StreamingHasher, default_registry
from .services.logging import get_logger

if TYPE_CHECKING:
    from .core.interfaces.logger import ILogger
    from .core.settings import DigestSettings

DEFAULT_CHUNK_SIZE = 1024

AlgorithmLike = HashStrategy | str


class DigestComputer:
    """
    Computes encoded digests for a chosen algorithm.

    Every call takes its own hasher from the algorithm, so one computer
    can be shared across threads.
    """

    def __init__(
        self,
        registry: AlgorithmRegistry | None = None,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
        logger: ILogger | None = None,
        canonical: str = CANONICAL,
    ):
        """
        Initialize the computer.

        Args:
            registry: Registry used to resolve algorithm names
                (defaults to the process-wide registry)
            chunk_size: Bytes read per update when streaming
            logger: Logger for diagnostics (defaults to the process-wide logger)
            canonical: Algorithm used by the digest_* helpers when none is given
        """
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._registry = registry if registry is not None else default_registry()
        self._chunk_size = chunk_size
        self._logger = logger
        self._canonical = canonical

    @classmethod
    def from_settings(
        cls,
        settings: DigestSettings,
        registry: AlgorithmRegistry | None = None,
        logger: ILogger | None = None,
    ) -> DigestComputer:
        """Build a computer from the hash section of the settings."""
        return cls(
            registry=(
                registry
                if registry is not None
                else AlgorithmRegistry.from_settings(settings, logger=logger)
            ),
            chunk_size=settings.hash.chunk_size,
            logger=logger,
            canonical=settings.hash.canonical,
        )

    @property
    def registry(self) -> AlgorithmRegistry:
        return self._registry

    @property
    def chunk_size(self) -> int:
        return self._chunk_size

    @property
    def canonical(self) -> str:
        return self._canonical


    @property
    def _log(self) -> ILogger:
        """The injected logger, else the current process-wide one."""
        return self._logger if self._logger is not None else get_logger()

    def _finish(self, strategy: HashStrategy, hasher: StreamingHasher) -> str:
        return strategy.encode(hasher.finalize())

    def _consume(
        self,
        hashers: list[StreamingHasher],
        stream: IO[bytes],
        chunk_size: int,
        path: str | None = None,
    ) -> None:
        try:
            while chunk := stream.read(chunk_size):
                for hasher in hashers:
                    hasher.update(chunk)
        except OSError as e:
            self._log.warning("Read failed while computing digest: %s", e)
            raise DigestIOError("Failed to read input", path=path, cause=e) from e

    # -------------------------------------------------------------------------
    # Encoded digests
    # -------------------------------------------------------------------------

    def from_bytes(self, algorithm: AlgorithmLike, data: bytes) -> str:
        """Encoded digest of a byte string."""
        strategy = self._registry.resolve(algorithm)
        hasher = strategy.new_hasher()
        hasher.update(data)
        return self._finish(strategy, hasher)

    def from_string(self, algorithm: AlgorithmLike, text: str, encoding: str = "utf-8") -> str:
        """Encoded digest of text, hashed as its byte encoding."""
        return self.from_bytes(algorithm, text.encode(encoding))

    def from_reader(
        self, algorithm: AlgorithmLike, stream: IO[bytes], chunk_size: int | None = None
    ) -> str:
        """
        Encoded digest of a binary stream, read to end in chunks.

        Args:
            algorithm: Strategy or registered algorithm name
            stream: Binary file-like object
            chunk_size: Overrides the computer's chunk size for this call

        Raises:
            DigestIOError: If reading fails; no digest is returned
        """
        size = self._chunk_size if chunk_size is None else chunk_size
        if size <= 0:
            raise ValueError(f"chunk_size must be positive, got {size}")
        strategy = self._registry.resolve(algorithm)
        hasher = strategy.new_hasher()
        self._consume([hasher], stream, size)
        encoded = self._finish(strategy, hasher)
        self._log.debug("Computed %s digest of stream", strategy.algorithm_name)
        return encoded

    def from_file(self, algorithm: AlgorithmLike, path: str | os.PathLike) -> str:
        """
        Encoded digest of a file's contents.

        Raises:
            DigestIOError: If the file is missing or unreadable
        """
        strategy = self._registry.resolve(algorithm)
        hasher = strategy.new_hasher()
        path_str = os.fspath(path)
        self._log.debug("Computing %s digest of %s", strategy.algorithm_name, path_str)
        try:
            f = open(path, "rb")
        except OSError as e:
            self._log.warning("Cannot open %s for hashing: %s", path_str, e)
            raise DigestIOError("Failed to open file", path=path_str, cause=e) from e
        with f:
            self._consume([hasher], f, self._chunk_size, path=path_str)
        return self._finish(strategy, hasher)

    def compute_file_many(
        self, path: str | os.PathLike, algorithms: list[AlgorithmLike] | None = None
    ) -> dict[str, str]:
        """
        Compute several digests of a file in a single pass.

        Args:
            path: File path
            algorithms: Strategies or names. Defaults to the canonical algorithm.

        Returns:
            Dict of {algorithm: encoded}

        Raises:
            DigestIOError: If the file is missing or unreadable
        """
        strategies = [self._registry.resolve(a) for a in (algorithms or [self._canonical])]
        hashers = [s.new_hasher() for s in strategies]
        path_str = os.fspath(path)
        try:
            f = open(path, "rb")
        except OSError as e:
            self._log.warning("Cannot open %s for hashing: %s", path_str, e)
            raise DigestIOError("Failed to open file", path=path_str, cause=e) from e
        with f:
            self._consume(hashers, f, self._chunk_size, path=path_str)
        return {
            s.algorithm_name: self._finish(s, h) for s, h in zip(strategies, hashers, strict=True)
        }

    # -------------------------------------------------------------------------
    # Digest values
    # -------------------------------------------------------------------------

    def _wrap(self, algorithm: AlgorithmLike, encoded: str) -> Digest:
        return Digest.from_algorithm_and_encoded(self._registry.resolve(algorithm), encoded)

    def digest_bytes(self, data: bytes, algorithm: AlgorithmLike | None = None) -> Digest:
        algorithm = algorithm or self._canonical
        return self._wrap(algorithm, self.from_bytes(algorithm, data))

    def digest_string(self, text: str, algorithm: AlgorithmLike | None = None) -> Digest:
        algorithm = algorithm or self._canonical
        return self._wrap(algorithm, self.from_string(algorithm, text))

    def digest_reader(self, stream: IO[bytes], algorithm: AlgorithmLike | None = None) -> Digest:
        algorithm = algorithm or self._canonical
        return self._wrap(algorithm, self.from_reader(algorithm, stream))

    def digest_file(
        self, path: str | os.PathLike, algorithm: AlgorithmLike | None = None
    ) -> Digest:
        algorithm = algorithm or self._canonical
        return self._wrap(algorithm, self.from_file(algorithm, path))

    # -------------------------------------------------------------------------
    # Verification
    # -------------------------------------------------------------------------

    def _check(self, expected: Digest, found: Digest, name: str) -> None:
        if found != expected:
            raise DigestMismatchError(
                f"Digest of {name} does not match",
                expected=str(expected),
                found=str(found),
            )

    def verify_bytes(self, expected: Digest | str, data: bytes) -> None:
        """
        Check that data hashes to the expected digest.

        The expected digest is validated strictly first.

        Raises:
            DigestMismatchError: If the digests differ
        """
        expected = Digest.parse(expected)
        expected.validate_strict(self._registry)
        self._check(expected, self.digest_bytes(data, expected.algorithm()), "data")

    def verify_file(self, expected: Digest | str, path: str | os.PathLike) -> None:
        """
        Check that a file hashes to the expected digest.

        Raises:
            DigestMismatchError: If the digests differ
            DigestIOError: If the file is missing or unreadable
        """
        expected = Digest.parse(expected)
        expected.validate_strict(self._registry)
        found = self.digest_file(path, expected.algorithm())
        self._check(expected, found, f"'{os.fspath(path)}'")
