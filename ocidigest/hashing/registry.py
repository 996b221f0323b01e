"""
Hash algorithm registry.

Maps algorithm names to strategies and to the compiled pattern their
encoded digests must match. New algorithms are added by registering a
strategy; call sites keep looking algorithms up by name.
"""

from __future__ import annotations

import re
import threading
from typing import TYPE_CHECKING

from ..core.exceptions import UnknownAlgorithmError
from ..services.logging import get_logger
from .strategies import (
    Blake3Strategy,
    HashlibStrategy,
    HashStrategy,
    SHA256Strategy,
    SHA384Strategy,
    SHA512Strategy,
)

if TYPE_CHECKING:
    from ..core.interfaces.logger import ILogger
    from ..core.settings import DigestSettings


class AlgorithmRegistry:
    """
    Registry for hash algorithm strategies.

    Lookups read an immutable snapshot without locking. Registration
    builds a new snapshot under a lock and swaps it in, so concurrent
    readers never observe a half-registered algorithm.

    Example:
        registry = AlgorithmRegistry()

        strategy = registry.lookup("sha256")

        # Register by name and size (backed by hashlib)
        registry.register("sha3-256", 256)

        # Or register a custom strategy
        registry.register(MyCustomStrategy())
    """

    def __init__(
        self,
        register_defaults: bool = True,
        include_blake3: bool = True,
        logger: ILogger | None = None,
    ):
        """
        Initialize the registry.

        Args:
            register_defaults: If True, register sha256, sha384 and sha512
            include_blake3: If True (and defaults are registered), also register blake3
            logger: Logger for diagnostics (defaults to the process-wide logger)
        """
        self._logger = logger
        self._lock = threading.Lock()
        self._strategies: dict[str, HashStrategy] = {}
        self._patterns: dict[str, re.Pattern[str]] = {}
        if register_defaults:
            self._register_defaults(include_blake3)

    @classmethod
    def from_settings(cls, settings: DigestSettings, logger: ILogger | None = None) -> AlgorithmRegistry:
        """Build a registry honouring the hash section of the settings."""
        return cls(include_blake3=settings.hash.blake3, logger=logger)


    @property
    def _log(self) -> ILogger:
        """The injected logger, else the current process-wide one."""
        return self._logger if self._logger is not None else get_logger()

    def _register_defaults(self, include_blake3: bool) -> None:
        """Register built-in hash algorithms."""
        self.register(SHA256Strategy())
        self.register(SHA384Strategy())
        self.register(SHA512Strategy())
        if include_blake3:
            self.register(Blake3Strategy())

    def register(self, algorithm: HashStrategy | str, output_bits: int | None = None) -> bool:
        """
        Register a hash algorithm.

        Args:
            algorithm: A HashStrategy, or an algorithm name backed by hashlib
            output_bits: Digest size in bits; required when algorithm is a name

        Returns:
            True if registered, False if the name was already taken
            (the existing entry is left untouched)
        """
        name = algorithm.algorithm_name if isinstance(algorithm, HashStrategy) else algorithm

        with self._lock:
            if name in self._strategies:
                self._log.debug("Hash algorithm %s already registered", name)
                return False

            if isinstance(algorithm, HashStrategy):
                strategy = algorithm
            else:
                if output_bits is None:
                    raise ValueError("output_bits is required when registering by name")
                strategy = HashlibStrategy(algorithm, output_bits)

            strategies = dict(self._strategies)
            patterns = dict(self._patterns)
            strategies[name] = strategy
            patterns[name] = re.compile(strategy.encoded_pattern)
            self._patterns = patterns
            self._strategies = strategies

        self._log.debug(
            "Registered hash algorithm %s (%d bits)", name, strategy.output_bits
        )
        return True

    def lookup(self, algorithm: str) -> HashStrategy | None:
        """
        Get strategy by algorithm name.

        Args:
            algorithm: Algorithm name (e.g., 'sha256', 'blake3')

        Returns:
            HashStrategy or None if not found
        """
        return self._strategies.get(algorithm)

    def get(self, algorithm: str) -> HashStrategy:
        """
        Get strategy by algorithm name.

        Raises:
            UnknownAlgorithmError: If algorithm not registered
        """
        strategy = self.lookup(algorithm)
        if strategy is None:
            raise UnknownAlgorithmError("Unknown hash algorithm", algorithm=algorithm)
        return strategy

    def resolve(self, algorithm: HashStrategy | str) -> HashStrategy:
        """Return the strategy itself, or look it up when given a name."""
        if isinstance(algorithm, HashStrategy):
            return algorithm
        return self.get(algorithm)

    def pattern(self, algorithm: str) -> re.Pattern[str]:
        """
        Get the compiled encoded-digest pattern for an algorithm.

        Raises:
            UnknownAlgorithmError: If algorithm not registered
        """
        pattern = self._patterns.get(algorithm)
        if pattern is None:
            raise UnknownAlgorithmError("Unknown hash algorithm", algorithm=algorithm)
        return pattern

    def create_hasher(self, algorithm: str):
        """
        Create a streaming hasher for the given algorithm.

        Raises:
            UnknownAlgorithmError: If algorithm not registered or unavailable
        """
        return self.get(algorithm).new_hasher()

    @property
    def available_algorithms(self) -> list[str]:
        """List registered algorithm names whose primitive is usable."""
        return [name for name, s in self._strategies.items() if s.available()]

    def __contains__(self, algorithm: object) -> bool:
        """Check if algorithm is registered."""
        return algorithm in self._strategies

    def __iter__(self):
        return iter(list(self._strategies))

    def __len__(self) -> int:
        return len(self._strategies)


_default_registry: AlgorithmRegistry | None = None
_default_lock = threading.Lock()


def default_registry() -> AlgorithmRegistry:
    """
    Return the process-wide registry, building it on first use.

    Holds sha256, sha384, sha512 and blake3.
    """
    global _default_registry
    if _default_registry is None:
        with _default_lock:
            if _default_registry is None:
                _default_registry = AlgorithmRegistry()
    return _default_registry
