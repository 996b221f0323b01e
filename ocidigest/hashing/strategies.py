"""
Hash algorithm strategy implementations.

Each strategy describes one concrete hash function: its canonical name,
output size, availability, encoding and the pattern its encoded digests
must match. Strategies hand out fresh StreamingHasher instances, so
independent computations never share state.
"""

from __future__ import annotations

import hashlib
import re
from abc import ABC, abstractmethod
from typing import Any

from ..core.exceptions import HasherFinalizedError, UnknownAlgorithmError

try:
    import blake3 as _blake3

    blake3: Any | None = _blake3
except ImportError:
    blake3 = None


class StreamingHasher:
    """
    Incremental accumulator over one hash primitive.

    Open until finalize() is called; any use after that raises
    HasherFinalizedError.
    """

    def __init__(self, algorithm: str, state: Any):
        self.algorithm = algorithm
        self._state = state
        self._finalized = False

    @property
    def finalized(self) -> bool:
        return self._finalized

    def update(self, data: bytes) -> None:
        """Feed the next chunk of input, in source byte order."""
        if self._finalized:
            raise HasherFinalizedError(f"{self.algorithm} hasher already finalized")
        self._state.update(data)

    def finalize(self) -> bytes:
        """Return the raw digest bytes and close the hasher."""
        if self._finalized:
            raise HasherFinalizedError(f"{self.algorithm} hasher already finalized")
        self._finalized = True
        raw = self._state.digest()
        self._state = None
        return raw


class HashStrategy(ABC):
    """
    Abstract base class for hash algorithm strategies.

    Implementations must provide:
    - algorithm_name: Unique identifier for the algorithm
    - output_bits: Digest size of the underlying primitive
    - _new_state(): Factory for the primitive's hasher object

    Encoding defaults to lowercase hex; override encode() and
    encoded_pattern for other encodings.
    """

    @property
    @abstractmethod
    def algorithm_name(self) -> str:
        """Return algorithm identifier (e.g., 'sha256')."""
        pass

    @property
    @abstractmethod
    def output_bits(self) -> int:
        """Return the digest size in bits."""
        pass

    @abstractmethod
    def _new_state(self) -> Any:
        """Create the primitive hasher object."""
        pass

    def size_bytes(self) -> int:
        """Digest output length in bytes."""
        return self.output_bits // 8

    def available(self) -> bool:
        """Whether the primitive can be used in this process."""
        return True

    @property
    def encoded_pattern(self) -> str:
        """Regex an encoded digest for this algorithm must fully match."""
        return f"^[a-f0-9]{{{self.output_bits // 4}}}$"

    def new_hasher(self) -> StreamingHasher:
        """Return a fresh, independent streaming hasher."""
        if not self.available():
            raise UnknownAlgorithmError(
                "Hash algorithm is not available", algorithm=self.algorithm_name
            )
        return StreamingHasher(self.algorithm_name, self._new_state())

    def encode(self, raw: bytes) -> str:
        """Encode raw digest bytes. Default is lowercase hex."""
        return raw.hex()

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.algorithm_name!r}, {self.output_bits})"


class SHA256Strategy(HashStrategy):
    """SHA-256 hashing strategy - the canonical algorithm."""

    @property
    def algorithm_name(self) -> str:
        return "sha256"

    @property
    def output_bits(self) -> int:
        return hashlib.sha256().digest_size * 8

    def _new_state(self) -> Any:
        return hashlib.sha256()


class SHA384Strategy(HashStrategy):
    """SHA-384 hashing strategy."""

    @property
    def algorithm_name(self) -> str:
        return "sha384"

    @property
    def output_bits(self) -> int:
        return hashlib.sha384().digest_size * 8

    def _new_state(self) -> Any:
        return hashlib.sha384()


class SHA512Strategy(HashStrategy):
    """SHA-512 hashing strategy."""

    @property
    def algorithm_name(self) -> str:
        return "sha512"

    @property
    def output_bits(self) -> int:
        return hashlib.sha512().digest_size * 8

    def _new_state(self) -> Any:
        return hashlib.sha512()


class Blake3Strategy(HashStrategy):
    """
    BLAKE3 hashing strategy with the default 256-bit output.

    BLAKE3 output length is configurable in general, so the encoded
    pattern is pinned to the 64 hex characters of the default output
    rather than derived from output_bits.
    """

    OUTPUT_BITS = 256

    @property
    def algorithm_name(self) -> str:
        return "blake3"

    @property
    def output_bits(self) -> int:
        return self.OUTPUT_BITS

    @property
    def encoded_pattern(self) -> str:
        return "^[a-f0-9]{64}$"

    def available(self) -> bool:
        return blake3 is not None

    def _new_state(self) -> Any:
        return blake3.blake3()


class HashlibStrategy(HashStrategy):
    """
    Strategy for any hashlib algorithm registered by name and size.

    The declared size is checked against the real primitive so a wrong
    size can never be registered.
    """

    NAME_PATTERN = re.compile(r"^[a-z0-9]+(?:[.+_-][a-z0-9]+)*$")

    def __init__(self, name: str, output_bits: int, hashlib_name: str | None = None):
        if not self.NAME_PATTERN.fullmatch(name):
            raise ValueError(f"Invalid algorithm name: {name!r}")
        if output_bits <= 0 or output_bits % 8:
            raise ValueError(f"output_bits must be a positive multiple of 8, got {output_bits}")

        self._name = name
        self._hashlib_name = hashlib_name or name
        try:
            probe = hashlib.new(self._hashlib_name)
        except ValueError as e:
            raise UnknownAlgorithmError(
                "No hash primitive available for algorithm", algorithm=name, cause=e
            ) from e
        if probe.digest_size * 8 != output_bits:
            raise ValueError(
                f"{name} produces {probe.digest_size * 8}-bit digests, not {output_bits}"
            )
        self._output_bits = output_bits

    @property
    def algorithm_name(self) -> str:
        return self._name

    @property
    def output_bits(self) -> int:
        return self._output_bits

    def _new_state(self) -> Any:
        return hashlib.new(self._hashlib_name)
