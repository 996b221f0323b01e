"""
Digest value type.

A digest is the string ``algorithm:encoded``. Construction never validates,
so a suspect digest can be carried around and reported on; call one of the
validate methods before using it as a content-addressable key.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from .core.exceptions import (
    AlgorithmLengthMismatchError,
    MalformedDigestError,
    UnknownAlgorithmError,
)
from .hashing import AlgorithmRegistry, HashStrategy, default_registry

if TYPE_CHECKING:
    from .verifier import Verifier

SHA256 = "sha256"
SHA384 = "sha384"
SHA512 = "sha512"
BLAKE3 = "blake3"

# Primary digest algorithm, used when no other is specified
CANONICAL = SHA256

SEPARATOR = ":"

DIGEST_PATTERN = re.compile(r"^[a-z0-9]+(?:[.+_-][a-z0-9]+)*:[a-zA-Z0-9=_-]+$")


@dataclass(frozen=True)
class Digest:
    """A content identifier of the form ``algorithm:encoded``."""

    value: str

    @classmethod
    def parse(cls, text: str | Digest) -> Digest:
        """Wrap an external digest string. Does not validate."""
        if isinstance(text, Digest):
            return text
        return cls(text)

    @classmethod
    def from_algorithm_and_encoded(cls, algorithm: HashStrategy | str, encoded: str) -> Digest:
        """Join an algorithm and an encoded value. Does not validate."""
        name = algorithm.algorithm_name if isinstance(algorithm, HashStrategy) else algorithm
        return cls(f"{name}{SEPARATOR}{encoded}")

    def __str__(self) -> str:
        return self.value

    def _split(self) -> tuple[str, str]:
        algorithm, sep, encoded = self.value.partition(SEPARATOR)
        if not sep:
            raise MalformedDigestError(
                "Digest has no algorithm separator", digest=self.value, check="separator"
            )
        return algorithm, encoded

    def algorithm(self) -> str:
        """
        Algorithm component, the text before the first ':'.

        Raises:
            MalformedDigestError: If there is no separator
        """
        return self._split()[0]

    def encoded(self) -> str:
        """
        Encoded component, the text after the first ':'.

        Raises:
            MalformedDigestError: If there is no separator
        """
        return self._split()[1]

    def validate_format(self) -> None:
        """
        Check the digest against the generic grammar only.

        Accepts any well-formed digest, whatever its algorithm.

        Raises:
            MalformedDigestError: check="separator" unless exactly one ':'
                is present, check="grammar" if a segment is ill-formed
        """
        count = self.value.count(SEPARATOR)
        if count != 1:
            raise MalformedDigestError(
                f"Digest must contain exactly one separator, found {count}",
                digest=self.value,
                check="separator",
            )
        if not DIGEST_PATTERN.fullmatch(self.value):
            raise MalformedDigestError(
                "Digest does not match the digest grammar",
                digest=self.value,
                check="grammar",
            )

    def validate(self, registry: AlgorithmRegistry | None = None) -> None:
        """
        Check the grammar and that the algorithm is registered.

        Raises:
            MalformedDigestError: If the grammar check fails
            UnknownAlgorithmError: If the algorithm is not registered
        """
        self.validate_format()
        registry = registry if registry is not None else default_registry()
        algorithm = self.algorithm()
        if algorithm not in registry:
            raise UnknownAlgorithmError(
                "Digest uses an unregistered algorithm", algorithm=algorithm
            )

    def validate_strict(self, registry: AlgorithmRegistry | None = None) -> None:
        """
        Full validation, including the algorithm's own length and alphabet.

        Raises:
            MalformedDigestError: If the grammar check fails
            UnknownAlgorithmError: If the algorithm is not registered
            AlgorithmLengthMismatchError: If the encoded segment does not
                match what the algorithm produces
        """
        registry = registry if registry is not None else default_registry()
        self.validate(registry)
        algorithm, encoded = self._split()
        strategy = registry.get(algorithm)
        if not registry.pattern(algorithm).fullmatch(encoded):
            raise AlgorithmLengthMismatchError(
                "Encoded digest does not match algorithm",
                algorithm=algorithm,
                expected_length=len(strategy.encode(bytes(strategy.size_bytes()))),
                actual_length=len(encoded),
            )

    def is_valid(self, registry: AlgorithmRegistry | None = None, strict: bool = True) -> bool:
        """Boolean form of validate()/validate_strict()."""
        try:
            if strict:
                self.validate_strict(registry)
            else:
                self.validate(registry)
        except (MalformedDigestError, UnknownAlgorithmError, AlgorithmLengthMismatchError):
            return False
        return True

    def verifier(self, registry: AlgorithmRegistry | None = None) -> Verifier:
        """Return a Verifier that checks content against this digest."""
        from .verifier import Verifier

        return Verifier(self, registry=registry)
