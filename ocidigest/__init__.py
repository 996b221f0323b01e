"""
ocidigest - content-addressable digests for OCI blobs.

Computes and validates ``algorithm:encoded`` digests over bytes, text,
streams and files, with a registry of pluggable hash algorithms.
"""

from .computer import DEFAULT_CHUNK_SIZE, DigestComputer
from .core.exceptions import (
    AlgorithmLengthMismatchError,
    DigestError,
    DigestIOError,
    DigestMismatchError,
    HasherFinalizedError,
    MalformedDigestError,
    UnknownAlgorithmError,
)
from .digest import BLAKE3, CANONICAL, DIGEST_PATTERN, SHA256, SHA384, SHA512, Digest
from .hashing import AlgorithmRegistry, HashStrategy, StreamingHasher, default_registry
from .verifier import Verifier

__version__ = "0.1.0"

__all__ = [
    "BLAKE3",
    "CANONICAL",
    "DEFAULT_CHUNK_SIZE",
    "DIGEST_PATTERN",
    "SHA256",
    "SHA384",
    "SHA512",
    "AlgorithmLengthMismatchError",
    "AlgorithmRegistry",
    "Digest",
    "DigestComputer",
    "DigestError",
    "DigestIOError",
    "DigestMismatchError",
    "HashStrategy",
    "HasherFinalizedError",
    "MalformedDigestError",
    "StreamingHasher",
    "UnknownAlgorithmError",
    "Verifier",
    "default_registry",
]
