"""
Hash algorithm strategies and registry.

New algorithms are added by registering a strategy, without touching the
code that computes or validates digests.
"""

from .registry import AlgorithmRegistry, default_registry
from .strategies import (
    Blake3Strategy,
    HashlibStrategy,
    HashStrategy,
    SHA256Strategy,
    SHA384Strategy,
    SHA512Strategy,
    StreamingHasher,
)

__all__ = [
    "AlgorithmRegistry",
    "Blake3Strategy",
    "HashStrategy",
    "HashlibStrategy",
    "SHA256Strategy",
    "SHA384Strategy",
    "SHA512Strategy",
    "StreamingHasher",
    "default_registry",
]
