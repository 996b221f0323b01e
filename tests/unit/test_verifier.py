"""
Unit tests for the streaming Verifier.
"""

import pytest

from ocidigest import AlgorithmRegistry, Digest, Verifier
from ocidigest.core.exceptions import (
    AlgorithmLengthMismatchError,
    HasherFinalizedError,
    MalformedDigestError,
    UnknownAlgorithmError,
)

from ..conftest import HELLO_SHA256


class TestVerifier:
    """Tests for Verifier."""

    def test_matching_content(self, registry):
        """Content written in pieces verifies."""
        verifier = Verifier(f"sha256:{HELLO_SHA256}", registry=registry)
        verifier.write(b"hel")
        verifier.update(b"lo")
        assert verifier.verified() is True

    def test_mismatching_content(self, registry):
        """Different content does not verify."""
        verifier = Verifier(f"sha256:{HELLO_SHA256}", registry=registry)
        verifier.write(b"hello!")
        assert verifier.verified() is False

    def test_verified_is_repeatable(self, registry):
        """verified() can be asked more than once."""
        verifier = Verifier(f"sha256:{HELLO_SHA256}", registry=registry)
        verifier.write(b"hello")
        assert verifier.verified() is True
        assert verifier.verified() is True

    def test_write_after_verified_raises(self, registry):
        """The hasher is closed once verified() is called."""
        verifier = Verifier(f"sha256:{HELLO_SHA256}", registry=registry)
        verifier.verified()
        with pytest.raises(HasherFinalizedError):
            verifier.write(b"late")

    def test_write_returns_length(self, registry):
        """write() behaves like a file write."""
        verifier = Verifier(f"sha256:{HELLO_SHA256}", registry=registry)
        assert verifier.write(b"abc") == 3

    def test_rejects_non_strict_digest(self, registry):
        """Digests failing strict validation are refused up front."""
        with pytest.raises(AlgorithmLengthMismatchError):
            Verifier("sha256:abcdefghijklmnopqrstuvwxyz0123456789", registry=registry)

    def test_rejects_unknown_algorithm(self, registry):
        """Unknown algorithms are refused up front."""
        with pytest.raises(UnknownAlgorithmError):
            Verifier(f"md5:{'0' * 32}", registry=registry)

    def test_digest_verifier_helper(self, registry):
        """Digest.verifier() builds a Verifier."""
        verifier = Digest(f"sha256:{HELLO_SHA256}").verifier(registry)
        verifier.write(b"hello")
        assert verifier.verified() is True

    def test_empty_registry_rejects(self):
        """An explicitly empty registry is not replaced by the default one."""
        empty = AlgorithmRegistry(register_defaults=False)
        with pytest.raises(UnknownAlgorithmError):
            Verifier(f"sha256:{HELLO_SHA256}", registry=empty)

    def test_trailing_newline_rejected(self, registry):
        """A digest with a stray newline is never used for comparison."""
        with pytest.raises(MalformedDigestError):
            Verifier(f"sha256:{HELLO_SHA256}\n", registry=registry)
