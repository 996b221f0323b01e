"""
Shared pytest fixtures for ocidigest tests.

- registry: a fresh AlgorithmRegistry with the default algorithms
- computer: a DigestComputer bound to that registry
- blob_file: a small binary file on disk
"""

from pathlib import Path

import pytest

from ocidigest import AlgorithmRegistry, DigestComputer
from ocidigest.services.logging import NullLogger, set_logger

HELLO_SHA256 = "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"
EMPTY_SHA256 = "e3b0c44298fc1c149afbf4c8996fb92427ae41e4649b934ca495991b7852b855"
HELLO_BLAKE3 = "ea8f163db38682925e4491c5e58d4bb3506ef8c14eb78a86e908c5624a67200f"


@pytest.fixture
def registry() -> AlgorithmRegistry:
    """Fresh registry so tests never mutate the process-wide one."""
    return AlgorithmRegistry()


@pytest.fixture
def computer(registry: AlgorithmRegistry) -> DigestComputer:
    return DigestComputer(registry=registry)


@pytest.fixture
def blob_file(tmp_path: Path) -> Path:
    """A 256-byte file holding every byte value once."""
    path = tmp_path / "blob"
    path.write_bytes(bytes(range(256)))
    return path


@pytest.fixture(autouse=True)
def _reset_logger():
    """Restore the process-wide NullLogger after each test."""
    yield
    set_logger(NullLogger())
