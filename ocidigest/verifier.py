"""Streaming verification of content against a digest."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .digest import Digest
from .hashing import AlgorithmRegistry, default_registry
from .services.logging import get_logger

if TYPE_CHECKING:
    from .core.interfaces.logger import ILogger


class Verifier:
    """
    Accumulates content and reports whether it matches a digest.

    The digest is validated strictly up front, so an invalid digest is
    rejected before any content is compared against it.
    """

    def __init__(
        self,
        digest: Digest | str,
        registry: AlgorithmRegistry | None = None,
        logger: ILogger | None = None,
    ):
        self._registry = registry if registry is not None else default_registry()
        self._logger = logger
        self.digest = Digest.parse(digest)
        self.digest.validate_strict(self._registry)
        self._strategy = self._registry.get(self.digest.algorithm())
        self._hasher = self._strategy.new_hasher()
        self._result: bool | None = None


    @property
    def _log(self) -> ILogger:
        """The injected logger, else the current process-wide one."""
        return self._logger if self._logger is not None else get_logger()

    def update(self, data: bytes) -> None:
        self._hasher.update(data)

    def write(self, data: bytes) -> int:
        """File-like alias for update()."""
        self.update(data)
        return len(data)

    def verified(self) -> bool:
        """
        Whether the content written so far matches the digest.

        Finalizes the hasher; further writes raise HasherFinalizedError.
        Repeated calls return the same answer.
        """
        if self._result is None:
            encoded = self._strategy.encode(self._hasher.finalize())
            self._result = encoded == self.digest.encoded()
            if not self._result:
                self._log.debug("Content does not match %s", self.digest)
        return self._result
