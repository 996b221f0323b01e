"""
Logger implementation for ocidigest internal diagnostics.

Wraps stdlib logging with configurable handlers for console (stderr) and file.
The process-wide logger is a NullLogger until configure_logging() is called.
"""

from __future__ import annotations

import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import TYPE_CHECKING, Any, ClassVar

from ..core.interfaces.logger import ILogger

if TYPE_CHECKING:
    from ..core.models.config import LoggingConfig


class DigestLogger(ILogger):
    """
    Logger implementation using stdlib logging.

    Supports dual output to stderr and a rotating log file.
    """

    DEFAULT_LOG_FILE_PATH = Path.home() / ".ocidigest" / "ocidigest.log"
    MAX_FILE_SIZE = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 3

    LEVEL_MAP: ClassVar[dict[str, int]] = {
        "debug": logging.DEBUG,
        "info": logging.INFO,
        "warning": logging.WARNING,
        "error": logging.ERROR,
    }

    def __init__(
        self,
        name: str = "ocidigest",
        level: str = "warning",
        console_enabled: bool = False,
        file_enabled: bool = False,
        file_path: Path | None = None,
    ) -> None:
        """
        Initialize logger.

        Args:
            name: Logger name
            level: Initial log level (debug, info, warning, error)
            console_enabled: Enable stderr output
            file_enabled: Enable file output
            file_path: Log file location (defaults to ~/.ocidigest/ocidigest.log)
        """
        self._logger = logging.getLogger(name)
        self._logger.setLevel(logging.DEBUG)  # Let handlers filter
        self._logger.handlers.clear()
        self._logger.propagate = False

        self._console_handler: logging.Handler | None = None
        self._file_handler: logging.Handler | None = None
        self.file_path = file_path or self.DEFAULT_LOG_FILE_PATH

        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

        log_level = self.LEVEL_MAP.get(level.lower(), logging.WARNING)

        if console_enabled:
            console = logging.StreamHandler(sys.stderr)
            console.setLevel(log_level)
            console.setFormatter(formatter)
            self._logger.addHandler(console)
            self._console_handler = console

        if file_enabled:
            self._setup_file_handler(formatter, log_level)

    @classmethod
    def from_config(cls, config: LoggingConfig) -> DigestLogger:
        """Build a logger from the logging section of the settings."""
        return cls(
            level=config.level,
            console_enabled=config.console,
            file_enabled=config.file,
            file_path=Path(config.file_path).expanduser() if config.file_path else None,
        )

    def _setup_file_handler(self, formatter: logging.Formatter, level: int) -> None:
        """Set up rotating file handler."""
        self.file_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            self.file_path,
            maxBytes=self.MAX_FILE_SIZE,
            backupCount=self.BACKUP_COUNT,
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        self._logger.addHandler(file_handler)
        self._file_handler = file_handler

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a debug-level message."""
        self._logger.debug(message, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an info-level message."""
        self._logger.info(message, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log a warning-level message."""
        self._logger.warning(message, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log an error-level message."""
        self._logger.error(message, *args, **kwargs)

    def set_level(self, level: str) -> None:
        """Set log level for all handlers."""
        lvl = self.LEVEL_MAP.get(level.lower(), logging.WARNING)
        if self._console_handler:
            self._console_handler.setLevel(lvl)
        if self._file_handler:
            self._file_handler.setLevel(lvl)

    def close(self) -> None:
        """Detach and close the handlers this logger installed."""
        for handler in (self._console_handler, self._file_handler):
            if handler is not None:
                self._logger.removeHandler(handler)
                handler.close()
        self._console_handler = None
        self._file_handler = None


class NullLogger(ILogger):
    """No-op logger for testing or when logging is disabled."""

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """No-op."""
        pass

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """No-op."""
        pass

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """No-op."""
        pass

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """No-op."""
        pass

    def set_level(self, level: str) -> None:
        """No-op."""
        pass


_logger: ILogger = NullLogger()
_logger_lock = threading.Lock()


def get_logger() -> ILogger:
    """Return the process-wide logger."""
    return _logger


def set_logger(logger: ILogger) -> ILogger:
    """
    Install a process-wide logger.

    Returns:
        The previously installed logger
    """
    global _logger
    with _logger_lock:
        previous = _logger
        _logger = logger
    if isinstance(previous, DigestLogger):
        previous.close()
    return previous


def configure_logging(config: LoggingConfig) -> ILogger:
    """Build a DigestLogger from config and install it process-wide."""
    logger = DigestLogger.from_config(config)
    set_logger(logger)
    return logger
