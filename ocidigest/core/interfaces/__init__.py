"""Abstract interfaces shared across ocidigest."""

from .logger import ILogger

__all__ = ["ILogger"]
