"""
OCI image layout marker.

The ``oci-layout`` file at the root of an image layout directory holds
only the layout version.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field, ValidationError

from .core.exceptions import ConfigFileError, ConfigValidationError
from .core.models.base import ImmutableModel
from .services.logging import get_logger

IMAGE_LAYOUT_FILE = "oci-layout"
IMAGE_LAYOUT_VERSION = "1.0.0"


class ImageLayout(ImmutableModel):
    """Contents of the ``oci-layout`` file."""

    version: str = Field(default=IMAGE_LAYOUT_VERSION, alias="imageLayoutVersion")

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)


def write_layout_marker(directory: str | os.PathLike) -> Path:
    """Write the ``oci-layout`` marker into directory and return its path."""
    path = Path(directory) / IMAGE_LAYOUT_FILE
    path.write_text(ImageLayout().to_json())
    get_logger().debug("Wrote layout marker %s", path)
    return path


def read_layout_marker(directory: str | os.PathLike) -> ImageLayout:
    """
    Read and check the ``oci-layout`` marker in directory.

    Raises:
        ConfigFileError: If the marker is missing, unreadable or not valid JSON
        ConfigValidationError: If the layout version is not supported
    """
    path = Path(directory) / IMAGE_LAYOUT_FILE
    try:
        raw = path.read_text()
    except OSError as e:
        raise ConfigFileError("Failed to read layout marker", file_path=str(path), cause=e) from e

    try:
        layout = ImageLayout.model_validate_json(raw)
    except ValidationError as e:
        raise ConfigFileError("Invalid layout marker", file_path=str(path), cause=e) from e

    if layout.version != IMAGE_LAYOUT_VERSION:
        raise ConfigValidationError(
            "Unsupported image layout version",
            key="imageLayoutVersion",
            value=layout.version,
        )
    return layout
