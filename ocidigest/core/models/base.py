"""
Base Pydantic models for ocidigest.

Config sections build on DigestBaseModel; on-disk records such as the
layout marker build on ImmutableModel.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class DigestBaseModel(BaseModel):
    """Base model for all ocidigest Pydantic models.

    Unknown fields are rejected and fields may be filled by name or alias.
    """

    model_config = ConfigDict(
        extra="forbid",
        populate_by_name=True,
    )


class ImmutableModel(DigestBaseModel):
    """Frozen model for records read from or written to disk."""

    model_config = ConfigDict(
        frozen=True,
        strict=True,
        extra="forbid",
        populate_by_name=True,
    )
