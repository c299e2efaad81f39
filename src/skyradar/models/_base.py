"""Base model shared by skyradar's pydantic models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class RadarBaseModel(BaseModel):
    """Immutable model; once emitted to a consumer it is never mutated."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
    )
