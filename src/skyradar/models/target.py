"""Normalized radar target."""

from __future__ import annotations

import enum
from datetime import datetime

from skyradar.models._base import RadarBaseModel


class TargetStatus(enum.StrEnum):
    UNKNOWN = "unknown"
    FRIENDLY = "friendly"
    HOSTILE = "hostile"
    NEUTRAL = "neutral"


class Position(RadarBaseModel):
    """Local Cartesian position in metres; +x east, +y north."""

    x: float
    y: float


class Velocity(RadarBaseModel):
    """Velocity in m/s along the local Cartesian axes."""

    vx: float
    vy: float


class GeoPosition(RadarBaseModel):
    latitude: float
    longitude: float
    track: float


class Target(RadarBaseModel):
    """A single aircraft in one snapshot.

    Targets are rebuilt on every scan; ``first_seen`` and ``last_seen`` are
    both the observation time of that scan.
    """

    id: str
    callsign: str = ""
    position: Position
    velocity: Velocity
    altitude: float
    rcs: float
    status: TargetStatus = TargetStatus.NEUTRAL
    classification: str = "UNCORRELATED"
    type_code: str = ""
    registration: str = ""
    geo: GeoPosition
    first_seen: datetime
    last_seen: datetime
