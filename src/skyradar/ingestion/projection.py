"""Flat-earth projection around a local origin.

Equirectangular approximation; good to well under a metre of round-trip
error at the ranges the providers serve (a few hundred kilometres).
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from skyradar._constants import (
    FEET_TO_METERS,
    KNOTS_TO_MPS,
    METERS_PER_DEGREE_LAT,
    METERS_PER_DEGREE_LON,
    MIN_COS_LAT,
)
from skyradar.models.aircraft import UnitSystem


@dataclass(frozen=True, slots=True)
class LocalProjection:
    """Project geodetic coordinates onto metres east (x) / north (y) of an origin."""

    origin_latitude: float
    origin_longitude: float

    @property
    def _meters_per_degree_lon(self) -> float:
        return METERS_PER_DEGREE_LON * math.cos(math.radians(self.origin_latitude))

    def project(self, latitude: float, longitude: float) -> tuple[float, float]:
        """Return ``(x, y)`` in metres."""
        y = (latitude - self.origin_latitude) * METERS_PER_DEGREE_LAT
        x = (longitude - self.origin_longitude) * self._meters_per_degree_lon
        return x, y

    def unproject(self, x: float, y: float) -> tuple[float, float]:
        """Inverse of :meth:`project`; returns ``(latitude, longitude)``.

        Undefined near the poles, where the longitude scale collapses.
        """
        scale = self._meters_per_degree_lon
        if abs(scale) < METERS_PER_DEGREE_LON * MIN_COS_LAT:
            raise ValueError("cannot unproject around a polar origin")
        latitude = self.origin_latitude + y / METERS_PER_DEGREE_LAT
        longitude = self.origin_longitude + x / scale
        return latitude, longitude


def velocity_components(speed: float, heading_deg: float) -> tuple[float, float]:
    """Split a speed along a heading (clockwise from north) into ``(vx, vy)``."""
    heading = math.radians(heading_deg)
    return speed * math.sin(heading), speed * math.cos(heading)


def altitude_meters(altitude: float, units: UnitSystem) -> float:
    if units is UnitSystem.IMPERIAL:
        return altitude * FEET_TO_METERS
    return altitude


def speed_mps(speed: float, units: UnitSystem) -> float:
    if units is UnitSystem.IMPERIAL:
        return speed * KNOTS_TO_MPS
    return speed
