"""Provider-neutral aircraft report, the adapter output."""

from __future__ import annotations

import enum

from pydantic import Field, field_validator

from skyradar.ingestion.normalize import safe_float
from skyradar.models._base import RadarBaseModel
from skyradar.models.provider import FlightProvider


class UnitSystem(enum.StrEnum):
    """Native units of a report's altitude and speed."""

    IMPERIAL = "imperial"  # feet, knots
    METRIC = "metric"  # metres, m/s


class AircraftReport(RadarBaseModel):
    """One aircraft as reported by a provider, before projection.

    Parameters
    ----------
    hex_id : str
        ICAO 24-bit address (or provider identifier).
    callsign : str
        Flight callsign, stripped.
    latitude, longitude : float or None
        Geodetic position; ``None`` when the provider sent a non-numeric
        value. Such reports are dropped by the normalizer.
    altitude : float
        Barometric altitude in ``units``.
    speed : float
        Ground speed in ``units``.
    heading : float
        Track in degrees clockwise from true north.
    type_code : str
        ICAO aircraft type designator, e.g. ``B738``.
    registration : str
        Tail number.
    units : UnitSystem
        Whether altitude/speed are feet/knots or metres/(m/s).
    provider : FlightProvider
        Source of the report.
    """

    hex_id: str = ""
    callsign: str = ""
    latitude: float | None = None
    longitude: float | None = None
    altitude: float = 0.0
    speed: float = 0.0
    heading: float = 0.0
    type_code: str = ""
    registration: str = ""
    units: UnitSystem = UnitSystem.METRIC
    provider: FlightProvider = Field(...)

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def _coerce_coordinate(cls, value: object) -> float | None:
        return safe_float(value)

    @field_validator("altitude", "speed", "heading", mode="before")
    @classmethod
    def _coerce_zero(cls, value: object) -> float:
        parsed = safe_float(value)
        return 0.0 if parsed is None else parsed

    @property
    def has_position(self) -> bool:
        return self.latitude is not None and self.longitude is not None
