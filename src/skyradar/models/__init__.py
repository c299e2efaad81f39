"""Typed models for provider reports, targets, snapshots and log events."""

from skyradar.models.aircraft import AircraftReport, UnitSystem
from skyradar.models.log import LogEvent, LogLevel
from skyradar.models.provider import PROVIDER_ORDER, FlightProvider
from skyradar.models.snapshot import MachineState, Snapshot
from skyradar.models.target import GeoPosition, Position, Target, TargetStatus, Velocity

__all__ = [
    "AircraftReport",
    "FlightProvider",
    "GeoPosition",
    "LogEvent",
    "LogLevel",
    "MachineState",
    "PROVIDER_ORDER",
    "Position",
    "Snapshot",
    "Target",
    "TargetStatus",
    "UnitSystem",
    "Velocity",
]
