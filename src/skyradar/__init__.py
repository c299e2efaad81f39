"""skyradar - Async polling aggregator for live aircraft positions."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("skyradar")
except PackageNotFoundError:
    __version__ = "0+local"
from skyradar._clock import Clock, SystemClock
from skyradar._constants import RcsRule
from skyradar._probe import ReachabilityProbe, RouteReachabilityProbe
from skyradar._transport import AiohttpTransport, HttpTransport
from skyradar.config import RadarConfig, ScanConfig
from skyradar.controller import RadarController
from skyradar.exceptions import (
    MalformedResponseError,
    MixedContentError,
    RadarConfigError,
    RadarError,
    RadarTransportError,
    UnreachableError,
)
from skyradar.models import (
    PROVIDER_ORDER,
    AircraftReport,
    FlightProvider,
    GeoPosition,
    LogEvent,
    LogLevel,
    MachineState,
    Position,
    Snapshot,
    Target,
    TargetStatus,
    UnitSystem,
    Velocity,
)
from skyradar.sinks import LogChannel, SnapshotChannel

__all__ = [
    "__version__",
    "AiohttpTransport",
    "AircraftReport",
    "Clock",
    "FlightProvider",
    "GeoPosition",
    "HttpTransport",
    "LogChannel",
    "LogEvent",
    "LogLevel",
    "MachineState",
    "MalformedResponseError",
    "MixedContentError",
    "PROVIDER_ORDER",
    "Position",
    "RadarConfig",
    "RadarConfigError",
    "RadarController",
    "RadarError",
    "RadarTransportError",
    "RcsRule",
    "ReachabilityProbe",
    "RouteReachabilityProbe",
    "ScanConfig",
    "Snapshot",
    "SnapshotChannel",
    "SystemClock",
    "Target",
    "TargetStatus",
    "UnitSystem",
    "UnreachableError",
    "Velocity",
]
