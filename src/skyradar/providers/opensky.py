"""OpenSky Network bounding-box query.

Endpoint: ``/api/states/all?lamin=..&lomin=..&lamax=..&lomax=..``

OpenSky answers with positional state vectors::

    [0 icao24, 1 callsign, 2 origin_country, 3 time_position,
     4 last_contact, 5 longitude, 6 latitude, 7 baro_altitude (m),
     8 on_ground, 9 velocity (m/s), 10 true_track, ...]

The anonymous API carries no type code or registration.
"""

from __future__ import annotations

import logging
import math
from typing import Any
from urllib.parse import urlencode

from skyradar._constants import KM_PER_DEGREE, MIN_COS_LAT, OPENSKY_MAX_RANGE_KM
from skyradar.config import RadarConfig, ScanConfig
from skyradar.exceptions import MalformedResponseError
from skyradar.ingestion.normalize import safe_str
from skyradar.models.aircraft import AircraftReport, UnitSystem
from skyradar.models.provider import FlightProvider
from skyradar.providers._common import require_object

_logger = logging.getLogger(__name__)

_IDX_ICAO24 = 0
_IDX_CALLSIGN = 1
_IDX_LONGITUDE = 5
_IDX_LATITUDE = 6
_IDX_BARO_ALTITUDE = 7
_IDX_VELOCITY = 9
_IDX_TRACK = 10
_MIN_STATE_LENGTH = _IDX_TRACK + 1


def bounding_box(latitude: float, longitude: float, range_km: float) -> dict[str, float]:
    """Return ``lamin``/``lomin``/``lamax``/``lomax`` around the origin."""
    clamped = min(range_km, OPENSKY_MAX_RANGE_KM)
    lat_delta = clamped / KM_PER_DEGREE
    cos_lat = math.cos(math.radians(latitude))
    if abs(cos_lat) < MIN_COS_LAT:
        cos_lat = MIN_COS_LAT
    lon_delta = clamped / (KM_PER_DEGREE * cos_lat)
    return {
        "lamin": latitude - lat_delta,
        "lomin": longitude - lon_delta,
        "lamax": latitude + lat_delta,
        "lomax": longitude + lon_delta,
    }


def build_url(config: RadarConfig, scan: ScanConfig) -> str:
    base = config.opensky_url.rstrip("/")
    box = bounding_box(scan.latitude, scan.longitude, scan.range_km)
    query = urlencode({key: f"{value:.4f}" for key, value in box.items()})
    return f"{base}/states/all?{query}"


def _parse_state(state: list[Any]) -> AircraftReport:
    return AircraftReport(
        hex_id=safe_str(state[_IDX_ICAO24]),
        callsign=safe_str(state[_IDX_CALLSIGN]),
        latitude=state[_IDX_LATITUDE],
        longitude=state[_IDX_LONGITUDE],
        altitude=state[_IDX_BARO_ALTITUDE],
        speed=state[_IDX_VELOCITY],
        heading=state[_IDX_TRACK],
        units=UnitSystem.METRIC,
        provider=FlightProvider.OPENSKY,
    )


def parse_response(payload: Any) -> list[AircraftReport]:
    body = require_object(payload, FlightProvider.OPENSKY)
    if "states" not in body:
        raise MalformedResponseError("opensky: response has no 'states' field")
    states = body["states"]
    # OpenSky sends ``"states": null`` for an empty box.
    if states is None:
        return []
    if not isinstance(states, list):
        raise MalformedResponseError("opensky: 'states' is not a list")

    reports: list[AircraftReport] = []
    skipped = 0
    for state in states:
        if not isinstance(state, list) or len(state) < _MIN_STATE_LENGTH:
            skipped += 1
            continue
        reports.append(_parse_state(state))
    if skipped:
        _logger.debug("opensky: skipped %d short or malformed state vectors", skipped)
    return reports


def request_timeout(config: RadarConfig) -> float:
    return config.opensky_timeout
