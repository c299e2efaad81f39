"""adsb.lol radial query.

Endpoint: ``/v2/lat/{lat}/lon/{lon}/dist/{nm}``
"""

from __future__ import annotations

from typing import Any

from skyradar.config import RadarConfig, ScanConfig
from skyradar.models.aircraft import AircraftReport
from skyradar.models.provider import FlightProvider
from skyradar.providers._common import parse_readsb_aircraft, radial_range_nm


def build_url(config: RadarConfig, scan: ScanConfig) -> str:
    base = config.adsb_lol_url.rstrip("/")
    nm = radial_range_nm(scan.range_km)
    return f"{base}/lat/{scan.latitude:.4f}/lon/{scan.longitude:.4f}/dist/{nm}"


def parse_response(payload: Any) -> list[AircraftReport]:
    return parse_readsb_aircraft(payload, FlightProvider.ADSB_LOL)


def request_timeout(config: RadarConfig) -> float:
    return config.adsb_lol_timeout
