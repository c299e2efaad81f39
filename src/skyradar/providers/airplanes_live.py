"""airplanes.live radial query.

Endpoint: ``/v2/point/{lat}/{lon}/{nm}``; same readsb body as adsb.lol.
"""

from __future__ import annotations

from typing import Any

from skyradar.config import RadarConfig, ScanConfig
from skyradar.models.aircraft import AircraftReport
from skyradar.models.provider import FlightProvider
from skyradar.providers._common import parse_readsb_aircraft, radial_range_nm


def build_url(config: RadarConfig, scan: ScanConfig) -> str:
    base = config.airplanes_live_url.rstrip("/")
    nm = radial_range_nm(scan.range_km)
    return f"{base}/point/{scan.latitude:.4f}/{scan.longitude:.4f}/{nm}"


def parse_response(payload: Any) -> list[AircraftReport]:
    return parse_readsb_aircraft(payload, FlightProvider.AIRPLANES_LIVE)


def request_timeout(config: RadarConfig) -> float:
    return config.airplanes_live_timeout
