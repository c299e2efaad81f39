"""Provider adapters.

Each adapter builds a request URL from the scan configuration, and parses
the provider's native JSON into :class:`~skyradar.models.AircraftReport`
records. :func:`fetch_reports` ties both ends to a transport.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from skyradar._transport import HttpTransport
from skyradar.config import RadarConfig, ScanConfig
from skyradar.models.aircraft import AircraftReport
from skyradar.models.provider import FlightProvider
from skyradar.providers import adsb_lol, airplanes_live, opensky

_logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProviderAdapter:
    provider: FlightProvider
    display_name: str
    build_url: Callable[[RadarConfig, ScanConfig], str]
    parse_response: Callable[[Any], list[AircraftReport]]
    request_timeout: Callable[[RadarConfig], float]


PROVIDER_ADAPTERS: dict[FlightProvider, ProviderAdapter] = {
    FlightProvider.ADSB_LOL: ProviderAdapter(
        provider=FlightProvider.ADSB_LOL,
        display_name="adsb.lol",
        build_url=adsb_lol.build_url,
        parse_response=adsb_lol.parse_response,
        request_timeout=adsb_lol.request_timeout,
    ),
    FlightProvider.AIRPLANES_LIVE: ProviderAdapter(
        provider=FlightProvider.AIRPLANES_LIVE,
        display_name="airplanes.live",
        build_url=airplanes_live.build_url,
        parse_response=airplanes_live.parse_response,
        request_timeout=airplanes_live.request_timeout,
    ),
    FlightProvider.OPENSKY: ProviderAdapter(
        provider=FlightProvider.OPENSKY,
        display_name="OpenSky Network",
        build_url=opensky.build_url,
        parse_response=opensky.parse_response,
        request_timeout=opensky.request_timeout,
    ),
}


def get_adapter(provider: FlightProvider) -> ProviderAdapter:
    return PROVIDER_ADAPTERS[FlightProvider(provider)]


async def fetch_reports(
    adapter: ProviderAdapter,
    config: RadarConfig,
    scan: ScanConfig,
    transport: HttpTransport,
) -> list[AircraftReport]:
    """Query *adapter*'s provider around *scan* and parse the answer."""
    url = adapter.build_url(config, scan)
    payload = await transport.get_json(url, timeout=adapter.request_timeout(config))
    reports = adapter.parse_response(payload)
    _logger.debug("%s returned %d report(s)", adapter.display_name, len(reports))
    return reports


__all__ = ["PROVIDER_ADAPTERS", "ProviderAdapter", "fetch_reports", "get_adapter"]
