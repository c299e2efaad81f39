"""Shared helpers for provider adapter modules.

It is internal to skyradar and may change at any time.
"""

from __future__ import annotations

import logging
import math
from typing import Any

from skyradar._constants import KM_TO_NM, RADIAL_MAX_RANGE_NM
from skyradar.exceptions import MalformedResponseError
from skyradar.ingestion.normalize import first_present, safe_str
from skyradar.models.aircraft import AircraftReport, UnitSystem
from skyradar.models.provider import FlightProvider

_logger = logging.getLogger(__name__)


def radial_range_nm(range_km: float, max_nm: int = RADIAL_MAX_RANGE_NM) -> int:
    """Whole nautical miles for a radial query, clamped to ``[1, max_nm]``."""
    return max(1, min(math.ceil(range_km * KM_TO_NM), max_nm))


def require_object(payload: Any, provider: FlightProvider) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise MalformedResponseError(
            f"{provider.value}: expected a JSON object, got {type(payload).__name__}",
        )
    return payload


def parse_readsb_aircraft(payload: Any, provider: FlightProvider) -> list[AircraftReport]:
    """Parse the readsb-style ``{"ac": [...]}`` body shared by radial providers.

    Altitudes are feet and speeds knots. ``alt_baro`` may be the string
    ``"ground"``, which coerces to 0.
    """
    body = require_object(payload, provider)
    if "ac" not in body:
        raise MalformedResponseError(f"{provider.value}: response has no 'ac' field")
    aircraft = body["ac"]
    if aircraft is None:
        return []
    if not isinstance(aircraft, list):
        raise MalformedResponseError(f"{provider.value}: 'ac' is not a list")

    reports: list[AircraftReport] = []
    skipped = 0
    for ac in aircraft:
        if not isinstance(ac, dict):
            skipped += 1
            continue
        reports.append(
            AircraftReport(
                hex_id=safe_str(first_present(ac, "hex", "id")),
                callsign=safe_str(first_present(ac, "flight", "callsign")),
                latitude=ac.get("lat"),
                longitude=ac.get("lon"),
                altitude=ac.get("alt_baro"),
                speed=ac.get("gs"),
                heading=ac.get("track"),
                type_code=safe_str(ac.get("t")),
                registration=safe_str(ac.get("r")),
                units=UnitSystem.IMPERIAL,
                provider=provider,
            )
        )
    if skipped:
        _logger.debug("%s: skipped %d non-object aircraft entries", provider.value, skipped)
    return reports
