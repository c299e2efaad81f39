from __future__ import annotations

from typing import Any
from urllib.parse import parse_qs, urlparse

import pytest

from skyradar.config import RadarConfig, ScanConfig
from skyradar.exceptions import MalformedResponseError
from skyradar.models.aircraft import UnitSystem
from skyradar.models.provider import FlightProvider
from skyradar.providers import PROVIDER_ADAPTERS, fetch_reports, get_adapter
from skyradar.providers import adsb_lol, airplanes_live, opensky
from skyradar.providers._common import radial_range_nm

_READSB_BODY: dict[str, Any] = {
    "ac": [
        {
            "hex": "4ca1fa",
            "flight": "EIN123  ",
            "lat": 51.5,
            "lon": -0.1,
            "alt_baro": 35000,
            "gs": 450.2,
            "track": 271.4,
            "t": "A320",
            "r": "EI-DEI",
        },
        {"hex": "406b5c", "lat": 51.4, "lon": -0.2, "alt_baro": "ground", "gs": 3},
        "garbage",
    ],
    "total": 2,
}

_OPENSKY_BODY: dict[str, Any] = {
    "time": 1_770_000_000,
    "states": [
        ["3c6444", "DLH9U   ", "Germany", 1, 2, 8.5, 50.1, 3000.0, False, 120.0, 45.0, 0, None, 3100, "1000"],
        ["short", "row"],
    ],
}


def test_registry_covers_every_provider() -> None:
    assert set(PROVIDER_ADAPTERS) == set(FlightProvider)
    assert get_adapter("OPENSKY").provider is FlightProvider.OPENSKY  # type: ignore[arg-type]


@pytest.mark.parametrize(
    ("range_km", "expected"),
    [(0.5, 1), (50, 27), (100, 54), (463, 250), (2000, 250)],
)
def test_radial_range_is_clamped(range_km: float, expected: int) -> None:
    assert radial_range_nm(range_km) == expected


def test_adsb_lol_url() -> None:
    scan = ScanConfig(latitude=51.47123, longitude=-0.45, range_km=50)

    url = adsb_lol.build_url(RadarConfig(), scan)

    assert url == "https://api.adsb.lol/v2/lat/51.4712/lon/-0.4500/dist/27"


def test_airplanes_live_url_respects_base_override() -> None:
    config = RadarConfig(airplanes_live_url="http://localhost:8080/v2/")
    scan = ScanConfig(latitude=10, longitude=20, range_km=1000)

    url = airplanes_live.build_url(config, scan)

    assert url == "http://localhost:8080/v2/point/10.0000/20.0000/250"


def test_opensky_bounding_box_corrects_longitude_for_latitude() -> None:
    box = opensky.bounding_box(60.0, 10.0, 111.0)

    assert box["lamin"] == pytest.approx(59.0)
    assert box["lamax"] == pytest.approx(61.0)
    assert box["lomin"] == pytest.approx(8.0)
    assert box["lomax"] == pytest.approx(12.0)


def test_opensky_bounding_box_clamps_range() -> None:
    box = opensky.bounding_box(0.0, 0.0, 5000.0)

    assert box["lamax"] == pytest.approx(500.0 / 111.0)


def test_opensky_bounding_box_stays_finite_at_pole() -> None:
    box = opensky.bounding_box(90.0, 0.0, 100.0)

    assert box["lomax"] < float("inf")


def test_opensky_url_query() -> None:
    url = opensky.build_url(RadarConfig(), ScanConfig(latitude=50.0, longitude=8.0, range_km=111))

    parsed = urlparse(url)
    query = parse_qs(parsed.query)
    assert parsed.path == "/api/states/all"
    assert query["lamin"] == ["49.0000"]
    assert query["lamax"] == ["51.0000"]
    assert set(query) == {"lamin", "lomin", "lamax", "lomax"}


def test_readsb_parse_maps_fields_and_skips_non_objects() -> None:
    reports = adsb_lol.parse_response(_READSB_BODY)

    assert len(reports) == 2
    first, second = reports
    assert first.hex_id == "4ca1fa"
    assert first.callsign == "EIN123"
    assert first.altitude == 35000
    assert first.speed == 450.2
    assert first.heading == 271.4
    assert first.type_code == "A320"
    assert first.registration == "EI-DEI"
    assert first.units is UnitSystem.IMPERIAL
    assert first.provider is FlightProvider.ADSB_LOL
    assert second.altitude == 0.0
    assert second.type_code == ""


def test_airplanes_live_tags_its_provider() -> None:
    reports = airplanes_live.parse_response(_READSB_BODY)

    assert {r.provider for r in reports} == {FlightProvider.AIRPLANES_LIVE}


def test_readsb_null_list_is_empty() -> None:
    assert adsb_lol.parse_response({"ac": None}) == []


@pytest.mark.parametrize("payload", [[], "text", {"msg": "no ac"}, {"ac": {"hex": "x"}}])
def test_readsb_malformed_payloads(payload: Any) -> None:
    with pytest.raises(MalformedResponseError):
        adsb_lol.parse_response(payload)


def test_opensky_parse_uses_positional_fields() -> None:
    reports = opensky.parse_response(_OPENSKY_BODY)

    assert len(reports) == 1
    (report,) = reports
    assert report.hex_id == "3c6444"
    assert report.callsign == "DLH9U"
    assert report.longitude == 8.5
    assert report.latitude == 50.1
    assert report.altitude == 3000.0
    assert report.speed == 120.0
    assert report.heading == 45.0
    assert report.units is UnitSystem.METRIC
    assert report.type_code == ""


def test_opensky_null_states_is_empty() -> None:
    assert opensky.parse_response({"time": 1, "states": None}) == []


@pytest.mark.parametrize("payload", [None, {"time": 1}, {"states": "nope"}])
def test_opensky_malformed_payloads(payload: Any) -> None:
    with pytest.raises(MalformedResponseError):
        opensky.parse_response(payload)


class _RecordingTransport:
    def __init__(self, payload: Any) -> None:
        self.payload = payload
        self.calls: list[tuple[str, float]] = []

    async def get_json(self, url: str, *, timeout: float) -> Any:
        self.calls.append((url, timeout))
        return self.payload


@pytest.mark.asyncio
async def test_fetch_reports_uses_provider_timeout() -> None:
    transport = _RecordingTransport(_OPENSKY_BODY)
    config = RadarConfig(opensky_timeout=7.5)
    scan = ScanConfig(latitude=50.0, longitude=8.0, range_km=100)

    reports = await fetch_reports(get_adapter(FlightProvider.OPENSKY), config, scan, transport)

    assert len(reports) == 1
    ((url, timeout),) = transport.calls
    assert url.startswith("https://opensky-network.org/api/states/all?")
    assert timeout == 7.5
