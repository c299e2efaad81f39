"""Provider identities and the fixed failover sequence."""

from __future__ import annotations

from enum import StrEnum


class FlightProvider(StrEnum):
    ADSB_LOL = "adsb_lol"
    AIRPLANES_LIVE = "airplanes_live"
    OPENSKY = "opensky"

    @classmethod
    def _missing_(cls, value: object) -> FlightProvider | None:
        # Accept "ADSB_LOL", "adsb-lol", " OpenSky " and similar spellings.
        if isinstance(value, str):
            key = value.strip().lower().replace("-", "_")
            for member in cls:
                if member.value == key:
                    return member
        return None


#: Failover order; the controller's provider cursor indexes into this tuple.
PROVIDER_ORDER: tuple[FlightProvider, ...] = (
    FlightProvider.ADSB_LOL,
    FlightProvider.AIRPLANES_LIVE,
    FlightProvider.OPENSKY,
)
