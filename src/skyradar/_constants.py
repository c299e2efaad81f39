"""Internal constants shared across the library."""

from __future__ import annotations

from typing import NamedTuple

ADSB_LOL_URL = "https://api.adsb.lol/v2"
AIRPLANES_LIVE_URL = "https://api.airplanes.live/v2"
OPENSKY_URL = "https://opensky-network.org/api"
USER_AGENT = "skyradar/0.1"

# ------------------------------------------------------------------
# Scheduling (seconds)
# ------------------------------------------------------------------

SCAN_INTERVAL_S = 6.0
LONG_RANGE_INTERVAL_S = 15.0
LONG_RANGE_THRESHOLD_KM = 300.0
RETRY_INTERVAL_S = 3.0
FAILOVER_INTERVAL_S = 1.0
OFFLINE_INTERVAL_S = 5.0
FAILOVER_THRESHOLD = 2

# ------------------------------------------------------------------
# Provider request limits
# ------------------------------------------------------------------

RADIAL_MAX_RANGE_NM = 250
OPENSKY_MAX_RANGE_KM = 500.0
ADSB_LOL_TIMEOUT_S = 12.0
AIRPLANES_LIVE_TIMEOUT_S = 12.0
OPENSKY_TIMEOUT_S = 20.0

# ------------------------------------------------------------------
# Units & projection
# ------------------------------------------------------------------

KM_TO_NM = 0.539957
FEET_TO_METERS = 0.3048
KNOTS_TO_MPS = 0.514444
KM_PER_DEGREE = 111.0
METERS_PER_DEGREE_LAT = 110_574.0
METERS_PER_DEGREE_LON = 111_320.0
#: Floor for cos(latitude) near the poles, where the longitude scale collapses.
MIN_COS_LAT = 1e-4

# ------------------------------------------------------------------
# Radar cross-section estimate (m²), keyed by ICAO type-code prefix
# ------------------------------------------------------------------


class RcsRule(NamedTuple):
    """Type-code prefixes that map to one radar cross-section estimate."""

    prefixes: tuple[str, ...]
    rcs: float


#: Ordered rule table; the first rule with a matching prefix wins.
DEFAULT_RCS_RULES: tuple[RcsRule, ...] = (
    RcsRule(("B7", "A3"), 50.0),  # wide-body / airliner
    RcsRule(("C1", "P2"), 2.0),  # light piston
    RcsRule(("F", "M"), 10.0),  # fighter / military
)
DEFAULT_RCS = 5.0
