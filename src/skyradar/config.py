"""Client and scan configuration for skyradar."""

from __future__ import annotations

import dataclasses
import math
import os
from typing import Any

from skyradar import _constants as const
from skyradar._constants import RcsRule
from skyradar.exceptions import RadarConfigError
from skyradar.models.provider import FlightProvider


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class ScanConfig:
    """Where to look and which provider to prefer.

    Parameters
    ----------
    provider : FlightProvider
        Preferred provider. Strings are coerced (``"opensky"``, ``"OPENSKY"``).
    latitude : float
        Origin latitude in degrees, within ±90.
    longitude : float
        Origin longitude in degrees, within ±180.
    range_km : float
        Scan radius in kilometres, strictly positive.
    """

    provider: FlightProvider = FlightProvider.ADSB_LOL
    latitude: float = 0.0
    longitude: float = 0.0
    range_km: float = 50.0

    def __post_init__(self) -> None:
        try:
            provider = FlightProvider(self.provider)
        except ValueError:
            raise RadarConfigError(f"unknown provider: {self.provider!r}") from None
        object.__setattr__(self, "provider", provider)

        for name in ("latitude", "longitude", "range_km"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
                raise RadarConfigError(f"{name} must be a finite number, got {value!r}")
            object.__setattr__(self, name, float(value))

        if not -90.0 <= self.latitude <= 90.0:
            raise RadarConfigError(f"latitude must be between -90 and 90, got {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise RadarConfigError(f"longitude must be between -180 and 180, got {self.longitude}")
        if self.range_km <= 0:
            raise RadarConfigError(f"range_km must be positive, got {self.range_km}")

    def same_area(self, other: ScanConfig) -> bool:
        """Whether *other* covers the same origin and range (provider ignored)."""
        return (
            self.latitude == other.latitude
            and self.longitude == other.longitude
            and self.range_km == other.range_km
        )


@dataclasses.dataclass(frozen=True)
class RadarConfig:
    """Controller configuration.

    Parameters
    ----------
    adsb_lol_url : str
        Base URL of the adsb.lol v2 API.
    airplanes_live_url : str
        Base URL of the airplanes.live v2 API.
    opensky_url : str
        Base URL of the OpenSky Network REST API.
    adsb_lol_timeout, airplanes_live_timeout, opensky_timeout : float
        Per-request timeout in seconds for each provider.
    network_retries : int
        Extra attempts after a connection-level failure (not after HTTP
        error statuses).
    secure_origin : bool
        The consumer runs on a secure origin; plain ``http://`` provider
        URLs are rejected with :class:`~skyradar.exceptions.MixedContentError`.
    user_agent : str
        ``User-Agent`` header sent to providers.
    scan_interval : float
        Delay after a successful scan, in seconds.
    long_range_interval : float
        Delay after a successful scan when ``range_km`` exceeds
        ``long_range_threshold_km``.
    long_range_threshold_km : float
        Range above which the slower cadence applies.
    retry_interval : float
        Delay before retrying the same provider after a failure.
    failover_interval : float
        Delay before the first request to a freshly rotated provider.
    offline_interval : float
        Backoff while the network is unreachable.
    failover_threshold : int
        Consecutive failures that take a provider out of rotation.
    log_capacity : int
        Number of diagnostic events retained by the log channel.
    probe_host, probe_port :
        Address used for the coarse reachability check (route lookup only,
        nothing is sent).
    rcs_rules : tuple of RcsRule
        Ordered type-code prefix table for the radar cross-section estimate.
    default_rcs : float
        Estimate for type codes that match no rule.
    """

    adsb_lol_url: str = const.ADSB_LOL_URL
    airplanes_live_url: str = const.AIRPLANES_LIVE_URL
    opensky_url: str = const.OPENSKY_URL
    adsb_lol_timeout: float = const.ADSB_LOL_TIMEOUT_S
    airplanes_live_timeout: float = const.AIRPLANES_LIVE_TIMEOUT_S
    opensky_timeout: float = const.OPENSKY_TIMEOUT_S
    network_retries: int = 1
    secure_origin: bool = False
    user_agent: str = const.USER_AGENT
    scan_interval: float = const.SCAN_INTERVAL_S
    long_range_interval: float = const.LONG_RANGE_INTERVAL_S
    long_range_threshold_km: float = const.LONG_RANGE_THRESHOLD_KM
    retry_interval: float = const.RETRY_INTERVAL_S
    failover_interval: float = const.FAILOVER_INTERVAL_S
    offline_interval: float = const.OFFLINE_INTERVAL_S
    failover_threshold: int = const.FAILOVER_THRESHOLD
    log_capacity: int = 500
    probe_host: str = "1.1.1.1"
    probe_port: int = 53
    rcs_rules: tuple[RcsRule, ...] = const.DEFAULT_RCS_RULES
    default_rcs: float = const.DEFAULT_RCS

    def __post_init__(self) -> None:
        if self.failover_threshold < 1:
            raise RadarConfigError("failover_threshold must be at least 1")
        if self.network_retries < 0:
            raise RadarConfigError("network_retries must not be negative")
        if self.log_capacity < 1:
            raise RadarConfigError("log_capacity must be at least 1")

    def success_interval(self, range_km: float) -> float:
        """Delay after a successful scan of *range_km*."""
        if range_km > self.long_range_threshold_km:
            return self.long_range_interval
        return self.scan_interval

    @classmethod
    def from_env(cls, **overrides: Any) -> RadarConfig:
        """Create configuration from ``SKYRADAR_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_STR_MAP = {
            "SKYRADAR_ADSB_LOL_URL": "adsb_lol_url",
            "SKYRADAR_AIRPLANES_LIVE_URL": "airplanes_live_url",
            "SKYRADAR_OPENSKY_URL": "opensky_url",
            "SKYRADAR_USER_AGENT": "user_agent",
            "SKYRADAR_PROBE_HOST": "probe_host",
        }
        _ENV_FLOAT_MAP = {
            "SKYRADAR_ADSB_LOL_TIMEOUT": "adsb_lol_timeout",
            "SKYRADAR_AIRPLANES_LIVE_TIMEOUT": "airplanes_live_timeout",
            "SKYRADAR_OPENSKY_TIMEOUT": "opensky_timeout",
            "SKYRADAR_SCAN_INTERVAL": "scan_interval",
            "SKYRADAR_LONG_RANGE_INTERVAL": "long_range_interval",
            "SKYRADAR_RETRY_INTERVAL": "retry_interval",
            "SKYRADAR_FAILOVER_INTERVAL": "failover_interval",
            "SKYRADAR_OFFLINE_INTERVAL": "offline_interval",
        }
        _ENV_INT_MAP = {
            "SKYRADAR_NETWORK_RETRIES": "network_retries",
            "SKYRADAR_FAILOVER_THRESHOLD": "failover_threshold",
            "SKYRADAR_LOG_CAPACITY": "log_capacity",
            "SKYRADAR_PROBE_PORT": "probe_port",
        }

        config_kwargs: dict[str, Any] = {}
        try:
            for env_key, field_name in _ENV_STR_MAP.items():
                val = env.get(env_key)
                if val is not None:
                    config_kwargs[field_name] = val
            for env_key, field_name in _ENV_FLOAT_MAP.items():
                val = env.get(env_key)
                if val is not None:
                    config_kwargs[field_name] = float(val)
            for env_key, field_name in _ENV_INT_MAP.items():
                val = env.get(env_key)
                if val is not None:
                    config_kwargs[field_name] = int(val)
        except ValueError as exc:
            raise RadarConfigError(f"invalid SKYRADAR_* environment value: {exc}") from exc

        if "secure_origin" not in overrides:
            config_kwargs["secure_origin"] = _env_bool(env.get("SKYRADAR_SECURE_ORIGIN"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
