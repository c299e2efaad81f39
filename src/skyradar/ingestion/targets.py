"""Turn provider reports into snapshot targets."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import datetime

from skyradar._constants import DEFAULT_RCS, DEFAULT_RCS_RULES, RcsRule
from skyradar.config import ScanConfig
from skyradar.ingestion.projection import (
    LocalProjection,
    altitude_meters,
    speed_mps,
    velocity_components,
)
from skyradar.ingestion.rcs import estimate_rcs
from skyradar.models.aircraft import AircraftReport
from skyradar.models.target import GeoPosition, Position, Target, Velocity

_logger = logging.getLogger(__name__)


def build_target(
    report: AircraftReport,
    projection: LocalProjection,
    observed_at: datetime,
    *,
    rules: Iterable[RcsRule] = DEFAULT_RCS_RULES,
    default_rcs: float = DEFAULT_RCS,
) -> Target | None:
    """Project one report; ``None`` when it has no usable position."""
    if not report.has_position:
        return None
    assert report.latitude is not None and report.longitude is not None  # noqa: S101

    x, y = projection.project(report.latitude, report.longitude)
    vx, vy = velocity_components(speed_mps(report.speed, report.units), report.heading)
    type_code = report.type_code.strip().upper()

    return Target(
        id=(report.hex_id.strip() or "UNK").upper(),
        callsign=report.callsign.strip(),
        position=Position(x=x, y=y),
        velocity=Velocity(vx=vx, vy=vy),
        altitude=altitude_meters(report.altitude, report.units),
        rcs=estimate_rcs(type_code, rules, default_rcs),
        classification=type_code or "UNCORRELATED",
        type_code=type_code,
        registration=report.registration.strip(),
        geo=GeoPosition(latitude=report.latitude, longitude=report.longitude, track=report.heading),
        first_seen=observed_at,
        last_seen=observed_at,
    )


def build_targets(
    reports: Iterable[AircraftReport],
    scan: ScanConfig,
    observed_at: datetime,
    *,
    rules: Iterable[RcsRule] = DEFAULT_RCS_RULES,
    default_rcs: float = DEFAULT_RCS,
) -> list[Target]:
    """Project *reports* around the scan origin, keeping provider order."""
    projection = LocalProjection(scan.latitude, scan.longitude)
    rule_table = tuple(rules)
    targets: list[Target] = []
    dropped = 0
    for report in reports:
        target = build_target(report, projection, observed_at, rules=rule_table, default_rcs=default_rcs)
        if target is None:
            dropped += 1
            continue
        targets.append(target)
    if dropped:
        _logger.debug("Dropped %d report(s) without a numeric position", dropped)
    return targets
