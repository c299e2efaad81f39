"""Radar cross-section estimate from the ICAO type designator."""

from __future__ import annotations

from collections.abc import Iterable

from skyradar._constants import DEFAULT_RCS, DEFAULT_RCS_RULES, RcsRule


def estimate_rcs(
    type_code: str,
    rules: Iterable[RcsRule] = DEFAULT_RCS_RULES,
    default: float = DEFAULT_RCS,
) -> float:
    """Return the RCS (m²) of the first rule whose prefix matches *type_code*."""
    code = type_code.strip().upper()
    if not code:
        return default
    for rule in rules:
        if code.startswith(rule.prefixes):
            return rule.rcs
    return default
