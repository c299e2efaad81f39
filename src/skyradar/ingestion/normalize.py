"""Normalization helpers.

Centralizes defensive parsing of provider payload values.
"""

from __future__ import annotations

import math
from typing import Any


def safe_float(value: Any) -> float | None:
    if value is None or value == "" or isinstance(value, bool):
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(result):
        return None
    return result


def safe_str(value: Any) -> str:
    """Stripped string form of *value*; ``""`` for missing values."""
    if value is None:
        return ""
    return str(value).strip()


def first_present(data: dict[str, Any], *keys: str) -> Any:
    """Value of the first key in *keys* that is present and not ``None``."""
    for key in keys:
        value = data.get(key)
        if value is not None:
            return value
    return None
