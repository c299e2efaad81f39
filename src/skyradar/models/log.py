"""Diagnostic events for the operator-facing log stream."""

from __future__ import annotations

import enum
import logging
from datetime import UTC, datetime

from pydantic import Field, field_validator

from skyradar.models._base import RadarBaseModel


class LogLevel(enum.StrEnum):
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"
    SUCCESS = "SUCCESS"

    @property
    def logging_level(self) -> int:
        """Matching stdlib ``logging`` level."""
        return {
            LogLevel.INFO: logging.INFO,
            LogLevel.SUCCESS: logging.INFO,
            LogLevel.WARN: logging.WARNING,
            LogLevel.ERROR: logging.ERROR,
        }[self]


class LogEvent(RadarBaseModel):
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))
    level: LogLevel
    message: str
    detail: str | None = None

    @field_validator("timestamp")
    @classmethod
    def _ensure_tz_aware(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value
