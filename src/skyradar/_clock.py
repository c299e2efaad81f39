"""Wall clock and sleep, injectable so the scheduling loop can be driven by tests."""

from __future__ import annotations

import asyncio
import time
from datetime import UTC, datetime
from typing import Protocol


class Clock(Protocol):
    def now(self) -> datetime:
        """Current UTC time, stamped on targets and log events."""
        ...

    def monotonic(self) -> float:
        """Seconds from an arbitrary point, for latency measurement."""
        ...

    async def sleep(self, seconds: float) -> None:
        """Cancellable inter-cycle delay."""
        ...


class SystemClock:
    def now(self) -> datetime:
        return datetime.now(UTC)

    def monotonic(self) -> float:
        return time.monotonic()

    async def sleep(self, seconds: float) -> None:
        await asyncio.sleep(seconds)
