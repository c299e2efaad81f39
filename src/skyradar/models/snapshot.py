"""Controller state and emitted snapshots."""

from __future__ import annotations

import enum

from pydantic import Field

from skyradar.models._base import RadarBaseModel
from skyradar.models.provider import FlightProvider
from skyradar.models.target import Target


class MachineState(enum.StrEnum):
    """Controller state machine.

    ``RECOVERY`` is reserved: it is part of the public vocabulary but the
    controller never enters it.
    """

    IDLE = "idle"
    SCANNING = "scanning"
    RECOVERY = "recovery"
    FAULT = "fault"


class Snapshot(RadarBaseModel):
    """One ordered batch of targets from a single scan."""

    targets: tuple[Target, ...] = Field(default_factory=tuple)
    state: MachineState
    provider: FlightProvider
    session: int = Field(..., description="Session token the scan ran under")
