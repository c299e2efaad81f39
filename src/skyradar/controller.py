"""Polling controller: state machine, session invalidation and failover."""

from __future__ import annotations

import asyncio
import contextlib
import logging
from dataclasses import dataclass, field
from typing import Any

import aiohttp

from skyradar._clock import Clock, SystemClock
from skyradar._probe import ReachabilityProbe, RouteReachabilityProbe
from skyradar._transport import AiohttpTransport, HttpTransport
from skyradar.config import RadarConfig, ScanConfig
from skyradar.exceptions import MixedContentError, RadarError, UnreachableError
from skyradar.ingestion.targets import build_targets
from skyradar.models.log import LogEvent, LogLevel
from skyradar.models.provider import PROVIDER_ORDER, FlightProvider
from skyradar.models.snapshot import MachineState, Snapshot
from skyradar.providers import ProviderAdapter, fetch_reports, get_adapter
from skyradar.sinks import LogChannel, SnapshotChannel

_logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _ControllerState:
    """Everything the scanning loop mutates, in one place.

    Only ``start``, ``stop``, ``set_config`` and the loop itself touch it,
    all on the event loop thread.
    """

    scan: ScanConfig = field(default_factory=ScanConfig)
    machine: MachineState = MachineState.IDLE
    session: int = 0
    cursor: int = 0
    failures: int = 0
    task: asyncio.Task[None] | None = None


class RadarController:
    """Poll the active provider and publish normalized snapshots.

    Usage::

        async with RadarController(RadarConfig()) as radar:
            radar.set_config("adsb_lol", 51.47, -0.45, 80)
            radar.start()
            snapshot = await radar.snapshots.get()

    ``start``, ``stop`` and ``set_config`` are synchronous and must be
    called on the event loop thread. At most one loop task exists at a
    time; a position or range change bumps the session token and restarts
    the loop, and results carrying an older token are dropped.
    """

    def __init__(
        self,
        config: RadarConfig | None = None,
        *,
        transport: HttpTransport | None = None,
        http_session: aiohttp.ClientSession | None = None,
        clock: Clock | None = None,
        probe: ReachabilityProbe | None = None,
        snapshots: SnapshotChannel | None = None,
        logs: LogChannel | None = None,
    ) -> None:
        self._config = config or RadarConfig()
        self._http_session = http_session
        self._transport = transport
        if transport is None and http_session is not None:
            self._transport = AiohttpTransport(self._config, http_session)
        self._owns_session = False
        self._clock: Clock = clock or SystemClock()
        self._probe: ReachabilityProbe = probe or RouteReachabilityProbe(
            self._config.probe_host,
            self._config.probe_port,
        )
        self._snapshots = snapshots or SnapshotChannel()
        self._logs = logs or LogChannel(self._config.log_capacity)
        self._state = _ControllerState()
        self._log(LogLevel.INFO, "Radar controller initialized", "Standby, ready to scan.")

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> RadarController:
        if self._transport is None:
            self._http_session = aiohttp.ClientSession()
            self._owns_session = True
            self._transport = AiohttpTransport(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        task = self._state.task
        self.stop()
        if task is not None:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if self._owns_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
            self._transport = None
            self._owns_session = False

    # ------------------------------------------------------------------
    # Read-only view
    # ------------------------------------------------------------------

    @property
    def config(self) -> RadarConfig:
        return self._config

    @property
    def state(self) -> MachineState:
        return self._state.machine

    @property
    def session(self) -> int:
        return self._state.session

    @property
    def provider(self) -> FlightProvider:
        """Provider the next fetch will use."""
        return PROVIDER_ORDER[self._state.cursor]

    @property
    def failures(self) -> int:
        return self._state.failures

    @property
    def scan(self) -> ScanConfig:
        return self._state.scan

    @property
    def snapshots(self) -> SnapshotChannel:
        return self._snapshots

    @property
    def logs(self) -> LogChannel:
        return self._logs

    @property
    def is_running(self) -> bool:
        task = self._state.task
        return task is not None and not task.done()

    # ------------------------------------------------------------------
    # Control
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Begin scanning. No-op while already ``SCANNING``."""
        state = self._state
        if state.machine is MachineState.SCANNING:
            return
        loop = self._require_loop()
        self._require_transport()
        self._log(LogLevel.INFO, "Start sequence initiated", f"Primary provider: {self.provider.value}")
        self._cancel_task()
        state.failures = 0
        state.machine = MachineState.SCANNING
        self._spawn(loop)

    def stop(self) -> None:
        """Halt scanning, cancelling any pending delay or in-flight request."""
        state = self._state
        if state.machine is MachineState.IDLE:
            return
        self._log(LogLevel.INFO, "Shutdown sequence", "Disengaging sensors.")
        state.machine = MachineState.IDLE
        self._cancel_task()

    def set_config(
        self,
        provider: FlightProvider | str,
        latitude: float,
        longitude: float,
        range_km: float,
    ) -> None:
        """Apply a new preferred provider, origin and range.

        An unrecognised provider keeps the current cursor and logs a
        warning; the origin and range are still applied. Raises
        :class:`~skyradar.exceptions.RadarConfigError` on an invalid origin
        or range, before anything is changed. Only an origin or range change
        invalidates the session; a provider-only change takes effect on the
        next fetch.
        """
        state = self._state
        try:
            resolved = FlightProvider(provider)
        except ValueError:
            resolved = None
        new_scan = ScanConfig(
            provider=resolved if resolved is not None else self.provider,
            latitude=latitude,
            longitude=longitude,
            range_km=range_km,
        )

        if resolved is None:
            self._log(
                LogLevel.WARN,
                "Unknown provider ignored",
                f"{provider!r} is not a known provider; keeping {self.provider.value}.",
            )
        else:
            cursor = PROVIDER_ORDER.index(resolved)
            if cursor != state.cursor:
                state.cursor = cursor
                state.failures = 0

        area_changed = not new_scan.same_area(state.scan)
        state.scan = new_scan
        if not area_changed:
            return

        self._log(
            LogLevel.INFO,
            "Configuration updated",
            f"Target zone: {new_scan.latitude:.4f}, {new_scan.longitude:.4f} | Range: {new_scan.range_km:g} km",
        )
        state.session += 1
        if state.machine is not MachineState.IDLE:
            self._cancel_task()
            self._spawn(self._require_loop())

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _require_loop(self) -> asyncio.AbstractEventLoop:
        try:
            return asyncio.get_running_loop()
        except RuntimeError as exc:
            raise RadarError("RadarController must be driven from a running event loop") from exc

    def _require_transport(self) -> HttpTransport:
        if self._transport is None:
            raise RadarError("Controller not initialized. Use 'async with RadarController(...) as radar:'")
        return self._transport

    def _spawn(self, loop: asyncio.AbstractEventLoop) -> None:
        session = self._state.session
        task = loop.create_task(self._run(session), name=f"skyradar-scan-{session}")
        task.add_done_callback(self._on_task_done)
        self._state.task = task

    def _cancel_task(self) -> None:
        task = self._state.task
        self._state.task = None
        if task is not None and not task.done():
            task.cancel()

    def _on_task_done(self, task: asyncio.Task[None]) -> None:
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            _logger.error("Scan loop crashed", exc_info=exc)

    def _is_current(self, session: int) -> bool:
        return session == self._state.session and self._state.machine is not MachineState.IDLE

    def _log(self, level: LogLevel, message: str, detail: str | None = None) -> None:
        event = LogEvent(timestamp=self._clock.now(), level=level, message=message, detail=detail)
        if detail:
            _logger.log(level.logging_level, "%s: %s", message, detail)
        else:
            _logger.log(level.logging_level, "%s", message)
        self._logs.publish(event)

    # ------------------------------------------------------------------
    # Scanning loop
    # ------------------------------------------------------------------

    async def _run(self, session: int) -> None:
        while True:
            delay = await self._scan_once(session)
            if delay is None or not self._is_current(session):
                return
            await self._clock.sleep(delay)

    async def _scan_once(self, session: int) -> float | None:
        """Run one iteration under *session*; return the delay before the next.

        ``None`` means the session went stale and this loop must end.
        ``asyncio.CancelledError`` is deliberately not caught.
        """
        if not self._is_current(session):
            return None
        state = self._state

        reachable = await self._probe.is_reachable()
        if not self._is_current(session):
            return None
        if not reachable:
            return self._enter_fault("No route to the internet.")

        # FAULT covers only cycles that never reach a fetch.
        state.machine = MachineState.SCANNING
        adapter = get_adapter(self.provider)
        scan = state.scan
        transport = self._require_transport()
        self._log(LogLevel.INFO, "Uplinking", f"GET {adapter.build_url(self._config, scan)}")

        started = self._clock.monotonic()
        try:
            reports = await fetch_reports(adapter, self._config, scan, transport)
            targets = build_targets(
                reports,
                scan,
                self._clock.now(),
                rules=self._config.rcs_rules,
                default_rcs=self._config.default_rcs,
            )
        except Exception as exc:
            if not self._is_current(session):
                return None
            if isinstance(exc, UnreachableError):
                return self._enter_fault(str(exc))
            return self._handle_failure(adapter, exc, self._elapsed_ms(started))

        if not self._is_current(session):
            return None

        latency_ms = self._elapsed_ms(started)
        state.failures = 0
        state.machine = MachineState.SCANNING
        if targets:
            self._log(
                LogLevel.SUCCESS,
                f"Target lock: {len(targets)} aircraft",
                f"Provider: {adapter.display_name} | Latency: {latency_ms} ms",
            )
        else:
            self._log(
                LogLevel.INFO,
                "Scan complete - sector clear",
                f"No targets within {scan.range_km:g} km via {adapter.display_name}.",
            )
        self._snapshots.publish(
            Snapshot(
                targets=tuple(targets),
                state=state.machine,
                provider=adapter.provider,
                session=session,
            )
        )
        return self._config.success_interval(scan.range_km)

    def _enter_fault(self, detail: str) -> float:
        """Back off without touching the failure counter or the provider cursor."""
        self._log(LogLevel.ERROR, "Network link offline", detail)
        self._state.machine = MachineState.FAULT
        return self._config.offline_interval

    def _handle_failure(self, adapter: ProviderAdapter, exc: Exception, elapsed_ms: int) -> float:
        state = self._state
        if not isinstance(exc, RadarError):
            _logger.warning("Unexpected error from %s", adapter.display_name, exc_info=exc)

        state.failures += 1
        detail = f"{exc} after {elapsed_ms} ms"
        if isinstance(exc, MixedContentError):
            detail += ". Use an https:// provider URL or serve the consumer over plain HTTP."
        self._log(LogLevel.ERROR, f"Scan failed ({adapter.display_name})", detail)

        if state.failures >= self._config.failover_threshold:
            state.failures = 0
            state.cursor = (state.cursor + 1) % len(PROVIDER_ORDER)
            self._log(
                LogLevel.WARN,
                "Rerouting data link",
                f"Switching to fallback provider: {get_adapter(self.provider).display_name}",
            )
            return self._config.failover_interval
        return self._config.retry_interval

    def _elapsed_ms(self, started: float) -> int:
        return int((self._clock.monotonic() - started) * 1000)
