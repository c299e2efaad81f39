#!/usr/bin/env python3
"""Live console view of the skyradar controller.

Starts a controller around a point, prints every diagnostic event and a
one-line summary per snapshot, and stops after ``--duration`` seconds
(or on Ctrl-C).

Provider URLs, timeouts and intervals come from ``SKYRADAR_*`` environment
variables (see ``RadarConfig.from_env``).

Example::

    python scripts/watch_radar.py --lat 51.47 --lon -0.45 --range 80 --provider opensky
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from skyradar import FlightProvider, LogEvent, RadarConfig, RadarController, Snapshot  # noqa: E402


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__, formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("--lat", type=float, required=True, help="Origin latitude in degrees")
    parser.add_argument("--lon", type=float, required=True, help="Origin longitude in degrees")
    parser.add_argument("--range", dest="range_km", type=float, default=50.0, help="Scan radius in km")
    parser.add_argument(
        "--provider",
        choices=[p.value for p in FlightProvider],
        default=FlightProvider.ADSB_LOL.value,
        help="Preferred provider (failover still applies)",
    )
    parser.add_argument("--duration", type=float, default=60.0, help="Seconds to run before stopping")
    parser.add_argument("--targets", type=int, default=5, help="Targets to list per snapshot")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")
    return parser.parse_args(argv)


def _print_event(event: LogEvent) -> None:
    stamp = event.timestamp.strftime("%H:%M:%S")
    suffix = f" | {event.detail}" if event.detail else ""
    print(f"{stamp} [{event.level.value:<7}] {event.message}{suffix}")


def _print_snapshot(snapshot: Snapshot, limit: int) -> None:
    print(
        f"  snapshot session={snapshot.session} provider={snapshot.provider.value} "
        f"state={snapshot.state.value} targets={len(snapshot.targets)}"
    )
    nearest = sorted(snapshot.targets, key=lambda t: t.position.x**2 + t.position.y**2)
    for target in nearest[:limit]:
        print(
            f"    {target.id:<7} {target.callsign:<8} {target.type_code:<5} "
            f"x={target.position.x / 1000:8.1f}km y={target.position.y / 1000:8.1f}km "
            f"alt={target.altitude:7.0f}m rcs={target.rcs:g}"
        )


async def _main(args: argparse.Namespace) -> int:
    config = RadarConfig.from_env()
    async with RadarController(config) as radar:
        for event in radar.logs.history():
            _print_event(event)
        radar.logs.subscribe(_print_event)
        radar.snapshots.subscribe(lambda snapshot: _print_snapshot(snapshot, args.targets))

        radar.set_config(args.provider, args.lat, args.lon, args.range_km)
        radar.start()
        await asyncio.sleep(args.duration)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        return asyncio.run(_main(args))
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    raise SystemExit(main())
