"""Coarse network reachability check."""

from __future__ import annotations

import logging
import socket
from typing import Protocol

_logger = logging.getLogger(__name__)


class ReachabilityProbe(Protocol):
    async def is_reachable(self) -> bool:
        ...


class RouteReachabilityProbe:
    """Report whether the host has any route towards the public internet.

    Connecting a UDP socket only asks the kernel for a route; no packet is
    sent, so the check is local and does not block on the network.
    """

    def __init__(self, host: str = "1.1.1.1", port: int = 53) -> None:
        self._address = (host, port)

    async def is_reachable(self) -> bool:
        try:
            with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as sock:
                sock.connect(self._address)
        except OSError as exc:
            _logger.debug("No route to %s:%s: %s", *self._address, exc)
            return False
        return True
