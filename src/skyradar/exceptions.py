"""Custom exception hierarchy for skyradar."""

from __future__ import annotations


class RadarError(Exception):
    """Base exception for all skyradar errors."""


class RadarConfigError(RadarError):
    """Invalid or missing configuration."""


class UnreachableError(RadarError):
    """No network path at all; the cycle could not attempt a fetch."""


class RadarTransportError(RadarError):
    """HTTP-level failure (network, non-2xx, timeout).

    Counted towards the provider failover threshold.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str = "",
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)


class MixedContentError(RadarTransportError):
    """Plain-HTTP request refused because the consuming origin is secure.

    Kept apart from generic network failures because the operator fix is
    different: point the provider at an ``https://`` endpoint or serve the
    consumer over plain HTTP.
    """


class MalformedResponseError(RadarTransportError):
    """Provider answered, but the body is not JSON or lacks expected fields."""
