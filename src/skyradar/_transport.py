"""HTTP transport for provider requests."""

from __future__ import annotations

import asyncio
import errno
import json
import logging
from typing import Any, Protocol

import aiohttp

from skyradar.config import RadarConfig
from skyradar.exceptions import (
    MalformedResponseError,
    MixedContentError,
    RadarTransportError,
    UnreachableError,
)

_logger = logging.getLogger(__name__)

_NO_ROUTE_ERRNOS: frozenset[int] = frozenset({errno.ENETUNREACH, errno.ENETDOWN})


class HttpTransport(Protocol):
    """Structural transport interface used by the provider adapters.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (`AiohttpTransport`) concrete.
    """

    async def get_json(self, url: str, *, timeout: float) -> Any:
        ...


class AiohttpTransport:
    """GET-and-decode transport on top of a shared ``aiohttp.ClientSession``.

    Cancellation of the calling task propagates as ``asyncio.CancelledError``
    and is never converted into a transport error.
    """

    def __init__(self, config: RadarConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session

    def _check_mixed_content(self, url: str) -> None:
        if self._config.secure_origin and url.lower().startswith("http:"):
            raise MixedContentError(
                f"Mixed content blocked: {url} is not HTTPS",
                url=url,
            )

    async def get_json(self, url: str, *, timeout: float) -> Any:
        """Fetch *url* and return the decoded JSON body.

        Connection-level failures are retried ``config.network_retries``
        times; HTTP error statuses and timeouts are not.
        """
        self._check_mixed_content(url)

        headers = {
            "accept-encoding": "gzip, deflate",
            "user-agent": self._config.user_agent,
        }
        attempts = self._config.network_retries + 1

        for attempt in range(1, attempts + 1):
            _logger.debug("GET %s (attempt %d/%d)", url, attempt, attempts)
            try:
                async with self._http.get(
                    url,
                    headers=headers,
                    timeout=aiohttp.ClientTimeout(total=timeout),
                ) as resp:
                    text = await resp.text()
                    if not 200 <= resp.status < 300:
                        raise RadarTransportError(
                            f"HTTP {resp.status} {resp.reason or ''}".rstrip(),
                            status_code=resp.status,
                            url=url,
                        )
                break
            except RadarTransportError:
                raise
            except (asyncio.TimeoutError, TimeoutError) as exc:
                raise RadarTransportError(
                    f"Request timed out after {timeout:g}s",
                    url=url,
                ) from exc
            except aiohttp.ClientError as exc:
                if attempt < attempts:
                    _logger.debug("Retrying %s after %s", url, exc)
                    continue
                if _is_no_route(exc):
                    raise UnreachableError(f"No network path to {url}: {exc}") from exc
                raise RadarTransportError(
                    f"Network error (connection refused or blocked): {exc}",
                    url=url,
                ) from exc

        try:
            return json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(
                f"Invalid JSON from {url}: {text[:200]}",
                url=url,
            ) from exc


def _is_no_route(exc: aiohttp.ClientError) -> bool:
    os_error = getattr(exc, "os_error", None)
    return isinstance(os_error, OSError) and os_error.errno in _NO_ROUTE_ERRNOS
