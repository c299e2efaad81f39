from __future__ import annotations

import asyncio
import errno
from typing import Any

import aiohttp
import pytest

from skyradar._transport import AiohttpTransport
from skyradar.config import RadarConfig
from skyradar.exceptions import (
    MalformedResponseError,
    MixedContentError,
    RadarTransportError,
    UnreachableError,
)


class _FakeResponse:
    def __init__(self, status: int, body: str, reason: str = "OK") -> None:
        self.status = status
        self.reason = reason
        self._body = body

    async def text(self) -> str:
        return self._body

    async def __aenter__(self) -> _FakeResponse:
        return self

    async def __aexit__(self, *exc: Any) -> None:
        return None


class _FakeHttpSession:
    """Stands in for ``aiohttp.ClientSession``; each ``get`` consumes one outcome."""

    def __init__(self, *outcomes: _FakeResponse | BaseException) -> None:
        self._outcomes = list(outcomes)
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get(self, url: str, **kwargs: Any) -> _FakeResponse:
        self.calls.append((url, kwargs))
        outcome = self._outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class _NoRouteError(aiohttp.ClientConnectionError):
    def __init__(self) -> None:
        super().__init__("Cannot connect")
        self.os_error = OSError(errno.ENETUNREACH, "Network is unreachable")


def _transport(session: _FakeHttpSession, **config: Any) -> AiohttpTransport:
    return AiohttpTransport(RadarConfig(**config), session)  # type: ignore[arg-type]


@pytest.mark.asyncio
async def test_get_json_decodes_body_and_sends_timeout() -> None:
    session = _FakeHttpSession(_FakeResponse(200, '{"ac": []}'))

    result = await _transport(session, user_agent="test-agent").get_json("https://x.test/a", timeout=4)

    assert result == {"ac": []}
    ((url, kwargs),) = session.calls
    assert url == "https://x.test/a"
    assert kwargs["timeout"].total == 4
    assert kwargs["headers"]["user-agent"] == "test-agent"


@pytest.mark.asyncio
async def test_http_error_status_is_transport_error_without_retry() -> None:
    session = _FakeHttpSession(_FakeResponse(503, "busy", reason="Service Unavailable"))

    with pytest.raises(RadarTransportError) as exc_info:
        await _transport(session).get_json("https://x.test/a", timeout=1)

    assert exc_info.value.status_code == 503
    assert exc_info.value.url == "https://x.test/a"
    assert "503" in str(exc_info.value)
    assert len(session.calls) == 1


@pytest.mark.asyncio
async def test_connection_error_is_retried_once() -> None:
    session = _FakeHttpSession(
        aiohttp.ClientConnectionError("refused"),
        _FakeResponse(200, "[1, 2]"),
    )

    result = await _transport(session).get_json("https://x.test/a", timeout=1)

    assert result == [1, 2]
    assert len(session.calls) == 2


@pytest.mark.asyncio
async def test_connection_error_after_retries_is_transport_error() -> None:
    session = _FakeHttpSession(
        aiohttp.ClientConnectionError("refused"),
        aiohttp.ClientConnectionError("refused again"),
    )

    with pytest.raises(RadarTransportError) as exc_info:
        await _transport(session).get_json("https://x.test/a", timeout=1)

    assert not isinstance(exc_info.value, MalformedResponseError)
    assert len(session.calls) == 2


@pytest.mark.asyncio
async def test_no_route_maps_to_unreachable() -> None:
    session = _FakeHttpSession(_NoRouteError())

    with pytest.raises(UnreachableError):
        await _transport(session, network_retries=0).get_json("https://x.test/a", timeout=1)


@pytest.mark.asyncio
async def test_timeout_is_transport_error() -> None:
    session = _FakeHttpSession(asyncio.TimeoutError())

    with pytest.raises(RadarTransportError, match="timed out"):
        await _transport(session).get_json("https://x.test/a", timeout=2)

    assert len(session.calls) == 1


@pytest.mark.asyncio
async def test_invalid_json_is_malformed_response() -> None:
    session = _FakeHttpSession(_FakeResponse(200, "<html>oops</html>"))

    with pytest.raises(MalformedResponseError):
        await _transport(session).get_json("https://x.test/a", timeout=1)


@pytest.mark.asyncio
async def test_mixed_content_rejected_before_request() -> None:
    session = _FakeHttpSession()

    with pytest.raises(MixedContentError) as exc_info:
        await _transport(session, secure_origin=True).get_json("http://localhost:8080/data", timeout=1)

    assert isinstance(exc_info.value, RadarTransportError)
    assert session.calls == []


@pytest.mark.asyncio
async def test_plain_http_allowed_on_insecure_origin() -> None:
    session = _FakeHttpSession(_FakeResponse(200, "{}"))

    assert await _transport(session).get_json("http://localhost:8080/data", timeout=1) == {}


@pytest.mark.asyncio
async def test_cancellation_is_not_wrapped() -> None:
    session = _FakeHttpSession(asyncio.CancelledError())

    with pytest.raises(asyncio.CancelledError):
        await _transport(session).get_json("https://x.test/a", timeout=1)
