"""Unit test fixtures (mocks and stubs).

Provides a virtual clock for the retry engine's backoff and scripted httpx
transports, so nothing sleeps and nothing touches the network.
"""

from typing import Callable, Iterable, Union
from unittest.mock import AsyncMock, patch

import httpx
import pytest

Scripted = Union[httpx.Response, Exception]


@pytest.fixture
def mock_sleep():
    """Replace the retry engine's asyncio.sleep with an AsyncMock.

    Delays passed to it are in seconds:
        assert [c.args[0] for c in mock_sleep.await_args_list] == [1.0, 2.0]
    """
    with patch("ziptax.retry.engine.asyncio.sleep", new_callable=AsyncMock) as sleep:
        yield sleep


class ScriptedTransport(httpx.MockTransport):
    """MockTransport that replays a fixed sequence of responses/exceptions.

    The last entry repeats once the script runs out. Every request seen is
    kept in ``requests`` for assertions.
    """

    def __init__(self, script: Iterable[Scripted]):
        self.script = list(script)
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        index = min(len(self.requests), len(self.script)) - 1
        outcome = self.script[index]
        if isinstance(outcome, Exception):
            raise outcome
        # Fresh copy so a repeated entry is never re-bound to a second request
        return httpx.Response(
            outcome.status_code, headers=outcome.headers, content=outcome.content
        )

    @property
    def call_count(self) -> int:
        return len(self.requests)


@pytest.fixture
def scripted_transport() -> Callable[..., ScriptedTransport]:
    """Factory fixture for ScriptedTransport.

    Usage:
        def test_something(scripted_transport):
            transport = scripted_transport(httpx.Response(500), httpx.Response(200, json={}))
    """
    def _create(*script: Scripted) -> ScriptedTransport:
        return ScriptedTransport(script)

    return _create
