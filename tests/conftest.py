"""Test fixtures for mpdctrl tests."""

import asyncio
from collections.abc import Callable

import pytest


class MockStreamReader:
    """Mock asyncio StreamReader for testing.

    Serves the given chunks in order. Once they run out, ``readline`` returns
    whatever is left (b"" at end of stream), or blocks forever when
    ``hang`` is set.
    """

    def __init__(self, responses: list[bytes], hang: bool = False) -> None:
        self._responses = responses
        self._index = 0
        self._buffer = b""
        self._hang = hang

    async def readline(self) -> bytes:
        """Read a line from mock data."""
        while b"\n" not in self._buffer:
            if self._index >= len(self._responses):
                if self._hang:
                    await asyncio.sleep(3600)
                rest, self._buffer = self._buffer, b""
                return rest
            self._buffer += self._responses[self._index]
            self._index += 1

        line, self._buffer = self._buffer.split(b"\n", 1)
        return line + b"\n"


class MockStreamWriter:
    """Mock asyncio StreamWriter for testing."""

    def __init__(
        self,
        fail_with: Exception | None = None,
        hang_drain: bool = False,
        close_error: Exception | None = None,
    ) -> None:
        self.data: list[bytes] = []
        self._closed = False
        self._fail_with = fail_with
        self._hang_drain = hang_drain
        self._close_error = close_error

    def write(self, data: bytes) -> None:
        """Record written data."""
        self.data.append(data)

    async def drain(self) -> None:
        """Mock drain, optionally failing or blocking forever."""
        if self._fail_with is not None:
            raise self._fail_with
        if self._hang_drain:
            await asyncio.sleep(3600)

    def close(self) -> None:
        """Mark as closed."""
        self._closed = True

    async def wait_closed(self) -> None:
        """Mock wait_closed, optionally failing."""
        if self._close_error is not None:
            raise self._close_error

    def is_closing(self) -> bool:
        """Check if closing."""
        return self._closed

    @property
    def commands(self) -> list[str]:
        """Return the command lines written so far."""
        return [chunk.decode() for chunk in self.data]


MockConnection = Callable[..., tuple[MockStreamReader, MockStreamWriter]]


@pytest.fixture
def mock_connection() -> MockConnection:
    """Create mock connection for testing."""

    def _mock_connection(
        responses: list[bytes],
        hang: bool = False,
        fail_with: Exception | None = None,
        hang_drain: bool = False,
        close_error: Exception | None = None,
    ) -> tuple[MockStreamReader, MockStreamWriter]:
        reader = MockStreamReader(responses, hang=hang)
        writer = MockStreamWriter(
            fail_with=fail_with, hang_drain=hang_drain, close_error=close_error
        )
        return reader, writer

    return _mock_connection
