"""MPD transport session.

A session owns one TCP connection to MPD: it checks the greeting on
connect and runs command/response exchanges, one at a time, over the
shared reader/writer pair.
"""

import asyncio
import logging
from typing import Self

from mpdctrl.api.errors import (
    MpdHandshakeError,
    MpdTruncatedError,
    MpdUnreachableError,
    MpdWriteError,
)
from mpdctrl.api.protocol import ACK_PREFIX, GREETING_PREFIX, SENTINEL, parse_ack

logger = logging.getLogger(__name__)

DEFAULT_PORT = 6600
DEFAULT_TIMEOUT = 5.0


class MpdSession:
    """One live connection to MPD.

    Use :meth:`open` to create a session. Every read and every send is
    bounded by ``timeout``. A send or read that fails, times out or hits end
    of stream in the middle of an exchange leaves the connection out of
    sync, so the session refuses further commands and must be closed.

    Example:
        async with await MpdSession.open("localhost") as session:
            lines = await session.execute("status")
    """

    def __init__(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
        version: str,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._reader = reader
        self._writer = writer
        self._version = version
        self._timeout = timeout
        self._lock = asyncio.Lock()
        self._desynced = False
        self._closed = False

    @classmethod
    async def open(
        cls,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> Self:
        """Connect to MPD and validate the greeting.

        Args:
            host: MPD server hostname or IP.
            port: MPD server port.
            timeout: Connect and per-read timeout in seconds.

        Raises:
            MpdUnreachableError: If the TCP connection fails.
            MpdHandshakeError: If the server does not greet with "OK MPD".
        """
        try:
            reader, writer = await asyncio.wait_for(
                asyncio.open_connection(host, port),
                timeout=timeout,
            )
        except TimeoutError as e:
            raise MpdUnreachableError(f"Connection to {host}:{port} timed out") from e
        except OSError as e:
            raise MpdUnreachableError(f"Failed to connect to {host}:{port}: {e}") from e

        session = cls(reader, writer, version="", timeout=timeout)
        try:
            greeting = await session._read_line()
        except MpdTruncatedError as e:
            await session.close()
            raise MpdHandshakeError(f"No MPD greeting from {host}:{port}") from e

        if not greeting.startswith(GREETING_PREFIX):
            await session.close()
            raise MpdHandshakeError(f"Invalid MPD greeting: {greeting!r}")

        session._version = greeting[len(GREETING_PREFIX) :].strip()
        logger.info("Connected to MPD %s at %s:%d", session._version, host, port)
        return session

    @property
    def version(self) -> str:
        """Return MPD protocol version from initial handshake."""
        return self._version

    @property
    def timeout(self) -> float:
        """Return the per-read and per-send timeout in seconds."""
        return self._timeout

    @property
    def is_open(self) -> bool:
        """Return True if the session can still run commands."""
        return not self._closed and not self._desynced and not self._writer.is_closing()

    async def close(self) -> None:
        """Close the connection. Safe to call more than once."""
        if self._closed:
            return
        self._closed = True
        try:
            self._writer.close()
            await asyncio.wait_for(self._writer.wait_closed(), timeout=1.0)
        except (OSError, TimeoutError, asyncio.CancelledError) as e:
            logger.debug("Expected error during MPD disconnect: %s", e)
        except Exception as e:  # noqa: BLE001
            logger.warning("Unexpected error during MPD disconnect: %s", e)

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(self, *_: object) -> None:
        await self.close()

    async def _read_line(self) -> str:
        """Read one line, without its line ending.

        Raises:
            MpdTruncatedError: On end of stream, timeout or socket error.
        """
        try:
            raw = await asyncio.wait_for(self._reader.readline(), timeout=self._timeout)
        except TimeoutError as e:
            raise MpdTruncatedError(f"No response from MPD within {self._timeout}s") from e
        except (OSError, ValueError) as e:
            # ValueError: line longer than the reader's buffer limit
            raise MpdTruncatedError(f"Failed to read from MPD: {e}") from e

        if not raw.endswith(b"\n"):
            raise MpdTruncatedError("MPD closed the connection mid-response")

        try:
            return raw.decode("utf-8").rstrip("\r\n")
        except UnicodeDecodeError as e:
            raise MpdTruncatedError(f"Undecodable line from MPD: {raw!r}") from e

    async def execute(self, command: str) -> list[str]:
        """Send one command and return the lines of its response.

        Args:
            command: Command line without trailing newline, already quoted.

        Returns:
            Response lines in order, without the final OK. Empty for
            commands that only acknowledge.

        Raises:
            ValueError: If the command contains a line break.
            MpdWriteError: If the command could not be sent.
            MpdCommandError: If MPD answered with ACK.
            MpdTruncatedError: If the response ended before OK.
        """
        if "\n" in command or "\r" in command:
            raise ValueError(f"MPD command cannot contain line breaks: {command!r}")

        async with self._lock:
            if self._closed:
                raise MpdWriteError("Session is closed")
            if self._desynced:
                raise MpdTruncatedError("Session is out of sync after an incomplete exchange")

            logger.debug("MPD command: %s", command)
            try:
                self._writer.write(f"{command}\n".encode())
                await asyncio.wait_for(self._writer.drain(), timeout=self._timeout)
            except (OSError, RuntimeError, TimeoutError) as e:
                # A partial write leaves the server mid-command
                self._desynced = True
                raise MpdWriteError(f"Failed to send {command!r}: {e}") from e

            try:
                return await self._read_response()
            except MpdTruncatedError:
                self._desynced = True
                raise

    async def _read_response(self) -> list[str]:
        first = await self._read_line()
        if first.startswith(ACK_PREFIX):
            raise parse_ack(first)

        lines: list[str] = []
        line = first
        while line != SENTINEL:
            lines.append(line)
            line = await self._read_line()
        return lines
