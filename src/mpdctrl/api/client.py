"""Async MPD client.

This module provides an asyncio-based MPD client: one coroutine per
supported command, built on :class:`~mpdctrl.api.session.MpdSession`.

Example:
    async with MpdClient("192.168.1.100") as client:
        status = await client.status()
        if status.is_playing:
            print(await client.currentsong())
"""

import logging
from typing import Self

from mpdctrl.api.errors import MpdConnectionError
from mpdctrl.api.protocol import format_command, parse_playlists, parse_stats, parse_status
from mpdctrl.api.session import DEFAULT_PORT, DEFAULT_TIMEOUT, MpdSession
from mpdctrl.api.types import MpdStats, MpdStatus, MpdStoredPlaylist

logger = logging.getLogger(__name__)


class MpdClient:
    """Async MPD client.

    Commands run strictly one after another on a single connection.
    Errors from the session propagate unchanged; nothing is retried. After
    an :class:`~mpdctrl.api.errors.MpdTruncatedError` the client must be
    disconnected and connected again.

    Attributes:
        host: MPD server hostname or IP.
        port: MPD server port (default 6600).
        timeout: Connect and read timeout in seconds.
    """

    def __init__(
        self,
        host: str,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        """Initialize MPD client.

        Args:
            host: MPD server hostname or IP.
            port: MPD server port.
            timeout: Connect and read timeout in seconds.
        """
        self.host = host
        self.port = port
        self.timeout = timeout
        self._session: MpdSession | None = None

    @property
    def is_connected(self) -> bool:
        """Return True if connected to MPD."""
        return self._session is not None and self._session.is_open

    @property
    def version(self) -> str:
        """Return MPD protocol version from initial handshake."""
        return self._session.version if self._session else ""

    async def connect(self) -> None:
        """Connect to MPD server.

        Raises:
            MpdUnreachableError: If the server cannot be reached.
            MpdHandshakeError: If the greeting is invalid.
        """
        if self._session is not None:
            await self.disconnect()
        self._session = await MpdSession.open(self.host, self.port, self.timeout)

    async def disconnect(self) -> None:
        """Disconnect from MPD server."""
        if self._session:
            session, self._session = self._session, None
            await session.close()
            logger.info("Disconnected from MPD")

    async def __aenter__(self) -> Self:
        """Async context manager entry."""
        await self.connect()
        return self

    async def __aexit__(self, *_: object) -> None:
        """Async context manager exit."""
        await self.disconnect()

    async def _command(self, cmd: str, *args: str) -> list[str]:
        """Send command and return its response lines (without OK).

        Raises:
            MpdConnectionError: If not connected.
            MpdProtocolError: If the exchange fails.
        """
        if self._session is None:
            raise MpdConnectionError("Not connected")
        return await self._session.execute(format_command(cmd, *args))

    # -------------------------------------------------------------------------
    # Queue & Stored Playlists
    # -------------------------------------------------------------------------

    async def playlist(self) -> list[str]:
        """Return the queue listing as raw ``<pos>:file: <uri>`` lines.

        See :func:`~mpdctrl.api.protocol.parse_queue` to decode them.
        """
        return await self._command("playlist")

    async def listplaylist(self, name: str) -> list[str]:
        """Return the raw ``file: <uri>`` lines of a stored playlist.

        Args:
            name: Stored playlist name.
        """
        return await self._command("listplaylist", name)

    async def listplaylists(self) -> list[MpdStoredPlaylist]:
        """Return the stored playlists."""
        lines = await self._command("listplaylists")
        return parse_playlists(lines)

    async def clear(self) -> None:
        """Clear the queue."""
        await self._command("clear")

    async def load(self, name: str) -> None:
        """Append a stored playlist to the queue.

        Args:
            name: Stored playlist name.
        """
        await self._command("load", name)

    # -------------------------------------------------------------------------
    # Status & Info Commands
    # -------------------------------------------------------------------------

    async def status(self) -> MpdStatus:
        """Get current player status."""
        lines = await self._command("status")
        return parse_status(lines)

    async def stats(self) -> MpdStats:
        """Get database and server statistics."""
        lines = await self._command("stats")
        return parse_stats(lines)

    async def currentsong(self) -> list[str]:
        """Return the raw key/value lines of the current song.

        Empty when nothing is loaded. See
        :func:`~mpdctrl.api.protocol.parse_song` to decode them.
        """
        return await self._command("currentsong")

    # -------------------------------------------------------------------------
    # Playback Control
    # -------------------------------------------------------------------------

    async def play(self, pos: int = -1) -> None:
        """Start playback.

        Args:
            pos: Position in the queue to start from, or -1 for current.
        """
        if pos >= 0:
            await self._command("play", str(pos))
        else:
            await self._command("play")

    async def pause(self, state: bool | None = None) -> None:
        """Pause or resume playback.

        Args:
            state: True to pause, False to resume, None to toggle.
        """
        if state is None:
            await self._command("pause")
        else:
            await self._command("pause", "1" if state else "0")

    async def stop(self) -> None:
        """Stop playback."""
        await self._command("stop")

    async def next(self) -> None:
        """Skip to next song."""
        await self._command("next")

    async def previous(self) -> None:
        """Skip to previous song."""
        await self._command("previous")

    async def setvol(self, volume: int) -> None:
        """Set volume.

        Args:
            volume: Volume level (0-100).
        """
        await self._command("setvol", str(max(0, min(100, volume))))

    async def ping(self) -> None:
        """Ping MPD server to check connection."""
        await self._command("ping")
