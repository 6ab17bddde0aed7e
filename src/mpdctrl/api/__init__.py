"""MPD client module.

This module provides an async client for the MPD text protocol: a
connection session, response decoders and a command-per-method client.

Example:
    from mpdctrl.api import MpdClient

    async with MpdClient("192.168.1.100") as client:
        status = await client.status()
        stats = await client.stats()
"""

from mpdctrl.api.client import MpdClient
from mpdctrl.api.errors import (
    MpdCommandError,
    MpdConnectionError,
    MpdDecodeError,
    MpdError,
    MpdHandshakeError,
    MpdMissingFieldError,
    MpdParseError,
    MpdProtocolError,
    MpdTruncatedError,
    MpdUnreachableError,
    MpdWriteError,
)
from mpdctrl.api.session import MpdSession
from mpdctrl.api.types import (
    MpdAudioFormat,
    MpdQueueEntry,
    MpdSong,
    MpdStats,
    MpdStatus,
    MpdStoredPlaylist,
    PlaybackState,
    QueueModifierState,
)

__all__ = [
    "MpdClient",
    "MpdSession",
    "MpdError",
    "MpdConnectionError",
    "MpdUnreachableError",
    "MpdHandshakeError",
    "MpdProtocolError",
    "MpdWriteError",
    "MpdCommandError",
    "MpdTruncatedError",
    "MpdDecodeError",
    "MpdMissingFieldError",
    "MpdParseError",
    "MpdAudioFormat",
    "MpdQueueEntry",
    "MpdSong",
    "MpdStats",
    "MpdStatus",
    "MpdStoredPlaylist",
    "PlaybackState",
    "QueueModifierState",
]
