"""MPD protocol data types.

This module defines the closed enumerations used by the status decoder and
the frozen dataclasses that decoded responses are returned as.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Self

from mpdctrl.api.errors import MpdParseError


class PlaybackState(Enum):
    """Player state as reported by the ``state`` status key."""

    PLAY = "play"
    STOP = "stop"
    PAUSE = "pause"

    @classmethod
    def default(cls) -> Self:
        """Return the state assumed when the server does not report one."""
        return cls.STOP

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse a ``state`` value.

        Raises:
            MpdParseError: If the value is not a known state.
        """
        try:
            return cls(value)
        except ValueError as e:
            raise MpdParseError("state", value) from e


class QueueModifierState(Enum):
    """Tri-state queue modifier (repeat, random, single, consume).

    ``ONESHOT`` is a transient mode: the modifier applies once and then
    falls back to ``OFF``.
    """

    OFF = "0"
    ON = "1"
    ONESHOT = "oneshot"

    @classmethod
    def default(cls) -> Self:
        """Return the mode assumed when the server does not report one."""
        return cls.OFF

    @classmethod
    def parse(cls, value: str) -> Self:
        """Parse a modifier value (``"0"``, ``"1"`` or ``"oneshot"``).

        Raises:
            MpdParseError: If the value is not a known mode.
        """
        try:
            return cls(value)
        except ValueError as e:
            raise MpdParseError("queue modifier", value) from e

    def __bool__(self) -> bool:
        return self is not QueueModifierState.OFF


@dataclass(frozen=True, slots=True)
class MpdAudioFormat:
    """Audio output format from the ``audio`` status key.

    MPD reports ``samplerate:bits:channels``. Each part is kept as text
    because MPD uses ``*`` for "any" and ``f`` for floating point samples.

    Attributes:
        raw: The value as sent by the server.
        sample_rate: Sample rate in Hz, e.g. "44100".
        bits: Bits per sample, e.g. "16", "24" or "f".
        channels: Channel count, e.g. "2".
    """

    raw: str
    sample_rate: str = ""
    bits: str = ""
    channels: str = ""

    @classmethod
    def parse(cls, value: str) -> "MpdAudioFormat":
        """Split an ``audio`` value into its parts.

        Values that do not have exactly three parts are kept only as raw text.
        """
        parts = value.split(":")
        if len(parts) != 3:  # noqa: PLR2004
            return cls(raw=value)
        return cls(raw=value, sample_rate=parts[0], bits=parts[1], channels=parts[2])

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True, slots=True)
class MpdStatus:
    """MPD player status.

    Every field is optional: MPD leaves out keys that have no meaning in the
    current state (no timing while stopped, no ``error`` unless one occurred).

    Attributes:
        partition: Name of the partition this status belongs to.
        volume: Volume level (0-100).
        repeat: Repeat mode.
        random: Random/shuffle mode.
        single: Single mode (stop or repeat after the current song).
        consume: Consume mode (remove songs from the queue once played).
        playlist: Queue version number.
        playlist_length: Number of songs in the queue.
        state: Player state.
        song: Queue position of the current song.
        song_id: Song ID of the current song.
        next_song: Queue position of the next song.
        next_song_id: Song ID of the next song.
        elapsed: Elapsed time of the current song in seconds.
        duration: Duration of the current song in seconds.
        bitrate: Instantaneous bitrate in kbps.
        xfade: Crossfade in seconds.
        mixramp_db: MixRamp threshold in dB.
        mixramp_delay: MixRamp delay in seconds.
        audio: Output audio format.
        updating_db: Job ID of a running database update.
        error: Last error message.
        last_loaded_playlist: Name of the last stored playlist loaded.
    """

    partition: str | None = None
    volume: int | None = None
    repeat: QueueModifierState | None = None
    random: QueueModifierState | None = None
    single: QueueModifierState | None = None
    consume: QueueModifierState | None = None
    playlist: int | None = None
    playlist_length: int | None = None
    state: PlaybackState | None = None
    song: int | None = None
    song_id: int | None = None
    next_song: int | None = None
    next_song_id: int | None = None
    elapsed: float | None = None
    duration: float | None = None
    bitrate: int | None = None
    xfade: int | None = None
    mixramp_db: float | None = None
    mixramp_delay: float | None = None
    audio: MpdAudioFormat | None = None
    updating_db: int | None = None
    error: str | None = None
    last_loaded_playlist: str | None = None

    @property
    def current_state(self) -> PlaybackState:
        """Return the player state, falling back to the default."""
        return self.state if self.state is not None else PlaybackState.default()

    @property
    def is_playing(self) -> bool:
        """Return True if currently playing."""
        return self.current_state is PlaybackState.PLAY

    @property
    def is_paused(self) -> bool:
        """Return True if paused."""
        return self.current_state is PlaybackState.PAUSE

    @property
    def is_stopped(self) -> bool:
        """Return True if stopped."""
        return self.current_state is PlaybackState.STOP

    def modifier(self, name: str) -> QueueModifierState:
        """Return a queue modifier by name, falling back to the default.

        Args:
            name: One of "repeat", "random", "single", "consume".
        """
        if name not in ("repeat", "random", "single", "consume"):
            raise ValueError(f"Unknown queue modifier: {name}")
        value: QueueModifierState | None = getattr(self, name)
        return value if value is not None else QueueModifierState.default()

    @property
    def progress(self) -> float:
        """Return playback progress as a fraction (0.0 to 1.0)."""
        if not self.duration or self.elapsed is None:
            return 0.0
        return min(1.0, self.elapsed / self.duration)


@dataclass(frozen=True, slots=True)
class MpdStats:
    """Database and server counters from the ``stats`` command.

    Counters missing from the response stay at zero.

    Attributes:
        artists: Number of distinct artists.
        albums: Number of distinct albums.
        songs: Number of songs.
        uptime: Daemon uptime in seconds.
        db_playtime: Sum of all song durations in the database, in seconds.
        db_update: Last database update as a UNIX timestamp.
        playtime: Time spent playing since the daemon started, in seconds.
    """

    artists: int = 0
    albums: int = 0
    songs: int = 0
    uptime: int = 0
    db_playtime: int = 0
    db_update: int = 0
    playtime: int = 0


@dataclass(frozen=True)
class MpdSong:
    """A song block (``currentsong``, ``playlistinfo``, ...).

    Attributes:
        file: Path to the audio file in MPD's music directory.
        title: Track title from tags.
        artist: Artist name(s) from tags.
        album: Album name from tags.
        album_artist: Album artist (if different from track artist).
        duration: Song duration in seconds.
        track: Track number (e.g., "3" or "3/12").
        date: Release date/year.
        genre: Genre tag.
        pos: Position in the queue.
        id: Song ID in the queue.
        tags: Every other key of the block, as sent.
    """

    file: str
    title: str = ""
    artist: str = ""
    album: str = ""
    album_artist: str = ""
    duration: float | None = None
    track: str = ""
    date: str = ""
    genre: str = ""
    pos: int | None = None
    id: int | None = None
    tags: dict[str, str] = field(default_factory=dict)

    @property
    def display_title(self) -> str:
        """Return title for display, with filename fallback."""
        if self.title:
            return self.title
        name = self.file.rsplit("/", 1)[-1]
        if "." in name:
            name = name.rsplit(".", 1)[0]
        return name

    @property
    def display_artist(self) -> str:
        """Return artist for display, falling back to album_artist if empty."""
        return self.artist or self.album_artist or ""


@dataclass(frozen=True, slots=True)
class MpdQueueEntry:
    """One line of the ``playlist`` queue listing."""

    pos: int
    file: str


@dataclass(frozen=True, slots=True)
class MpdStoredPlaylist:
    """A stored playlist from ``listplaylists``.

    Attributes:
        name: Playlist name.
        last_modified: ISO 8601 timestamp of the last change, if reported.
    """

    name: str
    last_modified: str = ""
