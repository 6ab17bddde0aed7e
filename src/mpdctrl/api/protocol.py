"""MPD protocol parsing utilities.

MPD uses a simple line-based text protocol:
- Commands are sent as plain text lines
- Responses are key-value pairs: "key: value"
- Responses end with "OK" or "ACK [error@command_listNum] {command} message"

The functions here work on the response lines returned by
:meth:`mpdctrl.api.session.MpdSession.execute`, which never include the
final OK line. Keys are matched case-sensitively and unknown keys are
ignored, so newer servers that report extra fields decode fine.

Reference: https://mpd.readthedocs.io/en/stable/protocol.html
"""

import logging
import math
import re
from collections.abc import Callable, Iterable
from typing import Any

from mpdctrl.api.errors import MpdCommandError, MpdMissingFieldError
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

logger = logging.getLogger(__name__)

GREETING_PREFIX = "OK MPD"
SENTINEL = "OK"
ACK_PREFIX = "ACK "

# Pattern for ACK responses: ACK [error@command_listNum] {current_command} message_text
ACK_PATTERN = re.compile(r"ACK \[(\d+)@(\d+)\] \{(\w*)\} ?(.*)")

SongField = tuple[str, str]
Converter = Callable[[str], Any]


def _volume(value: str) -> int:
    volume = int(value)
    # Servers without a mixer report -1
    if not 0 <= volume <= 100:  # noqa: PLR2004
        raise ValueError(f"volume out of range: {volume}")
    return volume


def _finite_float(value: str) -> float:
    result = float(value)
    # mixrampdelay is "nan" when MixRamp is disabled
    if math.isnan(result):
        raise ValueError("not a number")
    return result


# MPD key -> (dataclass field name, converter)
_STATUS_KEY_MAP: dict[str, tuple[str, Converter]] = {
    "partition": ("partition", str),
    "volume": ("volume", _volume),
    "repeat": ("repeat", QueueModifierState.parse),
    "random": ("random", QueueModifierState.parse),
    "single": ("single", QueueModifierState.parse),
    "consume": ("consume", QueueModifierState.parse),
    "playlist": ("playlist", int),
    "playlistlength": ("playlist_length", int),
    "state": ("state", PlaybackState.parse),
    "song": ("song", int),
    "songid": ("song_id", int),
    "nextsong": ("next_song", int),
    "nextsongid": ("next_song_id", int),
    "elapsed": ("elapsed", float),
    "duration": ("duration", float),
    "bitrate": ("bitrate", int),
    "xfade": ("xfade", int),
    "mixrampdb": ("mixramp_db", _finite_float),
    "mixrampdelay": ("mixramp_delay", _finite_float),
    "audio": ("audio", MpdAudioFormat.parse),
    "updating_db": ("updating_db", int),
    "error": ("error", str),
    "lastloadedplaylist": ("last_loaded_playlist", str),
}

_STATS_KEYS = ("artists", "albums", "songs", "uptime", "db_playtime", "db_update", "playtime")

_SONG_KEY_MAP: dict[str, tuple[str, Converter]] = {
    "file": ("file", str),
    "Title": ("title", str),
    "Artist": ("artist", str),
    "Album": ("album", str),
    "AlbumArtist": ("album_artist", str),
    "duration": ("duration", float),
    "Track": ("track", str),
    "Date": ("date", str),
    "Genre": ("genre", str),
    "Pos": ("pos", int),
    "Id": ("id", int),
}


# -- Commands -----------------------------------------------------------------


def escape_arg(arg: str) -> str:
    """Escape an argument for MPD command.

    MPD requires arguments with spaces or special chars to be quoted.
    Inside quotes, backslash and double-quote must be escaped.

    Args:
        arg: The argument to escape.

    Returns:
        Escaped argument, quoted if necessary.

    Raises:
        ValueError: If the argument contains a line break.
    """
    if "\n" in arg or "\r" in arg:
        raise ValueError(f"MPD arguments cannot contain line breaks: {arg!r}")

    if arg and not any(c in arg for c in " \"'\t\\"):
        return arg

    escaped = arg.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'


def format_command(command: str, *args: str) -> str:
    """Format an MPD command with arguments.

    Args:
        command: The MPD command name.
        *args: Command arguments.

    Returns:
        Formatted command string (without newline).
    """
    if not args:
        return command
    escaped_args = [escape_arg(arg) for arg in args]
    return f"{command} {' '.join(escaped_args)}"


def parse_ack(line: str) -> MpdCommandError:
    """Build the error for an ACK line.

    Lines that do not follow the usual ACK layout keep the whole line as
    the message with code 0.
    """
    match = ACK_PATTERN.match(line)
    if not match:
        return MpdCommandError(0, "", line)
    return MpdCommandError(
        code=int(match.group(1)),
        list_num=int(match.group(2)),
        command=match.group(3),
        message=match.group(4),
    )


# -- Generic responses --------------------------------------------------------


def parse_pairs(lines: Iterable[str]) -> list[SongField]:
    """Split response lines into (key, value) pairs.

    Order and duplicate keys are preserved. Lines without a ": " separator
    are skipped.
    """
    pairs: list[SongField] = []
    for line in lines:
        key, sep, value = line.partition(": ")
        if not sep:
            logger.debug("Skipping MPD line without key: %r", line)
            continue
        pairs.append((key, value))
    return pairs


def parse_response(lines: Iterable[str]) -> dict[str, str]:
    """Parse MPD response lines into a key-value dict.

    When a key repeats, the last value wins.
    """
    return dict(parse_pairs(lines))


def group_records(pairs: Iterable[SongField], leading_key: str = "file") -> list[list[SongField]]:
    """Split a flat pair list into records.

    MPD separates the entries of a listing only by repeating a leading key
    (``file`` for songs, ``playlist`` for stored playlists). Each occurrence
    of ``leading_key`` starts a new record; pairs before the first one are
    dropped.
    """
    records: list[list[SongField]] = []
    for key, value in pairs:
        if key == leading_key:
            records.append([])
        elif not records:
            logger.debug("Dropping %r before first %r", key, leading_key)
            continue
        records[-1].append((key, value))
    return records


def _decode_fields(
    data: dict[str, str],
    key_map: dict[str, tuple[str, Converter]],
) -> tuple[dict[str, Any], set[str]]:
    """Convert known keys; return the field values and the keys decoded."""
    kwargs: dict[str, Any] = {}
    decoded: set[str] = set()
    for mpd_key, (field_name, convert) in key_map.items():
        if mpd_key not in data:
            continue
        try:
            kwargs[field_name] = convert(data[mpd_key])
        except ValueError as e:
            logger.debug("Ignoring MPD field %s=%r: %s", mpd_key, data[mpd_key], e)
            continue
        decoded.add(mpd_key)
    return kwargs, decoded


def _check_required(required: Iterable[str], decoded: set[str]) -> None:
    for key in required:
        if key not in decoded:
            raise MpdMissingFieldError(key)


# -- Typed responses ----------------------------------------------------------


def parse_status(lines: Iterable[str], required: Iterable[str] = ()) -> MpdStatus:
    """Parse a ``status`` response into MpdStatus.

    Args:
        lines: Response lines (without the final OK).
        required: MPD keys the caller cannot do without.

    Returns:
        MpdStatus instance. Keys that are missing or fail to parse are None.

    Raises:
        MpdMissingFieldError: If a required key is missing or invalid.
    """
    data = parse_response(lines)
    kwargs, decoded = _decode_fields(data, _STATUS_KEY_MAP)

    # Legacy "time" is "elapsed:duration" in whole seconds
    time_value = data.get("time", "")
    if ":" in time_value:
        elapsed_str, duration_str = time_value.split(":", 1)
        try:
            elapsed, duration = float(elapsed_str), float(duration_str)
        except ValueError:
            logger.debug("Ignoring MPD field time=%r", time_value)
        else:
            kwargs.setdefault("elapsed", elapsed)
            kwargs.setdefault("duration", duration)
            decoded.update(("time", "elapsed", "duration"))

    _check_required(required, decoded)
    return MpdStatus(**kwargs)


def parse_stats(lines: Iterable[str], required: Iterable[str] = ()) -> MpdStats:
    """Parse a ``stats`` response into MpdStats.

    Missing or malformed counters stay at zero.

    Raises:
        MpdMissingFieldError: If a required key is missing or invalid.
    """
    data = parse_response(lines)
    kwargs, decoded = _decode_fields(data, {key: (key, int) for key in _STATS_KEYS})
    _check_required(required, decoded)
    return MpdStats(**kwargs)


def parse_song(lines: Iterable[str], required: Iterable[str] = ()) -> MpdSong:
    """Parse a single song block (e.g. ``currentsong``) into MpdSong.

    Keys without a dedicated field end up in ``MpdSong.tags``. The legacy
    integer ``Time`` key is used when ``duration`` is absent.

    Raises:
        MpdMissingFieldError: If a required key is missing or invalid.
    """
    return _song_from_pairs(parse_pairs(lines), required)


def parse_songs(lines: Iterable[str]) -> list[MpdSong]:
    """Parse a listing of song blocks, each starting with ``file``."""
    return [_song_from_pairs(record) for record in group_records(parse_pairs(lines), "file")]


def _song_from_pairs(pairs: list[SongField], required: Iterable[str] = ()) -> MpdSong:
    data = dict(pairs)
    kwargs, decoded = _decode_fields(data, _SONG_KEY_MAP)

    if "duration" not in kwargs and "Time" in data:
        try:
            kwargs["duration"] = float(data["Time"])
            decoded.add("Time")
        except ValueError:
            logger.debug("Ignoring MPD field Time=%r", data["Time"])

    _check_required(required, decoded)
    kwargs.setdefault("file", "")
    kwargs["tags"] = {k: v for k, v in data.items() if k not in _SONG_KEY_MAP}
    return MpdSong(**kwargs)


def parse_queue(lines: Iterable[str]) -> list[MpdQueueEntry]:
    """Parse the ``playlist`` queue listing.

    Each line has the form ``<pos>:file: <uri>``.
    """
    entries: list[MpdQueueEntry] = []
    for line in lines:
        pos_str, _, rest = line.partition(":")
        key, sep, uri = rest.partition(": ")
        if not sep or key != "file":
            logger.debug("Skipping queue line: %r", line)
            continue
        try:
            entries.append(MpdQueueEntry(pos=int(pos_str), file=uri))
        except ValueError:
            logger.debug("Skipping queue line with bad position: %r", line)
    return entries


def parse_playlists(lines: Iterable[str]) -> list[MpdStoredPlaylist]:
    """Parse the ``listplaylists`` response."""
    playlists: list[MpdStoredPlaylist] = []
    for record in group_records(parse_pairs(lines), "playlist"):
        data = dict(record)
        playlists.append(
            MpdStoredPlaylist(
                name=data["playlist"],
                last_modified=data.get("Last-Modified", ""),
            )
        )
    return playlists
