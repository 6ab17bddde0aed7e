"""Tests for MPD data types."""

import pytest

from mpdctrl.api.errors import MpdParseError
from mpdctrl.api.types import (
    MpdAudioFormat,
    MpdSong,
    MpdStats,
    MpdStatus,
    PlaybackState,
    QueueModifierState,
)


class TestPlaybackState:
    """Tests for PlaybackState."""

    def test_parse_known_values(self) -> None:
        """Test parsing every protocol value."""
        assert PlaybackState.parse("play") is PlaybackState.PLAY
        assert PlaybackState.parse("stop") is PlaybackState.STOP
        assert PlaybackState.parse("pause") is PlaybackState.PAUSE

    def test_default_is_stop(self) -> None:
        """Test the default state."""
        assert PlaybackState.default() is PlaybackState.STOP

    def test_parse_unknown_value(self) -> None:
        """Test that unknown text raises a parse error, not a crash."""
        with pytest.raises(MpdParseError) as excinfo:
            PlaybackState.parse("Play")
        assert excinfo.value.value == "Play"
        assert isinstance(excinfo.value, ValueError)


class TestQueueModifierState:
    """Tests for QueueModifierState."""

    def test_parse_known_values(self) -> None:
        """Test parsing every protocol value."""
        assert QueueModifierState.parse("0") is QueueModifierState.OFF
        assert QueueModifierState.parse("1") is QueueModifierState.ON
        assert QueueModifierState.parse("oneshot") is QueueModifierState.ONESHOT

    def test_default_is_off(self) -> None:
        """Test the default mode."""
        assert QueueModifierState.default() is QueueModifierState.OFF

    def test_parse_unknown_value(self) -> None:
        """Test that unknown text raises a parse error."""
        with pytest.raises(MpdParseError):
            QueueModifierState.parse("2")

    def test_truthiness(self) -> None:
        """Test that only OFF is falsy."""
        assert not QueueModifierState.OFF
        assert QueueModifierState.ON
        assert QueueModifierState.ONESHOT


class TestMpdAudioFormat:
    """Tests for MpdAudioFormat."""

    def test_parse_full(self) -> None:
        """Test parsing samplerate:bits:channels."""
        audio = MpdAudioFormat.parse("44100:24:2")
        assert audio.sample_rate == "44100"
        assert audio.bits == "24"
        assert audio.channels == "2"
        assert str(audio) == "44100:24:2"

    def test_parse_float_samples(self) -> None:
        """Test floating point sample format."""
        audio = MpdAudioFormat.parse("48000:f:2")
        assert audio.bits == "f"

    def test_parse_unexpected_layout(self) -> None:
        """Test that odd values are kept as raw text."""
        audio = MpdAudioFormat.parse("dsd64")
        assert audio.raw == "dsd64"
        assert audio.sample_rate == ""


class TestMpdStatusProperties:
    """Tests for MpdStatus properties."""

    def test_empty_status(self) -> None:
        """Test that an empty status falls back to defaults."""
        status = MpdStatus()
        assert status.state is None
        assert status.current_state is PlaybackState.STOP
        assert status.is_stopped
        assert status.modifier("repeat") is QueueModifierState.OFF

    def test_is_playing(self) -> None:
        """Test is_playing property."""
        status = MpdStatus(state=PlaybackState.PLAY)
        assert status.is_playing
        assert not status.is_paused
        assert not status.is_stopped

    def test_is_paused(self) -> None:
        """Test is_paused property."""
        assert MpdStatus(state=PlaybackState.PAUSE).is_paused

    def test_modifier(self) -> None:
        """Test modifier lookup."""
        status = MpdStatus(single=QueueModifierState.ONESHOT)
        assert status.modifier("single") is QueueModifierState.ONESHOT
        assert status.modifier("consume") is QueueModifierState.OFF

    def test_modifier_unknown_name(self) -> None:
        """Test modifier lookup with a bad name."""
        with pytest.raises(ValueError):
            MpdStatus().modifier("volume")

    def test_progress(self) -> None:
        """Test progress property."""
        status = MpdStatus(elapsed=45.0, duration=180.0)
        assert status.progress == 0.25

        # No duration
        assert MpdStatus(elapsed=10.0).progress == 0.0
        assert MpdStatus(elapsed=10.0, duration=0.0).progress == 0.0

        # Past duration (edge case)
        assert MpdStatus(elapsed=200.0, duration=180.0).progress == 1.0


class TestMpdStats:
    """Tests for MpdStats."""

    def test_defaults_are_zero(self) -> None:
        """Test that every counter defaults to zero."""
        stats = MpdStats()
        assert stats.artists == 0
        assert stats.albums == 0
        assert stats.songs == 0
        assert stats.uptime == 0
        assert stats.db_playtime == 0
        assert stats.db_update == 0
        assert stats.playtime == 0


class TestMpdSongProperties:
    """Tests for MpdSong properties."""

    def test_display_title(self) -> None:
        """Test display_title property."""
        song = MpdSong(file="test.mp3", title="Test Song")
        assert song.display_title == "Test Song"

        # Fallback to filename
        song = MpdSong(file="/path/to/file.mp3")
        assert song.display_title == "file"

    def test_display_artist(self) -> None:
        """Test display_artist property."""
        assert MpdSong(file="a.mp3", artist="Track Artist").display_artist == "Track Artist"
        assert MpdSong(file="a.mp3", album_artist="Album Artist").display_artist == "Album Artist"
        assert MpdSong(file="a.mp3").display_artist == ""
