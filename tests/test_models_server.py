"""Tests for the MpdServer model."""

import pytest

from mpdctrl.models import MpdServer


class TestMpdServer:
    """Tests for MpdServer."""

    def test_defaults(self) -> None:
        """Test default values."""
        server = MpdServer()
        assert server.host == "localhost"
        assert server.port == 6600
        assert server.timeout == 5.0

    def test_address(self) -> None:
        """Test the address property."""
        assert MpdServer(host="192.168.1.100", port=6601).address == "192.168.1.100:6601"

    def test_frozen(self) -> None:
        """Test that servers are immutable."""
        server = MpdServer()
        with pytest.raises(AttributeError):
            server.host = "other"  # type: ignore[misc]
