"""Configuration manager using QSettings for persistent storage."""

import logging

from PySide6.QtCore import QSettings

from mpdctrl.models.server import DEFAULT_HOST, DEFAULT_PORT, DEFAULT_TIMEOUT, MpdServer

logger = logging.getLogger(__name__)

# MPD
_KEY_MPD_HOST = "mpd/host"
_KEY_MPD_PORT = "mpd/port"
_KEY_MPD_TIMEOUT = "mpd/timeout"


class ConfigManager:
    """Wrapper around QSettings for type-safe config access.

    QSettings stores config in platform-specific locations:
    - Windows: HKEY_CURRENT_USER\\Software\\mpdctrl\\mpdctrl
    - macOS: ~/Library/Preferences/com.mpdctrl.mpdctrl.plist
    - Linux: ~/.config/mpdctrl/mpdctrl.conf

    Example:
        config = ConfigManager()
        server = config.get_server()
        config.save_server(MpdServer("music.local"))
    """

    def __init__(self, organization: str = "mpdctrl", application: str = "mpdctrl") -> None:
        """Initialize the config manager.

        Args:
            organization: Organization name for QSettings.
            application: Application name for QSettings.
        """
        self._settings = QSettings(organization, application)

    # -- MPD settings ----------------------------------------------------------

    def get_mpd_host(self) -> str:
        """Return the MPD host.

        Returns:
            Host string (default "localhost").
        """
        value = self._settings.value(_KEY_MPD_HOST, DEFAULT_HOST, str)
        return str(value) if value else DEFAULT_HOST

    def set_mpd_host(self, host: str) -> None:
        """Set the MPD host.

        Args:
            host: Hostname or IP.
        """
        self._settings.setValue(_KEY_MPD_HOST, host)

    def get_mpd_port(self) -> int:
        """Return the MPD port.

        Returns:
            Port number (default 6600).
        """
        value = self._settings.value(_KEY_MPD_PORT, DEFAULT_PORT, int)
        return max(1, min(65535, int(value)))  # type: ignore[arg-type]

    def set_mpd_port(self, port: int) -> None:
        """Set the MPD port.

        Args:
            port: Port number (1-65535).
        """
        self._settings.setValue(_KEY_MPD_PORT, max(1, min(65535, port)))

    def get_mpd_timeout(self) -> float:
        """Return the MPD connect/read timeout in seconds.

        Returns:
            Timeout in seconds (default 5).
        """
        value = self._settings.value(_KEY_MPD_TIMEOUT, DEFAULT_TIMEOUT, float)
        return max(1.0, min(60.0, float(value)))  # type: ignore[arg-type]

    def set_mpd_timeout(self, seconds: float) -> None:
        """Set the MPD connect/read timeout.

        Args:
            seconds: Timeout in seconds (1-60).
        """
        self._settings.setValue(_KEY_MPD_TIMEOUT, max(1.0, min(60.0, seconds)))

    def get_server(self) -> MpdServer:
        """Return the configured MPD server."""
        return MpdServer(
            host=self.get_mpd_host(),
            port=self.get_mpd_port(),
            timeout=self.get_mpd_timeout(),
        )

    def save_server(self, server: MpdServer) -> None:
        """Persist an MPD server as the configured one.

        Args:
            server: Server to save.
        """
        self.set_mpd_host(server.host)
        self.set_mpd_port(server.port)
        self.set_mpd_timeout(server.timeout)
        logger.debug("Saved MPD server %s", server.address)

    # -- General settings ------------------------------------------------------

    def clear(self) -> None:
        """Clear all settings (useful for testing or reset)."""
        self._settings.clear()

    def sync(self) -> None:
        """Force settings to be written to disk."""
        self._settings.sync()
