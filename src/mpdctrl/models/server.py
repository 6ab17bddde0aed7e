"""MPD server connection model."""

from dataclasses import dataclass

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 6600
DEFAULT_TIMEOUT = 5.0


@dataclass(frozen=True, slots=True)
class MpdServer:
    """Where and how to reach an MPD server.

    Attributes:
        host: Server hostname or IP address.
        port: TCP port (default 6600).
        timeout: Connect and read timeout in seconds.
    """

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    timeout: float = DEFAULT_TIMEOUT

    @property
    def address(self) -> str:
        """Return the server address (host:port)."""
        return f"{self.host}:{self.port}"
