"""Exceptions raised by the MPD client.

All exceptions derive from :class:`MpdError`, so callers that only care
about "something went wrong talking to MPD" can catch that one type.
"""


class MpdError(Exception):
    """Base class for MPD client errors."""


# -- Connection ---------------------------------------------------------------


class MpdConnectionError(MpdError):
    """Failed to connect to MPD server, or not connected."""


class MpdUnreachableError(MpdConnectionError):
    """The TCP connection could not be established."""


class MpdHandshakeError(MpdConnectionError):
    """The server did not send a valid ``OK MPD`` greeting."""


# -- Protocol -----------------------------------------------------------------


class MpdProtocolError(MpdError):
    """A command/response exchange failed."""


class MpdWriteError(MpdProtocolError):
    """The command could not be sent."""


class MpdCommandError(MpdProtocolError):
    """The server answered a command with an ACK line.

    Attributes:
        code: MPD error code (e.g. 50 for "no such file"), 0 if unknown.
        list_num: Index of the failing command within a command list.
        command: Name of the command that failed.
        message: Error text sent by the server.
    """

    def __init__(self, code: int, command: str, message: str, list_num: int = 0) -> None:
        self.code = code
        self.list_num = list_num
        self.command = command
        self.message = message
        super().__init__(f"MPD error {code} in {command}: {message}")


class MpdTruncatedError(MpdProtocolError):
    """The stream ended or timed out before the ``OK`` line.

    The connection is out of sync afterwards and must be closed.
    """


# -- Decoding -----------------------------------------------------------------


class MpdDecodeError(MpdError):
    """A successful response could not be decoded."""


class MpdMissingFieldError(MpdDecodeError):
    """A field the caller requires is absent from the response."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Required field missing from MPD response: {field}")


class MpdParseError(MpdDecodeError, ValueError):
    """A value is not one of the allowed protocol values."""

    def __init__(self, kind: str, value: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"Invalid {kind} value: {value!r}")
