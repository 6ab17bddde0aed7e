"""Command-line entry point for mpdctrl."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from dataclasses import fields
from enum import Enum

from mpdctrl.api import MpdClient, MpdError
from mpdctrl.api.protocol import parse_queue, parse_song, parse_songs
from mpdctrl.core.config import ConfigManager
from mpdctrl.models.server import MpdServer

logger = logging.getLogger(__name__)

COMMANDS = (
    "queue",
    "status",
    "stats",
    "currentsong",
    "playlists",
    "listplaylist",
    "load",
    "clear",
)
_NAMED_COMMANDS = ("listplaylist", "load")


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mpdctrl",
        description="mpdctrl - Music Player Daemon client",
    )
    parser.add_argument("command", choices=COMMANDS, help="command to run")
    parser.add_argument("name", nargs="?", default=None, help="stored playlist name")
    parser.add_argument("--host", default=None, help="MPD hostname or IP")
    parser.add_argument("--port", type=int, default=None, help="TCP port (default: 6600)")
    parser.add_argument("--timeout", type=float, default=None, help="read timeout in seconds")
    parser.add_argument("--save", action="store_true", help="remember host, port and timeout")
    parser.add_argument("-v", "--verbose", action="store_true", help="enable debug logging")
    return parser


def resolve_server(args: argparse.Namespace, config: ConfigManager) -> MpdServer:
    """Merge command line options over the saved configuration."""
    saved = config.get_server()
    return MpdServer(
        host=args.host or saved.host,
        port=args.port if args.port is not None else saved.port,
        timeout=args.timeout if args.timeout is not None else saved.timeout,
    )


def _print_record(record: object) -> None:
    for f in fields(record):  # type: ignore[arg-type]
        value = getattr(record, f.name)
        if value is None:
            continue
        if isinstance(value, Enum):
            value = value.value
        print(f"{f.name}: {value}")


async def run_command(client: MpdClient, command: str, name: str | None) -> None:
    """Run one command on a connected client and print the result."""
    if command == "queue":
        for entry in parse_queue(await client.playlist()):
            print(f"{entry.pos}: {entry.file}")
    elif command == "status":
        _print_record(await client.status())
    elif command == "stats":
        _print_record(await client.stats())
    elif command == "currentsong":
        lines = await client.currentsong()
        if lines:
            song = parse_song(lines)
            print(f"{song.display_artist} - {song.display_title}")
    elif command == "playlists":
        for playlist in await client.listplaylists():
            print(playlist.name)
    elif command == "listplaylist":
        assert name is not None
        for song in parse_songs(await client.listplaylist(name)):
            print(song.file)
    elif command == "load":
        assert name is not None
        await client.load(name)
    elif command == "clear":
        await client.clear()


async def _run(server: MpdServer, command: str, name: str | None) -> None:
    async with MpdClient(server.host, server.port, server.timeout) as client:
        await run_command(client, command, name)


def main(argv: Sequence[str] | None = None) -> int:
    """Run the mpdctrl command line.

    Returns:
        Exit code (0 for success).
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command in _NAMED_COMMANDS and not args.name:
        parser.error(f"{args.command} needs a playlist name")

    config = ConfigManager()
    server = resolve_server(args, config)
    if args.save:
        config.save_server(server)
        config.sync()

    try:
        asyncio.run(_run(server, args.command, args.name))
    except MpdError as e:
        logger.error("%s failed on %s: %s", args.command, server.address, e)
        return 1
    except ValueError as e:
        logger.error("Invalid argument: %s", e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
