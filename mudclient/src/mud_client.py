"""
Console MUD client.

Minimal terminal front end for a session:
- Reads input lines from stdin and feeds them through the line editor
- Prints game output and advisories to stdout
- Handles the local slash commands (/connect, /password, /quit, ...)
"""

import argparse
import asyncio
import getpass
import sys
from pathlib import Path
from typing import List, Optional

from .commands import LocalCommands
from .config import ClientConfig, reload_config
from .core.event_bus import Event, EventType
from .errors import CapabilityUnavailable
from .logging_config import get_logger, setup_logging
from .session import Session
from .ui.display import NOTICE, ConsoleDisplay
from .window_client import WindowClient

logger = get_logger(__name__)


class ConsoleClient:
    """Drives a Session from a terminal."""

    def __init__(self, config: ClientConfig):
        self.display = ConsoleDisplay()
        self.session = Session(config, display=self.display)
        self.local = LocalCommands(self.session, on_quit=self.stop)
        self.running = True

        self.session.event_bus.subscribe(EventType.NOTIFICATION_SHOWN, self._on_notification)

    def stop(self) -> None:
        self.running = False

    def _on_notification(self, event: Event) -> None:
        self.display.show(event.data["text"], NOTICE)
        # Nobody can click a console advisory; it has been seen once printed.
        # Dismissing inside the show event would nest the next show, so dismiss
        # callbacks would run newest first.
        asyncio.get_running_loop().call_soon(self._dismiss_if_active, event.data["id"])

    def _dismiss_if_active(self, item_id: int) -> None:
        active = self.session.notifications.active
        if active is not None and active.id == item_id:
            self.session.notifications.dismiss()

    # -- main loop ---------------------------------------------------------

    async def read_line(self) -> Optional[str]:
        """Read one line from the terminal, hidden when masked. None on EOF."""
        if self.session.input.is_masked:
            try:
                return await asyncio.to_thread(getpass.getpass, "")
            except EOFError:
                return None

        line = await asyncio.to_thread(sys.stdin.readline)
        if not line:
            return None
        return line.rstrip("\r\n")

    def handle_line(self, line: str) -> None:
        self.session.input.insert_text(line)
        self.local.submit_input()

    async def run(self, connect: bool = True) -> None:
        if connect:
            try:
                self.session.connect()
            except CapabilityUnavailable as e:
                logger.error(str(e))
                return

        try:
            while self.running:
                line = await self.read_line()
                if line is None:
                    break
                self.handle_line(line)
        finally:
            await self.session.shutdown()


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="MUD client over WebSocket")
    parser.add_argument("--config", type=Path, help="Path to a YAML config file")
    parser.add_argument("--host", help="Gateway host")
    parser.add_argument("--port", type=int, help="Game port behind the gateway")
    parser.add_argument("--ws-port", type=int, help="WebSocket gateway port")
    parser.add_argument("--policy-port", type=int, help="Gateway port used when --ws-port is unusable")
    parser.add_argument("--ws-path", help="WebSocket path")
    parser.add_argument("--ssl", action="store_true", default=None, help="Use wss://")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-file", type=Path, help="Also write logs to this file")
    parser.add_argument("--no-connect", action="store_true", help="Start without connecting")
    parser.add_argument("--gui", action="store_true", help="Open a window instead of using the terminal")
    parser.add_argument("--write-config", type=Path, help="Write the effective config and exit")
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> ClientConfig:
    config = reload_config(args.config)
    overrides = {
        "host": args.host,
        "port": args.port,
        "ws_port": args.ws_port,
        "policy_port": args.policy_port,
        "ws_path": args.ws_path,
        "ssl": args.ssl,
    }
    for key, value in overrides.items():
        if value is not None:
            setattr(config.socket, key, value)
    if args.log_level:
        config.debug.log_level = args.log_level
    return config


async def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    config = build_config(args)

    if args.write_config:
        path = config.save(args.write_config)
        print(f"Wrote {path}")
        return 0

    setup_logging(config.debug.log_level, args.log_file)
    client = WindowClient(config) if args.gui else ConsoleClient(config)
    await client.run(connect=not args.no_connect)
    return 0
