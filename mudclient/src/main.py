#!/usr/bin/env python3
"""
Main entry point for the MUD client (terminal, or a window with --gui).
"""

import asyncio
import sys

from mudclient.src.mud_client import main


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
