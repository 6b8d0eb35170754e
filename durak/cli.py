"""
Console entry point: play Durak against up to three automated opponents, or
watch four automated seats play each other with `--spectate`.
"""

import argparse
import asyncio
import logging
import sys
from typing import List, Optional

from durak.adapters import CLIAdapter, PlatformAdapter
from durak.common.io_interface import (
    ConsoleIOInterface,
    IOInterface,
    TranscriptIOInterface,
)
from durak.engine import DurakEngine
from durak.events import EngineEventType
from durak.game.constants import MAX_PLAYERS, MIN_PLAYERS
from durak.game.state import MatchResult

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None):
    parser = argparse.ArgumentParser(description="Play a game of Durak.")
    parser.add_argument(
        "-p",
        "--players",
        type=int,
        default=None,
        help=f"number of players, {MIN_PLAYERS}-{MAX_PLAYERS} (asked if omitted)",
    )
    parser.add_argument(
        "--spectate",
        action="store_true",
        help="let an automated player take the human seat",
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="seed for the shuffle (default: random)"
    )
    parser.add_argument(
        "--name", default="Hum", help="name of the human seat (default: Hum)"
    )
    parser.add_argument(
        "--transcript",
        default=None,
        help="also append everything shown on screen to this file",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging level (default: WARNING)",
    )
    return parser.parse_args(argv)


async def ask_player_count(adapter: PlatformAdapter) -> int:
    """Ask through the adapter until the answer is a number in range."""
    while True:
        answer = await adapter.request_player_count(MIN_PLAYERS, MAX_PLAYERS)
        try:
            count = int(answer)
        except (TypeError, ValueError):
            count = None
        if count is not None and MIN_PLAYERS <= count <= MAX_PLAYERS:
            return count
        logger.debug("Rejected player count %r", answer)
        await adapter.notify_game_event(
            EngineEventType.ERROR,
            {"message": f"Enter a number from {MIN_PLAYERS} to {MAX_PLAYERS}"},
        )


async def main(
    argv: Optional[List[str]] = None, io_interface: Optional[IOInterface] = None
) -> MatchResult:
    args = parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    io_interface = io_interface or ConsoleIOInterface()
    if args.transcript:
        io_interface = TranscriptIOInterface(io_interface, args.transcript)
    adapter = CLIAdapter(io_interface)

    num_players = args.players
    if num_players is None or not MIN_PLAYERS <= num_players <= MAX_PLAYERS:
        num_players = await ask_player_count(adapter)

    engine = DurakEngine(
        adapter,
        {
            "num_players": num_players,
            "ai_as_human": args.spectate,
            "seed": args.seed,
            "human_name": args.name,
        },
    )
    await engine.initialize()
    try:
        result = await engine.run()
    finally:
        await engine.shutdown()
    return result


def run() -> None:
    try:
        asyncio.run(main())
    except (KeyboardInterrupt, EOFError):
        print()
        sys.exit(130)


if __name__ == "__main__":
    run()
