"""
Durak card game engine implementation.

This module provides the DurakEngine class, which implements the GameEngine
interface for the game of Durak: it seats the players, wires the match to the
platform adapter and runs the match to its result.
"""

from typing import Dict, Any, List, Optional, Tuple, Union
from enum import Enum
import logging
import time

from durak.adapters import PlatformAdapter
from durak.engine.base import GameEngine
from durak.events import EngineEventType
from durak.game.constants import MAX_PLAYERS, MIN_PLAYERS
from durak.game.errors import ConfigurationError, DurakError
from durak.game.match import Match
from durak.game.state import GameSnapshot, MatchResult, Player
from durak.game.strategy import AutomatedStrategy, HumanStrategy

logger = logging.getLogger(__name__)

AI_NAMES = ("Ai1", "Ai2", "Ai3")


class DurakEngine(GameEngine):
    """
    Engine implementation for the Durak card game.

    One human seat plays against up to three automated seats. With
    `ai_as_human` set the human seat is automated as well, which turns the
    run into a spectator game.

    Every event published by the match is relayed to the adapter through
    `notify_game_event` before the snapshot taken after it is rendered.
    """

    def __init__(self, adapter: PlatformAdapter, config: Dict[str, Any] = None):
        """
        Initialize the Durak engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the game

        Raises:
            ConfigurationError: If the player count is outside 2..4
        """
        super().__init__(adapter, config)

        # Apply default configuration
        default_config = {
            "num_players": MIN_PLAYERS,
            "ai_as_human": False,
            "seed": None,
            "human_name": "Hum",
        }

        # Merge with provided config
        if config:
            default_config.update(config)

        self.config = default_config
        self.validate_config(self.config)

        self.players: List[Player] = []
        self.match: Optional[Match] = None
        self.result: Optional[MatchResult] = None

        self._pending_events: List[Tuple[Union[str, Enum], Dict[str, Any]]] = []
        self._unsubscribe = None

    @staticmethod
    def validate_config(config: Dict[str, Any]) -> None:
        num_players = config.get("num_players")
        if (
            isinstance(num_players, bool)
            or not isinstance(num_players, int)
            or not MIN_PLAYERS <= num_players <= MAX_PLAYERS
        ):
            raise ConfigurationError(
                f"num_players must be between {MIN_PLAYERS} and {MAX_PLAYERS}, "
                f"got {num_players!r}"
            )
        if not config.get("human_name"):
            raise ConfigurationError("human_name must not be empty")

    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for a game.
        """
        await super().initialize()

        self._unsubscribe = self.event_bus.on_any(self._queue_event)

        # Emit initialization event
        self.event_bus.emit(
            EngineEventType.ENGINE_INIT,
            {
                "engine_type": "durak",
                "config": dict(self.config),
                "timestamp": time.time(),
            },
        )

    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        # Emit shutdown event
        self.event_bus.emit(EngineEventType.ENGINE_SHUTDOWN, {"timestamp": time.time()})
        await self._flush_events()

        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

        await super().shutdown()

    async def add_player(self, name: str, human: bool = False) -> str:
        """
        Seat a player.

        Args:
            name: Name of the player
            human: Whether the player's moves come from the adapter

        Returns:
            ID of the added player
        """
        if self.match is not None:
            raise ConfigurationError("Players cannot join a game in progress")
        if len(self.players) >= MAX_PLAYERS:
            raise ConfigurationError(f"At most {MAX_PLAYERS} players can sit down")

        strategy = HumanStrategy(self.adapter) if human else AutomatedStrategy()
        player = Player(name=name, strategy=strategy)
        self.players.append(player)

        self.event_bus.emit(
            EngineEventType.PLAYER_JOINED,
            {"player_id": player.id, "player": name, "human": human},
        )
        return player.id

    async def seat_default_players(self) -> None:
        """The human seat first, then as many automated seats as configured."""
        await self.add_player(
            self.config["human_name"], human=not self.config["ai_as_human"]
        )
        for name in AI_NAMES[: self.config["num_players"] - 1]:
            await self.add_player(name)

    async def start_game(self) -> None:
        """
        Create the match. Seats the default roster if nobody has joined yet.
        """
        if not self.players:
            await self.seat_default_players()

        self.match = Match(
            self.players,
            seed=self.config.get("seed"),
            emitter=self.event_bus,
            renderer=self._render_snapshot,
        )
        self.state = self.match.snapshot()
        await self.render_state()

    async def run(self) -> MatchResult:
        """
        Play a whole game and return its result.

        Raises:
            DurakError: If the match breaks a rule; an ERROR event is emitted first
        """
        if self.match is None:
            await self.start_game()

        try:
            self.result = await self.match.run()
        except DurakError as exc:
            logger.error("Match aborted: %s", exc)
            self.event_bus.emit(
                EngineEventType.ERROR,
                {"game_id": self.match.id, "message": str(exc)},
            )
            await self._flush_events()
            raise

        await self._flush_events()
        return self.result

    async def render_state(self) -> None:
        """
        Render the current game state.
        """
        if self.match is None:
            return
        await self._render_snapshot(self.match.snapshot())

    async def _render_snapshot(self, snapshot: GameSnapshot) -> None:
        self.state = snapshot
        await self._flush_events()
        await self.adapter.render_game_state(snapshot.to_dict())

    def _queue_event(self, event: Tuple[Union[str, Enum], Dict[str, Any]]) -> None:
        # Listeners are synchronous; the adapter is awaited on the next render
        self._pending_events.append(event)

    async def _flush_events(self) -> None:
        while self._pending_events:
            event_type, data = self._pending_events.pop(0)
            await self.adapter.notify_game_event(event_type, data)
