"""
Base engine class for the Durak package.

This module provides the abstract base class for game engines. It defines the
common interface an engine offers to a platform: lifecycle, seating players,
starting a game and rendering its state.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any

from durak.adapters import PlatformAdapter
from durak.events import EventBus


class GameEngine(ABC):
    """
    Abstract base class for game engines.

    This class defines the common interface that game engines must implement,
    providing methods for starting games, seating players and managing the
    game state.
    """

    def __init__(self, adapter: PlatformAdapter, config: Dict[str, Any] = None):
        """
        Initialize the engine.

        Args:
            adapter: Platform adapter to use for rendering and input
            config: Configuration options for the game
        """
        self.adapter = adapter
        self.config = config or {}
        self.event_bus = EventBus.get_instance()
        self.state = None

    @abstractmethod
    async def initialize(self) -> None:
        """
        Initialize the engine and prepare for a game.
        """
        await self.adapter.initialize()

    @abstractmethod
    async def shutdown(self) -> None:
        """
        Shut down the engine and clean up resources.
        """
        await self.adapter.shutdown()

    @abstractmethod
    async def start_game(self) -> None:
        """
        Start a new game.
        """
        pass

    @abstractmethod
    async def add_player(self, name: str, human: bool = False) -> str:
        """
        Add a player to the game.

        Args:
            name: Name of the player
            human: Whether the player's moves come from the adapter

        Returns:
            ID of the added player
        """
        pass

    @abstractmethod
    async def render_state(self) -> None:
        """
        Render the current game state.
        """
        pass
