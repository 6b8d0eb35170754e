"""
Base adapter interface for the Durak engine.

This module defines the interface that platform-specific adapters must implement
to interact with the Durak engine.
"""

from abc import ABC, abstractmethod
from typing import List, Dict, Any, Sequence, Union
from enum import Enum

from durak.common.card import Card


class PlatformAdapter(ABC):
    """
    Base interface for platform-specific adapters.

    An adapter renders match snapshots, relays engine events and collects the
    choices of a human seat. It never decides whether a choice is legal; the
    human strategy validates whatever the adapter returns and asks again on a
    bad selection.
    """

    @abstractmethod
    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current game state to the platform.

        Args:
            state: Snapshot dictionary (deck, trump, hands, table, turn, round)
        """
        pass

    @abstractmethod
    async def request_card_choice(
        self,
        player_name: str,
        prompt: str,
        cards: List[Card],
        selectable: Sequence[int],
        decline_label: str,
    ) -> Union[int, str]:
        """
        Ask a player to pick a card.

        Args:
            player_name: Display name of the player
            prompt: What the player is choosing
            cards: The player's hand in selection order
            selectable: 1-based positions of the cards that may be chosen
            decline_label: What choosing 0 means (take cards, pass, skip)

        Returns:
            The raw selection: a 1-based position, or 0 to decline
        """
        pass

    @abstractmethod
    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the platform of a game event.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        pass

    async def notify_invalid_selection(self, player_name: str, message: str) -> None:
        """
        Tell a player their last selection was rejected.

        Args:
            player_name: Display name of the player
            message: Why the selection was rejected
        """
        pass

    async def request_player_count(
        self, minimum: int, maximum: int
    ) -> Union[int, str]:
        """
        Ask how many players should sit at the table.

        Returns:
            The raw answer; the caller validates it and asks again if needed
        """
        return minimum

    # The following methods have default implementations but can be overridden

    async def initialize(self) -> None:
        """
        Initialize the adapter.

        This method is called when the adapter is first connected to the engine.
        """
        pass

    async def shutdown(self) -> None:
        """
        Shutdown the adapter.

        This method is called when the engine is shutting down.
        """
        pass
