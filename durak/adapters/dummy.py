"""
Dummy adapter for the Durak engine, used for testing and simulation.

This module provides a non-interactive adapter that can be used for automated
tests and spectator runs where no user interaction is needed.
"""

from typing import List, Dict, Any, Optional, Sequence, Union
from enum import Enum

from durak.adapters.base import PlatformAdapter
from durak.common.card import Card


class DummyAdapter(PlatformAdapter):
    """
    Dummy adapter for testing and simulation.

    This adapter doesn't interact with any real platform. Card choices come
    from scripted lists, then from an optional strategy function, and finally
    default to the first selectable card (or a decline when nothing is
    selectable).
    """

    def __init__(
        self,
        auto_choices: Optional[Dict[str, List[Union[int, str]]]] = None,
        strategy_function: Optional[callable] = None,
        player_counts: Optional[List[Union[int, str]]] = None,
        verbose: bool = False,
    ):
        """
        Initialize the dummy adapter.

        Args:
            auto_choices: Optional dictionary mapping player names to lists of
                          raw selections to return in sequence
            strategy_function: Optional function that takes (player_name, cards,
                               selectable) and returns a selection
            player_counts: Raw answers to return for the player count question
            verbose: Whether to print events to stdout (useful for debugging)
        """
        self.auto_choices = auto_choices or {}
        self.strategy_function = strategy_function
        self.player_counts = list(player_counts or [])
        self.verbose = verbose

        # Track choice index for each player
        self.choice_index = {}

        # Track events, prompts and rejections for later inspection
        self.events = []
        self.rendered_states = []
        self.requests = []
        self.invalid_selections = []

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Store the game state for later inspection.

        Args:
            state: The current game state
        """
        self.rendered_states.append(state)

        if self.verbose:
            print(f"\n=== Round {state.get('round_number')} ({state.get('stage')}) ===")
            for player in state.get("players", []):
                print(f"{player.get('name')}: {' '.join(player.get('cards', []))}")
            for pair in state.get("table", []):
                print(f"     {pair['attack']} X {pair['defense'] or '_'}")

    async def request_card_choice(
        self,
        player_name: str,
        prompt: str,
        cards: List[Card],
        selectable: Sequence[int],
        decline_label: str,
    ) -> Union[int, str]:
        """
        Return a scripted selection or pick one with the strategy function.
        """
        self.requests.append(
            {
                "player": player_name,
                "prompt": prompt,
                "cards": list(cards),
                "selectable": list(selectable),
                "decline_label": decline_label,
            }
        )

        if player_name not in self.choice_index:
            self.choice_index[player_name] = 0

        scripted = self.auto_choices.get(player_name, [])
        if self.choice_index[player_name] < len(scripted):
            choice = scripted[self.choice_index[player_name]]
            self.choice_index[player_name] += 1
        elif self.strategy_function:
            choice = self.strategy_function(player_name, cards, selectable)
        else:
            choice = selectable[0] if selectable else 0

        if self.verbose:
            print(f"{player_name} chooses {choice} ({prompt})")

        return choice

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Store the event for later inspection.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        self.events.append((event_type_str, data))

        if self.verbose:
            print(f"Event: {event_type_str}")
            for key, value in data.items():
                print(f"  {key}: {value}")

    async def notify_invalid_selection(self, player_name: str, message: str) -> None:
        self.invalid_selections.append((player_name, message))

    async def request_player_count(
        self, minimum: int, maximum: int
    ) -> Union[int, str]:
        if self.player_counts:
            return self.player_counts.pop(0)
        return minimum

    def get_events_by_type(self, event_type: Union[str, Enum]) -> List[Dict[str, Any]]:
        """
        Get all events of a specific type.

        Args:
            event_type: The type of events to retrieve

        Returns:
            A list of event data dictionaries
        """
        event_type_str = event_type.name if isinstance(event_type, Enum) else event_type
        return [data for typ, data in self.events if typ == event_type_str]
