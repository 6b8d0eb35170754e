"""
Command-line interface adapter for the Durak engine.

This module provides an adapter for console-based play: it prints the round
header, the stock, every hand and the table, and reads card numbers typed by
the human seat.
"""

from typing import List, Dict, Any, Optional, Sequence, Union
from enum import Enum

from durak.adapters.base import PlatformAdapter
from durak.common.card import Card
from durak.common.io_interface import IOInterface, ConsoleIOInterface

TABLE_INDENT = " " * 5


class CLIAdapter(PlatformAdapter):
    """
    Command-line interface adapter for the Durak engine.

    This adapter uses an IOInterface for input/output, providing a simple
    text-based interface to the game. Selections are returned as typed; the
    human strategy decides whether they are acceptable.
    """

    def __init__(self, io_interface: Optional[IOInterface] = None):
        """
        Initialize the CLI adapter.

        Args:
            io_interface: Optional IOInterface to use for I/O. If None, a default
                          console IOInterface will be created.
        """
        self.io_interface = io_interface or ConsoleIOInterface()
        self._last_view: Optional[List[str]] = None

    async def _output(self, message: str) -> None:
        await self.io_interface.output_async(message)

    async def render_game_state(self, state: Dict[str, Any]) -> None:
        """
        Render the current game state to the console.

        A fresh round shows the header, the stock and every hand; once cards
        are on the table only the attack/defense pairs are shown. A view that
        is identical to the previous one is not printed again.

        Args:
            state: The current game state
        """
        lines = self.format_state(state)
        if not lines or lines == self._last_view:
            return
        self._last_view = lines
        for line in lines:
            await self._output(line)

    def format_state(self, state: Dict[str, Any]) -> List[str]:
        """Lines describing `state`, or an empty list when there is nothing new."""
        table = state.get("table", [])
        if table:
            lines = []
            for pair in table:
                line = f"{TABLE_INDENT}{pair['attack']}"
                if pair.get("defense"):
                    line += f" X {pair['defense']}"
                lines.append(line)
            return lines

        if state.get("stage") != "ATTACK" or not state.get("attacker"):
            return []

        header = (
            f"{'~' * 5} ROUND: {state.get('round_number')} "
            f"{state.get('attacker')} -> {state.get('defender')} {'~' * 5}"
        )
        lines = [
            "",
            header,
            "",
            f"Deck: {state.get('trump_card')} {state.get('deck_remaining')}",
            "Hands:",
        ]
        for player in state.get("players", []):
            lines.append(f"{player['name']}: {' '.join(player.get('cards', []))}")
        lines.append("")
        return lines

    async def request_card_choice(
        self,
        player_name: str,
        prompt: str,
        cards: List[Card],
        selectable: Sequence[int],
        decline_label: str,
    ) -> Union[int, str]:
        """
        Show the hand with the selectable positions marked and read a number.

        Args:
            player_name: Display name of the player
            prompt: What the player is choosing
            cards: The player's hand in selection order
            selectable: 1-based positions of the cards that may be chosen
            decline_label: What choosing 0 means

        Returns:
            The raw text the player typed
        """
        await self._output(f"{player_name}: {' '.join(str(c) for c in cards)}")
        await self._output(self.highlight_line(player_name, cards, selectable))
        question = f"{prompt} (1 - {len(cards)}, 0 - {decline_label}): "
        answer = await self.io_interface.input_async(question)
        return answer.strip()

    @staticmethod
    def highlight_line(
        player_name: str, cards: List[Card], selectable: Sequence[int]
    ) -> str:
        """
        Marker row aligned under the hand: `^N` for a selectable position and
        `^.` for the rest.
        """
        allowed = set(selectable)
        markers = []
        for position, card in enumerate(cards, start=1):
            mark = f"^{position}" if position in allowed else "^."
            markers.append(mark.ljust(len(str(card))))
        return " " * (len(player_name) + 2) + " ".join(markers)

    async def notify_invalid_selection(self, player_name: str, message: str) -> None:
        await self._output(f"That card cannot be chosen, try again! ({message})")

    async def request_player_count(
        self, minimum: int, maximum: int
    ) -> Union[int, str]:
        answer = await self.io_interface.input_async(
            f"Enter the number of players ({minimum}-{maximum}): "
        )
        return answer.strip()

    async def notify_game_event(
        self, event_type: Union[str, Enum], data: Dict[str, Any]
    ) -> None:
        """
        Notify the user of a game event via the console.

        Args:
            event_type: The type of event that occurred
            data: Data associated with the event
        """
        # Convert enum to string if necessary
        if isinstance(event_type, Enum):
            event_type = event_type.name

        message = self._format_event_message(event_type, data)
        if message:
            await self._output(message)

    def _format_event_message(
        self, event_type: str, data: Dict[str, Any]
    ) -> Optional[str]:
        """
        Format an event message based on the event type.

        Args:
            event_type: The type of event
            data: Data associated with the event

        Returns:
            Formatted message string or None if no message needed
        """
        player = data.get("player", "Unknown Player")

        if event_type == "GAME_STARTED":
            return (
                f"Trump: {data.get('trump_card')}. "
                f"First to move: {data.get('first_attacker')}"
            )

        elif event_type in ("ATTACK_PLAYED", "DEFENSE_PLAYED", "CARD_THROWN_IN"):
            return f"-> {player}: {data.get('card')}"

        elif event_type == "ATTACK_PASSED":
            return f"{player} passes the attack."

        elif event_type == "CARDS_TAKEN":
            # Table lines are gone after a take, so show what was picked up
            cards = " ".join(data.get("cards", []))
            return f"{player}: cannot defend, takes the cards. ({cards})"

        elif event_type == "CARDS_DISCARDED":
            return (
                f"{data.get('defender')}: defended successfully, "
                "cards go to the discard pile."
            )

        elif event_type == "PLAYER_ELIMINATED":
            return f"{player} has no cards left and is out of the game."

        elif event_type == "GAME_ENDED":
            if data.get("draw"):
                return "The game ended in a draw!"
            return f"{data.get('loser')}: lost and remains the durak!"

        elif event_type == "ERROR":
            return f"Error: {data.get('message')}"

        # Default fallback
        return None
