"""
Move selection for Durak players.

`Strategy` is the one capability every seat has: pick an attack, a defense
or a throw-in for a `MoveRequest`, or decline with `NO_CARD`. There are two
variants. `AutomatedStrategy` plays the lowest-weight legal card.
`HumanStrategy` asks a platform adapter and keeps asking until it gets a
selection it can accept, so the round engine only ever sees a legal card or a
decline.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple, Union, TYPE_CHECKING
import logging

from durak.common.card import Card, NO_CARD, Suit
from durak.game.constants import TRUMP_BONUS
from durak.game.errors import InvalidSelectionError

if TYPE_CHECKING:
    from durak.adapters.base import PlatformAdapter

logger = logging.getLogger(__name__)


class MoveKind(Enum):
    """The three decisions a player can be asked for."""

    ATTACK = "attack"
    DEFENSE = "defense"
    THROWIN = "throw-in"

    @property
    def decline_label(self) -> str:
        """What declining means for this decision."""
        return {
            MoveKind.ATTACK: "pass",
            MoveKind.DEFENSE: "take cards",
            MoveKind.THROWIN: "skip",
        }[self]


@dataclass(frozen=True)
class MoveRequest:
    """
    Everything a strategy may look at when choosing a move.

    Attributes:
        kind: Attack, defense or throw-in
        player: Name of the player asked to move
        hand: The player's hand in selection order
        legal: The cards of `hand` the rules allow for this move
        trump: The trump suit
        table: Attack/defense pairs on the table
        attack_card: The attack to beat (defense only)
        defender_cards: Number of cards the defender holds
    """

    kind: MoveKind
    player: str
    hand: Tuple[Card, ...]
    legal: Tuple[Card, ...]
    trump: Suit
    table: Tuple[Tuple[Card, Optional[Card]], ...] = ()
    attack_card: Card = NO_CARD
    defender_cards: int = 0

    @property
    def selectable(self) -> Tuple[int, ...]:
        """1-based positions in `hand` that hold a legal card."""
        legal = set(self.legal)
        return tuple(i + 1 for i, card in enumerate(self.hand) if card in legal)


def card_weight(card: Card, trump: Suit) -> int:
    """
    Heuristic value of a card: its rank, lifted above every non-trump when it
    is a trump.

    >>> from durak.common.card import Rank
    >>> card_weight(Card(Suit.HEARTS, Rank.ACE), Suit.SPADES)
    14
    >>> card_weight(Card(Suit.SPADES, Rank.SIX), Suit.SPADES)
    20
    """
    weight = card.rank.rank_value
    if card.is_trump(trump):
        weight += TRUMP_BONUS
    return weight


def lowest_weight_card(cards: Iterable[Card], trump: Suit) -> Card:
    """The minimum-weight card, lowest suit index on ties, or `NO_CARD`."""
    return min(
        cards,
        key=lambda card: (card_weight(card, trump), card.suit.index),
        default=NO_CARD,
    )


class Strategy(ABC):
    """
    Chooses moves for one player.

    Every method returns a card from `request.legal` or `NO_CARD`.
    """

    @abstractmethod
    async def select_attack(self, request: MoveRequest) -> Card:
        """Open the round. `NO_CARD` passes the attack on."""
        pass

    @abstractmethod
    async def select_defense(self, request: MoveRequest) -> Card:
        """Beat `request.attack_card`. `NO_CARD` takes the table."""
        pass

    @abstractmethod
    async def select_throwin(self, request: MoveRequest) -> Card:
        """Add a same-rank attack. `NO_CARD` skips."""
        pass

    async def select(self, request: MoveRequest) -> Card:
        """Dispatch on `request.kind`."""
        if request.kind is MoveKind.ATTACK:
            return await self.select_attack(request)
        if request.kind is MoveKind.DEFENSE:
            return await self.select_defense(request)
        return await self.select_throwin(request)


class AutomatedStrategy(Strategy):
    """Always plays the cheapest legal card."""

    async def select_attack(self, request: MoveRequest) -> Card:
        return lowest_weight_card(request.legal, request.trump)

    async def select_defense(self, request: MoveRequest) -> Card:
        return lowest_weight_card(request.legal, request.trump)

    async def select_throwin(self, request: MoveRequest) -> Card:
        return lowest_weight_card(request.legal, request.trump)

    def __repr__(self) -> str:
        return "AutomatedStrategy()"


class HumanStrategy(Strategy):
    """
    Moves chosen by a person through a platform adapter.

    The adapter returns a 1-based index into the hand, or 0 to decline.
    Anything else is rejected, reported back to the adapter and asked again.
    """

    def __init__(self, adapter: "PlatformAdapter"):
        self.adapter = adapter

    async def select_attack(self, request: MoveRequest) -> Card:
        return await self._ask(request, "Choose a card to attack")

    async def select_defense(self, request: MoveRequest) -> Card:
        return await self._ask(request, f"Choose a card to beat {request.attack_card}")

    async def select_throwin(self, request: MoveRequest) -> Card:
        return await self._ask(request, "Choose a card to throw in")

    async def _ask(self, request: MoveRequest, prompt: str) -> Card:
        while True:
            choice = await self.adapter.request_card_choice(
                player_name=request.player,
                prompt=prompt,
                cards=list(request.hand),
                selectable=list(request.selectable),
                decline_label=request.kind.decline_label,
            )
            try:
                return self.resolve_choice(request, choice)
            except InvalidSelectionError as exc:
                logger.debug(
                    "Rejected selection %r from %s: %s", choice, request.player, exc
                )
                await self.adapter.notify_invalid_selection(request.player, str(exc))

    @staticmethod
    def resolve_choice(request: MoveRequest, choice: Union[int, str]) -> Card:
        """
        Turn a raw selection into a legal card or `NO_CARD`.

        Raises:
            InvalidSelectionError: If the choice is not a number, out of range,
                or points at a card that cannot be played now.
        """
        try:
            index = int(choice)
        except (TypeError, ValueError) as exc:
            raise InvalidSelectionError(f"{choice!r} is not a card number") from exc

        if index == 0:
            return NO_CARD
        if not 1 <= index <= len(request.hand):
            raise InvalidSelectionError(
                f"Choose a number between 1 and {len(request.hand)}, or 0 to "
                f"{request.kind.decline_label}"
            )
        card = request.hand[index - 1]
        if card not in request.legal:
            raise InvalidSelectionError(f"{card} cannot be played now")
        return card

    def __repr__(self) -> str:
        return f"HumanStrategy({self.adapter!r})"
