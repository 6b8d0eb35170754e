"""
State models for the Durak card game.

`Player` is the live, mutable seat at the table. The snapshot classes are
immutable copies of the match state taken after every transition; they are
what adapters render and what event listeners may keep around.
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple, TYPE_CHECKING
from enum import Enum, auto
import uuid
import time

from durak.common.card import Card
from durak.common.hand import Hand

if TYPE_CHECKING:
    from durak.game.strategy import Strategy


class RoundStage(Enum):
    """Stages of a single attacker/defender exchange."""

    DEALING = auto()
    ATTACK = auto()
    DEFEND_OR_TAKE = auto()
    THROWIN = auto()
    RESOLVE = auto()
    REFILL = auto()
    ROTATE = auto()
    GAME_END = auto()


class PlayerRole(Enum):
    """A player's role for the current round."""

    ATTACKER = auto()
    CO_ATTACKER = auto()
    DEFENDER = auto()


class RoundOutcome(Enum):
    """How an exchange ended."""

    DEFENDED = auto()  # every attack beaten, table discarded
    TAKEN = auto()  # defender picked the table up
    PASSED = auto()  # attacker opened with no card


@dataclass(eq=False)
class Player:
    """
    A seat in the match.

    Attributes:
        name: Display name of the player
        strategy: Chooses this player's moves
        hand: Cards the player owns
        role: Role in the current round, None between rounds
        id: Unique identifier for this player
    """

    name: str
    strategy: "Strategy"
    hand: Hand = field(default_factory=Hand)
    role: Optional[PlayerRole] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    @property
    def card_count(self) -> int:
        return self.hand.size

    def __str__(self) -> str:
        return f"{self.name}: {self.hand}"


@dataclass(frozen=True)
class PlayerSnapshot:
    """Immutable view of one player."""

    id: str
    name: str
    hand: Tuple[Card, ...]
    role: Optional[PlayerRole] = None

    @property
    def card_count(self) -> int:
        return len(self.hand)

    @classmethod
    def of(cls, player: Player) -> "PlayerSnapshot":
        return cls(
            id=player.id,
            name=player.name,
            hand=tuple(player.hand.sorted_cards()),
            role=player.role,
        )


@dataclass(frozen=True)
class GameSnapshot:
    """
    Immutable representation of the match state after a transition.

    Attributes:
        round_number: Number of the current round (1 for the first)
        stage: Stage the round is in
        trump_card: The revealed trump card
        deck_size: Cards left in the stock
        discard_size: Cards in the discard pile
        players: Players still in the roster, in seating order
        table: Attack/defense pairs in the order they were played
        attacker: Name of the current attacker
        defender: Name of the current defender
        active_player: Name of the player whose move it is
        timestamp: Time when this snapshot was taken
    """

    round_number: int
    stage: RoundStage
    trump_card: Card
    deck_size: int
    discard_size: int
    players: Tuple[PlayerSnapshot, ...] = ()
    table: Tuple[Tuple[Card, Optional[Card]], ...] = ()
    attacker: Optional[str] = None
    defender: Optional[str] = None
    active_player: Optional[str] = None
    timestamp: float = field(default_factory=lambda: time.time())

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the snapshot to a dictionary suitable for rendering or serialization.

        Returns:
            Dictionary representation of the snapshot
        """
        return {
            "round_number": self.round_number,
            "stage": self.stage.name,
            "trump_card": str(self.trump_card),
            "trump_suit": str(self.trump_card.suit),
            "deck_remaining": self.deck_size,
            "discard_pile_size": self.discard_size,
            "attacker": self.attacker,
            "defender": self.defender,
            "active_player": self.active_player,
            "timestamp": self.timestamp,
            "table": [
                {
                    "attack": str(attack),
                    "defense": str(defense) if defense else None,
                }
                for attack, defense in self.table
            ],
            "players": [
                {
                    "id": player.id,
                    "name": player.name,
                    "role": player.role.name if player.role else None,
                    "hand_size": player.card_count,
                    "cards": [str(card) for card in player.hand],
                }
                for player in self.players
            ],
        }


@dataclass(frozen=True)
class RoundResult:
    """What happened in one round, reported back to the match."""

    outcome: RoundOutcome
    attacker: str
    defender: str
    slots: int = 0
    eliminated: Tuple[str, ...] = ()
    next_attacker: Optional[str] = None
    next_defender: Optional[str] = None


@dataclass(frozen=True)
class MatchResult:
    """
    Terminal result of a match.

    Attributes:
        loser: Name of the durak, or None for a draw
        rounds: Number of rounds played
        eliminated: Names in the order players went out
    """

    loser: Optional[str]
    rounds: int
    eliminated: Tuple[str, ...] = ()

    @property
    def is_draw(self) -> bool:
        return self.loser is None

    def __str__(self) -> str:
        if self.is_draw:
            return f"Draw after {self.rounds} rounds"
        return f"{self.loser} is the durak after {self.rounds} rounds"


def snapshot_players(players: List[Player]) -> Tuple[PlayerSnapshot, ...]:
    return tuple(PlayerSnapshot.of(player) for player in players)
