"""
This module defines the `Suit`, `Rank`, and `Card` classes used by the Durak engine.

- `Suit`: An enum representing the four suits: Hearts, Diamonds, Clubs and
Spades. The declaration order is the suit index used to break ties between
cards of equal rank.

- `Rank`: An enum representing the nine ranks of the 36-card Durak deck: Six
through Ten, Jack, Queen, King and Ace.

- `Card`: An immutable playing card. Cards compare by rank first and suit
second. The `NO_CARD` sentinel stands for "no card" (a pass, a take, an empty
draw) and is falsy.
"""

from dataclasses import dataclass
from enum import Enum, unique
from functools import total_ordering
from typing import Optional


@unique
class Suit(Enum):
    """
    Enum for suits in a card deck.
    """

    HEARTS = "♥"
    DIAMONDS = "♦"
    CLUBS = "♣"
    SPADES = "♠"

    @property
    def index(self) -> int:
        """Position of the suit in declaration order."""
        return list(Suit).index(self)

    def __str__(self) -> str:
        return self.value


@unique
class Rank(Enum):
    """
    Enum for ranks in a Durak deck. Values are the rank strengths.
    """

    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    @property
    def rank_value(self) -> int:
        """The strength of the rank."""
        return self.value

    @property
    def rank_str(self) -> str:
        """A string representation of the rank."""
        if self in (Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE):
            return self.name[0]
        return str(self.value)

    def __str__(self) -> str:
        return self.rank_str


_SUIT_ALIASES = {
    "H": Suit.HEARTS,
    "D": Suit.DIAMONDS,
    "C": Suit.CLUBS,
    "S": Suit.SPADES,
}
_RANK_ALIASES = {"T": Rank.TEN}


@total_ordering
@dataclass(frozen=True)
class Card:
    """
    Class representing a playing card.

    >>> card = Card(Suit.HEARTS, Rank.TEN)
    >>> print(card)
    10♥
    >>> Card(Suit.CLUBS, Rank.SIX) < Card(Suit.HEARTS, Rank.SEVEN)
    True
    >>> bool(NO_CARD)
    False
    """

    suit: Optional[Suit]
    rank: Optional[Rank]

    def __post_init__(self):
        if (self.suit is None) != (self.rank is None):
            raise TypeError("A card needs both a suit and a rank, or neither")
        if self.suit is not None and not isinstance(self.suit, Suit):
            raise TypeError(f"Invalid suit: {self.suit}")
        if self.rank is not None and not isinstance(self.rank, Rank):
            raise TypeError(f"Invalid rank: {self.rank}")

    def __bool__(self) -> bool:
        return self.rank is not None

    @property
    def sort_key(self):
        """Rank strength first, suit index as tie-break. The sentinel sorts first."""
        if not self:
            return (-1, -1)
        return (self.rank.rank_value, self.suit.index)

    def __lt__(self, other):
        if not isinstance(other, Card):
            return NotImplemented
        return self.sort_key < other.sort_key

    def is_trump(self, trump: Suit) -> bool:
        return bool(self) and self.suit == trump

    @classmethod
    def from_string(cls, text: str) -> "Card":
        """
        Parse a card from its display form.

        >>> Card.from_string("10♥")
        Card(Suit.HEARTS, Rank.TEN)
        >>> Card.from_string("qs")
        Card(Suit.SPADES, Rank.QUEEN)
        """
        text = text.strip()
        if len(text) < 2:
            raise ValueError(f"Cannot parse card: {text!r}")

        rank_part, suit_part = text[:-1].upper(), text[-1]

        suit = _SUIT_ALIASES.get(suit_part.upper())
        if suit is None:
            try:
                suit = Suit(suit_part)
            except ValueError as exc:
                raise ValueError(f"Unknown suit in {text!r}") from exc

        rank = _RANK_ALIASES.get(rank_part)
        if rank is None:
            for candidate in Rank:
                if candidate.rank_str == rank_part:
                    rank = candidate
                    break
        if rank is None:
            raise ValueError(f"Unknown rank in {text!r}")

        return cls(suit, rank)

    def __repr__(self) -> str:
        if not self:
            return "NO_CARD"
        return f"Card(Suit.{self.suit.name}, Rank.{self.rank.name})"

    def __str__(self) -> str:
        if not self:
            return "--"
        return f"{self.rank.rank_str}{self.suit}"


NO_CARD = Card(None, None)
