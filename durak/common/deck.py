"""
This module contains the Deck class, the 36-card stock of a Durak match.

The deck is shuffled once, with an injected random source, when it is created.
The first card of the shuffled stock is the trump card; cards are drawn from
the other end, so the trump card is the last card to leave the deck.

>>> import random
>>> deck = Deck(rng=random.Random(7))
>>> deck.size
36
>>> deck.trump_suit == deck.trump.suit
True
"""

import random
from typing import List, Optional

from durak.common.card import Card, NO_CARD, Rank, Suit
from durak.common.hand import Hand

HAND_SIZE = 6


class Deck:
    """
    A class representing the shuffled stock of a Durak match.
    """

    # Precompute the full deck in rank-major order
    _full_deck = [Card(suit, rank) for rank in Rank for suit in Suit]

    def __init__(
        self,
        cards: Optional[List[Card]] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize a Deck instance.

        :param cards: Cards in stock order, used as given (no shuffle). The last
                      card is drawn first and the first card is the trump.
        :param rng: Random source used to shuffle the full deck when `cards`
                    is not provided.
        """
        if cards is None:
            self.cards: List[Card] = self.full_deck()
            (rng or random.Random()).shuffle(self.cards)
        else:
            if not cards:
                raise ValueError("A deck needs at least one card to fix the trump")
            self.cards = list(cards)

        self._trump = self.cards[0]

    @classmethod
    def full_deck(cls) -> List[Card]:
        """
        Return a fresh list of all 36 cards.

        >>> len(Deck.full_deck())
        36
        """
        return cls._full_deck.copy()

    @property
    def trump(self) -> Card:
        """The revealed trump card. Stays valid after it has been drawn."""
        return self._trump

    @property
    def trump_suit(self) -> Suit:
        return self._trump.suit

    def draw(self) -> Card:
        """
        Take the top card of the stock, or `NO_CARD` once the deck is empty.
        """
        if not self.cards:
            return NO_CARD
        return self.cards.pop()

    def refill(self, hand: Hand, target: int = HAND_SIZE) -> int:
        """
        Draw into `hand` until it holds `target` cards or the deck runs out.

        :return: The number of cards drawn.
        """
        drawn = 0
        while hand.size < target and not self.is_empty():
            hand.give(self.draw())
            drawn += 1
        return drawn

    @property
    def size(self) -> int:
        """
        Return the number of remaining cards in the deck.
        """
        return len(self.cards)

    def is_empty(self) -> bool:
        return len(self.cards) == 0

    def __len__(self) -> int:
        return len(self.cards)

    def __repr__(self) -> str:
        return f"Deck({[repr(card) for card in self.cards]})"

    def __str__(self) -> str:
        return f"Deck of {len(self.cards)} cards, trump {self._trump}"
