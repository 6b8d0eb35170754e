"""
This module contains the Hand class, the set of cards a single player owns.

A hand is a set: it never holds the same card twice and its identity does not
depend on order. For display and for "choose card #3" style selection it
exposes a stable sorted view.
"""
from typing import Iterable, Iterator, List, Optional

from durak.common.card import Card, NO_CARD


class Hand:
    """
    A hand of cards owned by one player.

    >>> from durak.common.card import Rank, Suit
    >>> hand = Hand([Card(Suit.SPADES, Rank.ACE), Card(Suit.HEARTS, Rank.SIX)])
    >>> hand.card_at(0)
    Card(Suit.HEARTS, Rank.SIX)
    >>> hand.card_at(5)
    NO_CARD
    """

    def __init__(self, cards: Optional[Iterable[Card]] = None):
        self._cards = set()
        for card in cards or ():
            self.give(card)

    @property
    def cards(self) -> frozenset:
        """Returns the cards in the hand."""
        return frozenset(self._cards)

    @property
    def size(self) -> int:
        return len(self._cards)

    def is_empty(self) -> bool:
        return not self._cards

    def give(self, card: Card) -> None:
        """
        Adds a card to the hand. `NO_CARD` is ignored.

        Args:
            card: The card to add.

        Raises:
            ValueError: If the card is already in the hand.
        """
        if not card:
            return
        if card in self._cards:
            raise ValueError(f"Card {card} is already in hand.")
        self._cards.add(card)

    def take(self, card: Card) -> Card:
        """
        Removes a card from the hand. `NO_CARD` is ignored.

        Args:
            card: The card to remove.

        Returns:
            The removed card.

        Raises:
            ValueError: If the card is not found in the hand.
        """
        if not card:
            return NO_CARD
        try:
            self._cards.remove(card)
        except KeyError as exc:
            raise ValueError(f"Card {card} not found in hand.") from exc
        return card

    def sorted_cards(self) -> List[Card]:
        """The stable selection order: by rank, then suit."""
        return sorted(self._cards)

    def card_at(self, index: int) -> Card:
        """Card at a 0-based position of the sorted view, or `NO_CARD`."""
        cards = self.sorted_cards()
        if 0 <= index < len(cards):
            return cards[index]
        return NO_CARD

    def take_at(self, index: int) -> Card:
        return self.take(self.card_at(index))

    def __contains__(self, card: Card) -> bool:
        return card in self._cards

    def __iter__(self) -> Iterator[Card]:
        return iter(self.sorted_cards())

    def __len__(self) -> int:
        return len(self._cards)

    def __repr__(self) -> str:
        return f"Hand({self.sorted_cards()!r})"

    def __str__(self) -> str:
        return " ".join(str(card) for card in self.sorted_cards())
