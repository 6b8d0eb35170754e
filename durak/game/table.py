"""
The shared play surface of a Durak round.

The table holds the attack cards and the defense cards of the current exchange
as two parallel lists: the defense at position ``i`` answers the attack at
position ``i``. Slots fill left to right, so there is never more than one
unanswered attack and never a gap in the defense row. The discard pile lives
here too and grows for the whole match.
"""

from typing import List, Optional, Set, Tuple

from durak.common.card import Card, NO_CARD, Rank
from durak.common.hand import Hand


class Table:
    """
    Attack/defense slots for the current exchange plus the discard pile.
    """

    def __init__(self):
        self.attack_cards: List[Card] = []
        self.defense_cards: List[Card] = []
        self.discard_pile: List[Card] = []

    def is_empty(self) -> bool:
        return not self.attack_cards

    @property
    def slot_count(self) -> int:
        """Number of attack slots opened this exchange."""
        return len(self.attack_cards)

    def place_attack(self, card: Card) -> None:
        """Open a new slot with `card` as its attack."""
        if not card:
            raise ValueError("Cannot attack with no card")
        if self.get_undefended_card():
            raise ValueError("The previous attack has not been answered yet")
        self.attack_cards.append(card)

    def place_defense(self, card: Card) -> None:
        """Answer the open slot with `card`."""
        if not card:
            raise ValueError("Cannot defend with no card")
        if len(self.attack_cards) <= len(self.defense_cards):
            raise ValueError("There is no attack to answer")
        self.defense_cards.append(card)

    def get_undefended_card(self) -> Card:
        """The unanswered attack card, or `NO_CARD` if every slot is answered."""
        if len(self.attack_cards) > len(self.defense_cards):
            return self.attack_cards[len(self.defense_cards)]
        return NO_CARD

    def all_defended(self) -> bool:
        return len(self.attack_cards) == len(self.defense_cards)

    def cards(self) -> List[Card]:
        """Every card on the table, attacks first."""
        return self.attack_cards + self.defense_cards

    def ranks_on_table(self) -> Set[Rank]:
        return {card.rank for card in self.cards()}

    @property
    def attack_defense_pairs(self) -> List[Tuple[Card, Optional[Card]]]:
        """Return a list of attack and defense card pairs."""
        pairs = []
        for i, attack in enumerate(self.attack_cards):
            defense = self.defense_cards[i] if i < len(self.defense_cards) else None
            pairs.append((attack, defense))
        return pairs

    def give_to(self, hand: Hand) -> List[Card]:
        """Move every table card into `hand` and clear the table."""
        moved = self.cards()
        for card in moved:
            hand.give(card)
        self._clear()
        return moved

    def discard(self) -> List[Card]:
        """Move every table card to the discard pile and clear the table."""
        moved = self.cards()
        self.discard_pile.extend(moved)
        self._clear()
        return moved

    def _clear(self) -> None:
        self.attack_cards.clear()
        self.defense_cards.clear()

    def __str__(self) -> str:
        if not self.attack_cards:
            return "(empty)"
        parts = []
        for attack, defense in self.attack_defense_pairs:
            parts.append(f"{attack} / {defense if defense else '_'}")
        return " | ".join(parts)
