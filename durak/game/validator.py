"""
Move legality for Durak.

Pure predicates over the table, a hand and the trump suit. Nothing here
mutates its arguments; the round engine calls these before every transition.
"""

from typing import List

from durak.common.card import Card, Suit
from durak.common.hand import Hand
from durak.game.constants import MAX_ATTACK_SLOTS
from durak.game.table import Table


def is_legal_attack(table: Table, card: Card) -> bool:
    """
    An attack is legal on an empty table, or when a card of the same rank is
    already on the table (attack or defense).
    """
    if not card:
        return False
    if table.is_empty():
        return True
    return card.rank in table.ranks_on_table()


def is_legal_defense(attack: Card, candidate: Card, trump: Suit) -> bool:
    """
    A defense beats the attack with a higher card of the same suit, or with
    any trump when the attack is not a trump.
    """
    if not attack or not candidate:
        return False
    if candidate.suit == attack.suit:
        return candidate.rank.rank_value > attack.rank.rank_value
    if candidate.is_trump(trump) and not attack.is_trump(trump):
        return True
    return False


def is_throwin_allowed(table: Table, defender_hand: Hand) -> bool:
    """More attacks may join while slots remain and the defender still holds a card."""
    return table.slot_count < MAX_ATTACK_SLOTS and not defender_hand.is_empty()


def legal_attacks(hand: Hand, table: Table) -> List[Card]:
    """Cards of `hand` that may be played as an attack, in selection order."""
    return [card for card in hand.sorted_cards() if is_legal_attack(table, card)]


def legal_defenses(hand: Hand, attack: Card, trump: Suit) -> List[Card]:
    """Cards of `hand` that beat `attack`, in selection order."""
    return [
        card for card in hand.sorted_cards() if is_legal_defense(attack, card, trump)
    ]
