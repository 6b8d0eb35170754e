"""Fixed rule constants for Durak."""

from durak.common.card import Rank
from durak.common.deck import HAND_SIZE

# Number of cards in the stock at match start
DECK_SIZE = 36

# A round never holds more attack cards than this
MAX_ATTACK_SLOTS = 6

MIN_PLAYERS = 2
MAX_PLAYERS = 4

# Added to the weight of every trump so trumps always rank above non-trumps
TRUMP_BONUS = Rank.ACE.rank_value

__all__ = [
    "DECK_SIZE",
    "HAND_SIZE",
    "MAX_ATTACK_SLOTS",
    "MIN_PLAYERS",
    "MAX_PLAYERS",
    "TRUMP_BONUS",
]
