"""
Rules and state of the Durak card game.

This package contains the pure game logic: move legality, strategies, the
round state machine and the match that drives rounds to a result.
"""

from durak.game.errors import (
    ConfigurationError,
    DurakError,
    IllegalMoveError,
    InvalidSelectionError,
)
from durak.game.match import Match
from durak.game.round import RoundEngine, rotate_roles
from durak.game.state import (
    GameSnapshot,
    MatchResult,
    Player,
    PlayerRole,
    RoundOutcome,
    RoundResult,
    RoundStage,
)
from durak.game.strategy import (
    AutomatedStrategy,
    HumanStrategy,
    MoveKind,
    MoveRequest,
    Strategy,
)
from durak.game.table import Table

__all__ = [
    "AutomatedStrategy",
    "ConfigurationError",
    "DurakError",
    "GameSnapshot",
    "HumanStrategy",
    "IllegalMoveError",
    "InvalidSelectionError",
    "Match",
    "MatchResult",
    "MoveKind",
    "MoveRequest",
    "Player",
    "PlayerRole",
    "RoundEngine",
    "RoundOutcome",
    "RoundResult",
    "RoundStage",
    "Strategy",
    "Table",
    "rotate_roles",
]
