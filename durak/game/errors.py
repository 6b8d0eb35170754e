"""Exceptions raised by the Durak engine."""


class DurakError(Exception):
    """Base class for Durak engine errors."""

    pass


class IllegalMoveError(DurakError):
    """Raised when a strategy hands the engine a move that breaks the rules."""

    pass


class InvalidSelectionError(DurakError):
    """Raised when a human picks a card index that is out of range or not selectable."""

    pass


class ConfigurationError(DurakError, ValueError):
    """Raised when the engine is configured outside the supported range."""

    pass
