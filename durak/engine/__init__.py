"""
Core engine for the Durak package.

This package provides the engine that connects a Durak match to a platform
adapter, implementing the game flow in a platform-agnostic way.
"""

from durak.engine.base import GameEngine
from durak.engine.durak import DurakEngine

__all__ = ["GameEngine", "DurakEngine"]
