"""
Platform adapters for the Durak engine.

This package provides adapters that translate between the core game engine
and the platforms it is played on (console, tests, spectator runs).
"""

from durak.adapters.base import PlatformAdapter
from durak.adapters.cli import CLIAdapter
from durak.adapters.dummy import DummyAdapter

__all__ = ["PlatformAdapter", "CLIAdapter", "DummyAdapter"]
