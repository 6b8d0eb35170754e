"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures shared by the Durak tests.
"""

import pytest

from durak.events import EventBus, EventEmitter


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def emitter():
    """A private emitter so a test only sees the events of its own match."""
    return EventEmitter()
