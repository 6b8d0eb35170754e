"""
Event system for the Durak engine.

This package provides the event bus that every match transition is published on.
"""

from durak.events.emitter import (
    EventEmitter,
    EventBus,
    EventPriority,
    EngineEventType,
)

__all__ = ["EventEmitter", "EventBus", "EventPriority", "EngineEventType"]
