"""EventBus module."""

from .event_bus import EventBus, EventHandler, IEventBus, Instrumenter

__all__ = ["EventBus", "EventHandler", "IEventBus", "Instrumenter"]
