"""Core data models for the instrumenter."""

from .events import Event, EventPayload
from .summary import RequestSummary

__all__ = [
    # Events
    "Event",
    "EventPayload",
    # Requests
    "RequestSummary",
]
