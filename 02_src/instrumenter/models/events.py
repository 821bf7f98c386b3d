"""Event-related data models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Mapping

EventPayload = Mapping[str, Any]


@dataclass(frozen=True)
class Event:
    """A named, timestamped occurrence delivered to subscribers."""

    name: str  # "<action>.<namespace>"
    payload: EventPayload = field(default_factory=dict)
    duration: float = 0.0  # ms, measured by the bus
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        # Subscribers get a read-only view over a private copy
        object.__setattr__(self, "payload", MappingProxyType(dict(self.payload)))
