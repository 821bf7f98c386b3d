"""Per-request runtime instrumentation."""

from .app import IInstrumentation, Instrumentation
from .config import InstrumentationConfig
from .event_bus import EventBus, EventHandler, IEventBus, Instrumenter
from .models import Event, EventPayload, RequestSummary
from .reporting import IRuntimeReporter, LogSubscriber, RuntimeReporter
from .timing import (
    ITimingAccumulator,
    TimingAccumulator,
    accumulator_scope,
    current_accumulator,
)

__all__ = [
    # Bootstrap
    "Instrumentation",
    "IInstrumentation",
    "InstrumentationConfig",
    # Models
    "Event",
    "EventPayload",
    "RequestSummary",
    # Components
    "IEventBus",
    "EventBus",
    "EventHandler",
    "Instrumenter",
    "ITimingAccumulator",
    "TimingAccumulator",
    "accumulator_scope",
    "current_accumulator",
    "LogSubscriber",
    "IRuntimeReporter",
    "RuntimeReporter",
]
