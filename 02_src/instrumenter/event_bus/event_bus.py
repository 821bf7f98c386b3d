"""EventBus implementation for synchronous instrumented events."""

import threading
import time
from typing import Any, Awaitable, Callable, Protocol, TypeVar

from ..logging_config import get_logger
from ..models import Event, EventPayload

logger = get_logger(__name__)

T = TypeVar("T")

EventHandler = Callable[[Event], None]


class IEventBus(Protocol):
    """In-process pub/sub for named, timed events."""

    def subscribe(self, name: str, handler: EventHandler) -> None:
        """Subscribe a handler to a fully qualified event name."""
        ...

    def instrument(
        self,
        name: str,
        payload: EventPayload | None = None,
        block: Callable[[], T] | None = None,
    ) -> Any:
        """Fire an event, timing `block` when given. Returns the block's value."""
        ...

    async def ainstrument(
        self,
        name: str,
        payload: EventPayload | None,
        block: Callable[[], Awaitable[T]],
    ) -> T:
        """Await `block`, then fire a timed event. Returns the block's value."""
        ...


class EventBus:
    """In-memory synchronous event bus.

    Handlers run on the caller's thread or task, in registration order, before
    ``instrument`` returns. A failing handler propagates to the caller.
    """

    def __init__(self, clock: Callable[[], int] = time.perf_counter_ns):
        self._clock = clock
        self._lock = threading.Lock()
        self._subscribers: dict[str, list[EventHandler]] = {}

    def subscribe(self, name: str, handler: EventHandler) -> None:
        """Subscribe a handler to a fully qualified event name."""
        with self._lock:
            # Copy-on-write: dispatch iterates a list that is never mutated
            self._subscribers[name] = [*self._subscribers.get(name, []), handler]
        logger.debug("Subscribed %s to %s", getattr(handler, "__qualname__", handler), name)

    def subscribers(self, name: str) -> tuple[EventHandler, ...]:
        """Handlers registered for `name`, in dispatch order."""
        return tuple(self._subscribers.get(name, ()))

    def instrument(
        self,
        name: str,
        payload: EventPayload | None = None,
        block: Callable[[], T] | None = None,
    ) -> Any:
        """Fire an event, timing `block` when given.

        Without a block the event is a pure notification (duration 0) and is
        returned. With a block, its return value is returned unchanged; if it
        raises, the event still goes out with ``exception`` in its payload and
        the error is re-raised. A handler that fails while reporting a failed
        block raises its own error, with the block's error as ``__context__``.
        """
        if block is None:
            event = Event(name=name, payload=payload or {})
            self._dispatch(event)
            return event

        data = dict(payload or {})
        started = self._clock()
        try:
            result = block()
        except Exception as e:
            data["exception"] = (type(e).__name__, str(e))
            data["exception_object"] = e
            raise
        finally:
            self._dispatch(Event(name=name, payload=data, duration=self._elapsed_ms(started)))
        return result

    async def ainstrument(
        self,
        name: str,
        payload: EventPayload | None,
        block: Callable[[], Awaitable[T]],
    ) -> T:
        """Await `block`, then fire a timed event. Returns the block's value.

        Failures are reported and propagated as in `instrument`.
        """
        data = dict(payload or {})
        started = self._clock()
        try:
            return await block()
        except Exception as e:
            data["exception"] = (type(e).__name__, str(e))
            data["exception_object"] = e
            raise
        finally:
            self._dispatch(Event(name=name, payload=data, duration=self._elapsed_ms(started)))

    def _elapsed_ms(self, started: int) -> float:
        return (self._clock() - started) / 1_000_000

    def _dispatch(self, event: Event) -> None:
        for handler in self._subscribers.get(event.name, ()):
            handler(event)


class Instrumenter:
    """Namespaced front for an EventBus: actions become "<action>.<namespace>"."""

    def __init__(self, bus: IEventBus, namespace: str):
        self._bus = bus
        self._namespace = namespace

    @property
    def namespace(self) -> str:
        return self._namespace

    def event_name(self, action: str) -> str:
        return f"{action}.{self._namespace}"

    def instrument(
        self,
        action: str,
        payload: EventPayload | None = None,
        block: Callable[[], T] | None = None,
    ) -> Any:
        """Instrument `action` within this namespace."""
        return self._bus.instrument(self.event_name(action), payload, block)

    async def ainstrument(
        self,
        action: str,
        payload: EventPayload | None,
        block: Callable[[], Awaitable[T]],
    ) -> T:
        """Instrument an awaitable `action` within this namespace."""
        return await self._bus.ainstrument(self.event_name(action), payload, block)
