"""Instrumentation bootstrap for one namespace."""

from typing import Callable, Protocol

from .config import InstrumentationConfig
from .event_bus import EventBus, IEventBus, Instrumenter
from .logging_config import get_logger
from .reporting import LogSubscriber, RuntimeReporter
from .timing import ITimingAccumulator, current_accumulator

logger = get_logger(__name__)


class IInstrumentation(Protocol):
    """Bootstrap of one instrumented namespace."""

    def start(self) -> None:
        """Create components and attach the log subscriber."""
        ...


class Instrumentation:
    """Wires EventBus, LogSubscriber and RuntimeReporter for a namespace."""

    def __init__(
        self,
        config: InstrumentationConfig,
        bus: IEventBus | None = None,
        accumulator: Callable[[], ITimingAccumulator] = current_accumulator,
    ):
        self._config = config
        self._accumulator = accumulator

        # Components (will be initialized in start())
        self._bus: IEventBus | None = bus
        self._instrumenter: Instrumenter | None = None
        self._subscriber: LogSubscriber | None = None
        self._reporter: RuntimeReporter | None = None

    def start(self) -> None:
        """Initialize components in dependency order. Safe to call twice."""
        if self._subscriber is not None:
            return

        # 1. EventBus (shared between namespaces when given)
        if self._bus is None:
            self._bus = EventBus()
        self._instrumenter = Instrumenter(self._bus, self._config.namespace)

        # 2. LogSubscriber (depends on EventBus + accumulator)
        self._subscriber = LogSubscriber(self._config, self._accumulator)
        self._subscriber.attach_to(self._bus)

        # 3. RuntimeReporter (depends on accumulator)
        self._reporter = RuntimeReporter(self._config, self._accumulator)

        logger.info(
            "Instrumentation started: namespace=%s event=%s label=%s",
            self._config.namespace,
            self._config.event_name(),
            self._config.label,
        )

    @property
    def config(self) -> InstrumentationConfig:
        return self._config

    @property
    def bus(self) -> IEventBus:
        """Get event bus instance."""
        if not self._bus or not self._subscriber:
            raise RuntimeError("Instrumentation not started")
        return self._bus

    @property
    def instrumenter(self) -> Instrumenter:
        """Get namespaced instrumenter."""
        if not self._instrumenter:
            raise RuntimeError("Instrumentation not started")
        return self._instrumenter

    @property
    def subscriber(self) -> LogSubscriber:
        """Get log subscriber."""
        if not self._subscriber:
            raise RuntimeError("Instrumentation not started")
        return self._subscriber

    @property
    def reporter(self) -> RuntimeReporter:
        """Get runtime reporter."""
        if not self._reporter:
            raise RuntimeError("Instrumentation not started")
        return self._reporter
