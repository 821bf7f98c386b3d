"""Per-request timing accumulator bound to the current execution context."""

import threading
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Protocol


class ITimingAccumulator(Protocol):
    """Running totals of elapsed milliseconds, keyed by category."""

    def add(self, category: str, delta: float) -> None:
        """Add `delta` ms to the category."""
        ...

    def read(self, category: str) -> float:
        """Current total for the category (0.0 if never written)."""
        ...

    def reset(self, category: str) -> float:
        """Zero the category and return what it held."""
        ...


class TimingAccumulator:
    """Mutable timing cells for one logical request."""

    def __init__(self) -> None:
        self._cells: dict[str, float] = {}
        self._lock = threading.Lock()

    def add(self, category: str, delta: float) -> None:
        """Add `delta` ms to the category."""
        with self._lock:
            self._cells[category] = self._cells.get(category, 0.0) + delta

    def read(self, category: str) -> float:
        """Current total for the category (0.0 if never written)."""
        with self._lock:
            return self._cells.get(category, 0.0)

    def reset(self, category: str) -> float:
        """Zero the category and return what it held, as one step."""
        with self._lock:
            previous = self._cells.get(category, 0.0)
            self._cells[category] = 0.0
            return previous

    def categories(self) -> list[str]:
        """Categories written so far, including zeroed ones."""
        with self._lock:
            return list(self._cells)


_current: ContextVar[TimingAccumulator | None] = ContextVar(
    "timing_accumulator", default=None
)


def current_accumulator() -> TimingAccumulator:
    """Accumulator of the current thread/task, created on first access."""
    accumulator = _current.get()
    if accumulator is None:
        accumulator = TimingAccumulator()
        _current.set(accumulator)
    return accumulator


@contextmanager
def accumulator_scope(
    accumulator: TimingAccumulator | None = None,
) -> Iterator[TimingAccumulator]:
    """Bind a fresh accumulator to the current context for one request.

    Tasks and threads started inside the scope with a copied context share it.
    The previous binding is restored on exit.
    """
    accumulator = accumulator if accumulator is not None else TimingAccumulator()
    token = _current.set(accumulator)
    try:
        yield accumulator
    finally:
        _current.reset(token)
