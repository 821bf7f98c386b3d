"""RuntimeReporter: splits accumulated time around the render step."""

from typing import Awaitable, Callable, Protocol

from ..config import InstrumentationConfig
from ..logging_config import get_logger
from ..models import RequestSummary
from ..timing import ITimingAccumulator, current_accumulator

logger = get_logger(__name__)


class IRuntimeReporter(Protocol):
    """Request lifecycle hooks for one namespace."""

    def bracket_render(
        self, summary: RequestSummary, step: Callable[[], float]
    ) -> float:
        """Run the render step; return its runtime minus instrumented time."""
        ...

    def append_info(self, summary: RequestSummary) -> None:
        """Fold the time accumulated after rendering into the summary."""
        ...

    def finalize(self, summary: RequestSummary) -> list[str]:
        """Append this namespace's fragment to the summary messages."""
        ...


class RuntimeReporter:
    """Per-namespace runtime bookkeeping for the request lifecycle.

    The accumulator goes IDLE -> ACCUMULATING -> RENDER_SCOPED -> ACCUMULATING
    -> FINALIZED within one request. Time accumulated before and during the
    render step is stored in ``summary.fields[attr_name]``; the render step's
    own runtime is returned minus the part spent in instrumented calls.
    """

    def __init__(
        self,
        config: InstrumentationConfig,
        accumulator: Callable[[], ITimingAccumulator] = current_accumulator,
    ):
        self._config = config
        self._accumulator = accumulator

    @property
    def attr_name(self) -> str:
        return self._config.attr_name

    @property
    def label(self) -> str:
        return self._config.label

    def bracket_render(
        self, summary: RequestSummary, step: Callable[[], float]
    ) -> float:
        """Run `step` (returns its own wall-clock ms) between two resets.

        The closing reset runs even when `step` raises, so a reused worker
        never starts with this request's numbers.
        """
        accumulator = self._accumulator()
        before_render = accumulator.reset(self._config.category)
        try:
            runtime = step()
        finally:
            during_render = self._close_render(summary, accumulator, before_render)
        return runtime - during_render

    async def abracket_render(
        self, summary: RequestSummary, step: Callable[[], Awaitable[float]]
    ) -> float:
        """Async variant of `bracket_render`."""
        accumulator = self._accumulator()
        before_render = accumulator.reset(self._config.category)
        try:
            runtime = await step()
        finally:
            during_render = self._close_render(summary, accumulator, before_render)
        return runtime - during_render

    def _close_render(
        self,
        summary: RequestSummary,
        accumulator: ITimingAccumulator,
        before_render: float,
    ) -> float:
        during_render = accumulator.reset(self._config.category)
        summary.fields[self.attr_name] = before_render + during_render
        logger.debug(
            "%s render bracket: before=%.2fms during=%.2fms",
            self.label,
            before_render,
            during_render,
        )
        return during_render

    def append_info(self, summary: RequestSummary) -> None:
        """Add time accumulated since the render step to the summary.

        Uses reset rather than read so the context is left at zero.
        """
        remaining = self._accumulator().reset(self._config.category)
        if self.attr_name in summary.fields or remaining:
            summary.fields[self.attr_name] = (
                summary.fields.get(self.attr_name, 0.0) + remaining
            )

    def finalize(self, summary: RequestSummary) -> list[str]:
        """Append "<Label>: <N>ms" when this namespace recorded any time."""
        runtime = summary.fields.get(self.attr_name)
        if runtime:
            summary.messages.append(f"{self.label}: {runtime:.2f}ms")
        return summary.messages
