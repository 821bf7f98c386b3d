"""Request lifecycle hooks: accumulator scope, render bracket, summary line."""

import functools
import time
from typing import Callable, Sequence, TypeVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from ..logging_config import get_logger
from ..models import RequestSummary
from ..reporting import IRuntimeReporter
from ..timing import accumulator_scope

logger = get_logger(__name__)

T = TypeVar("T")

VIEW_RUNTIME = "view_runtime"


class InstrumentationMiddleware(BaseHTTPMiddleware):
    """One accumulator scope and one summary line per request."""

    def __init__(self, app: ASGIApp, reporters: Sequence[IRuntimeReporter]):
        super().__init__(app)
        self._reporters = list(reporters)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        started = time.perf_counter()
        with accumulator_scope():
            summary = RequestSummary(method=request.method, path=request.url.path)
            request.state.summary = summary
            request.state.reporters = self._reporters
            try:
                response = await call_next(request)
                summary.status = response.status_code
            finally:
                self._log_summary(summary, (time.perf_counter() - started) * 1000)
        return response

    def _log_summary(self, summary: RequestSummary, total_ms: float) -> None:
        for reporter in self._reporters:
            reporter.append_info(summary)

        if VIEW_RUNTIME in summary.fields:
            summary.messages.append(f"Views: {summary.fields[VIEW_RUNTIME]:.1f}ms")
        for reporter in self._reporters:
            reporter.finalize(summary)

        logger.info(
            "Completed %s %s %s in %.1fms (%s)",
            summary.status or 500,
            summary.method,
            summary.path,
            total_ms,
            summary.line(),
            extra={"context": {"status": summary.status, **summary.fields}},
        )


def render(
    request: Request,
    render_fn: Callable[[], T],
    clock: Callable[[], int] = time.perf_counter_ns,
) -> T:
    """Run `render_fn` as the request's render step and return its value.

    Reporters bracket the step in order, the first innermost, so with
    reporters a and b ``view_runtime`` is the step's runtime minus the time
    both recorded during it.
    """
    summary: RequestSummary = request.state.summary
    reporters: Sequence[IRuntimeReporter] = request.state.reporters
    result: list[T] = []

    def step() -> float:
        started = clock()
        result.append(render_fn())
        return (clock() - started) / 1_000_000

    bracketed: Callable[[], float] = step
    for reporter in reporters:
        bracketed = functools.partial(reporter.bracket_render, summary, bracketed)

    summary.fields[VIEW_RUNTIME] = bracketed()
    return result[0]
