"""LogSubscriber: logs watched events and accumulates their durations."""

import logging
from collections.abc import Mapping
from typing import Any, Callable

import httpx

from ..config import InstrumentationConfig
from ..event_bus import IEventBus
from ..logging_config import get_logger
from ..models import Event
from ..timing import ITimingAccumulator, current_accumulator

logger = get_logger(__name__)


def _query_string(params: Any) -> str:
    """Encode `params` as a query string, or "" when it can't be."""
    if isinstance(params, (Mapping, str, list, tuple)):
        try:
            return str(httpx.QueryParams(params))
        except (TypeError, ValueError):
            return ""
    return ""


def build_url(payload: Mapping[str, Any]) -> str:
    """URL from the payload, with a query rebuilt from `params` if present."""
    url = str(payload.get("url") or "")
    query = _query_string(payload.get("params"))
    if not query:
        return url
    return f"{url}{'&' if '?' in url else '?'}{query}"


class LogSubscriber:
    """Handler for the watched event of one namespace.

    Accumulation and log emission happen in the same handler so both see the
    same duration.
    """

    def __init__(
        self,
        config: InstrumentationConfig,
        accumulator: Callable[[], ITimingAccumulator] = current_accumulator,
        log: logging.Logger | None = None,
    ):
        self._config = config
        self._accumulator = accumulator
        self._logger = log or logger

    @property
    def event_name(self) -> str:
        return self._config.event_name()

    def attach_to(self, bus: IEventBus) -> None:
        """Subscribe to the watched event on `bus`."""
        bus.subscribe(self.event_name, self.handle)

    def handle(self, event: Event) -> None:
        """Add the event's duration to the accumulator and log it."""
        self._accumulator().add(self._config.category, event.duration)

        payload = event.payload
        method = str(payload.get("method") or "").upper()
        url = build_url(payload)
        cache_status = "HIT" if payload.get("cached") else "MISS"

        self._logger.info(
            "  %s: %s %s (%.1fms) - cache %s",
            self._config.label,
            method,
            url,
            event.duration,
            cache_status,
            extra={
                "context": {
                    "method": method,
                    "url": url,
                    "duration_ms": round(event.duration, 1),
                    "cache_status": cache_status,
                }
            },
        )
