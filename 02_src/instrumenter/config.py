"""Project-level configuration and path helpers."""

import os
from dataclasses import dataclass, field
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
LOGS_DIR = PROJECT_ROOT / "04_logs"
DEFAULT_LOG_PATH = LOGS_DIR / "app.log"

DEFAULT_NAMESPACE = "api"
DEFAULT_WATCHED_EVENT = "request"


def _validate_name(kind: str, value: str) -> None:
    if not value:
        raise ValueError(f"{kind} must not be empty")
    if "." in value:
        raise ValueError(f"{kind} must not contain '.': {value!r}")


@dataclass(frozen=True)
class InstrumentationConfig:
    """Wiring for one instrumented namespace."""

    namespace: str
    watched_event: str = DEFAULT_WATCHED_EVENT
    label: str = field(default="")

    def __post_init__(self) -> None:
        _validate_name("namespace", self.namespace)
        _validate_name("watched_event", self.watched_event)
        if not self.label:
            object.__setattr__(
                self, "label", self.namespace.replace("_", " ").title().replace(" ", "")
            )

    @property
    def category(self) -> str:
        """Accumulator category, also the summary field name."""
        return f"{self.namespace}_runtime"

    @property
    def attr_name(self) -> str:
        return self.category

    def event_name(self, action: str | None = None) -> str:
        """Fully qualified event name for an action (watched event by default)."""
        return f"{action or self.watched_event}.{self.namespace}"

    @classmethod
    def from_env(cls) -> "InstrumentationConfig":
        """Build config from INSTRUMENTER_* environment variables."""
        return cls(
            namespace=os.getenv("INSTRUMENTER_NAMESPACE", DEFAULT_NAMESPACE),
            watched_event=os.getenv("INSTRUMENTER_WATCHED_EVENT", DEFAULT_WATCHED_EVENT),
            label=os.getenv("INSTRUMENTER_LABEL", ""),
        )
