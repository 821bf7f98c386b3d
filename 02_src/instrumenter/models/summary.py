"""Request summary data model."""

from dataclasses import dataclass, field


@dataclass
class RequestSummary:
    """Mutable output channel for one request's log line."""

    method: str = ""
    path: str = ""
    status: int | None = None
    fields: dict[str, float] = field(default_factory=dict)  # derived timings
    messages: list[str] = field(default_factory=list)  # log-line fragments

    def line(self) -> str:
        """Join collected fragments into one summary line."""
        return " | ".join(self.messages)
