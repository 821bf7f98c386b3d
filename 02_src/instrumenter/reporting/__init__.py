"""Reporting module."""

from .log_subscriber import LogSubscriber
from .runtime import IRuntimeReporter, RuntimeReporter

__all__ = ["IRuntimeReporter", "LogSubscriber", "RuntimeReporter"]
