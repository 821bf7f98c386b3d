"""Timing module."""

from .accumulator import (
    ITimingAccumulator,
    TimingAccumulator,
    accumulator_scope,
    current_accumulator,
)

__all__ = [
    "ITimingAccumulator",
    "TimingAccumulator",
    "accumulator_scope",
    "current_accumulator",
]
