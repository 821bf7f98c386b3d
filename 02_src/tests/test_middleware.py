"""Tests for the render() bracket point."""

from types import SimpleNamespace

import pytest

from instrumenter.api.middleware import VIEW_RUNTIME, render
from instrumenter.config import InstrumentationConfig
from instrumenter.models import RequestSummary
from instrumenter.reporting import RuntimeReporter


def _request(summary, reporters):
    return SimpleNamespace(state=SimpleNamespace(summary=summary, reporters=reporters))


@pytest.fixture
def reporters(accumulator):
    """Create reporters for two namespaces sharing one accumulator."""
    return [
        RuntimeReporter(InstrumentationConfig(namespace="github"), accumulator=lambda: accumulator),
        RuntimeReporter(InstrumentationConfig(namespace="s3"), accumulator=lambda: accumulator),
    ]


class TestRender:
    """Tests for render()."""

    def test_chains_every_reporter(self, reporters, accumulator, clock):
        """Test per-namespace totals and the shared view runtime."""
        summary = RequestSummary()
        accumulator.add("github_runtime", 1.0)
        accumulator.add("s3_runtime", 2.0)

        def render_fn():
            accumulator.add("github_runtime", 3.0)
            accumulator.add("s3_runtime", 4.0)
            clock.advance(50.0)
            return {"body": "ok"}

        result = render(_request(summary, reporters), render_fn, clock=clock)

        assert result == {"body": "ok"}
        assert summary.fields["github_runtime"] == pytest.approx(4.0)
        assert summary.fields["s3_runtime"] == pytest.approx(6.0)
        assert summary.fields[VIEW_RUNTIME] == pytest.approx(50.0 - 3.0 - 4.0)
        assert accumulator.read("github_runtime") == 0.0
        assert accumulator.read("s3_runtime") == 0.0

    def test_without_reporters(self, clock):
        """Test that the plain step runtime is recorded."""
        summary = RequestSummary()

        def render_fn():
            clock.advance(12.5)
            return "page"

        assert render(_request(summary, []), render_fn, clock=clock) == "page"
        assert summary.fields[VIEW_RUNTIME] == pytest.approx(12.5)

    def test_failure_still_resets_every_reporter(self, reporters, accumulator, clock):
        """Test that a failing render leaves clean totals and no view runtime."""
        summary = RequestSummary()
        accumulator.add("github_runtime", 1.0)

        def render_fn():
            accumulator.add("github_runtime", 3.0)
            accumulator.add("s3_runtime", 4.0)
            raise RuntimeError("template error")

        with pytest.raises(RuntimeError):
            render(_request(summary, reporters), render_fn, clock=clock)

        assert summary.fields["github_runtime"] == pytest.approx(4.0)
        assert summary.fields["s3_runtime"] == pytest.approx(4.0)
        assert VIEW_RUNTIME not in summary.fields
        assert accumulator.read("github_runtime") == 0.0
        assert accumulator.read("s3_runtime") == 0.0
