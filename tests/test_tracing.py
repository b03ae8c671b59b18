import logging

import pytest

from quake_feed_api.app.core.tracing import LoggingTracer, NoopTracer


def test_noop_tracer_still_collects_tags():
    with NoopTracer().span("work") as span:
        span.set_tag("count", 3)
    assert span.name == "work"
    assert span.tags == {"count": 3}


def test_logging_tracer_logs_finished_span(caplog):
    caplog.set_level(logging.DEBUG, logger="quake_feed_api.app.core.tracing")
    with LoggingTracer().span("EarthquakeClient.fetch_all") as span:
        span.set_tag("count", 7)

    messages = [r.getMessage() for r in caplog.records]
    assert any("EarthquakeClient.fetch_all" in m and "'count': 7" in m for m in messages)


def test_logging_tracer_marks_failed_span_and_reraises(caplog):
    caplog.set_level(logging.DEBUG, logger="quake_feed_api.app.core.tracing")
    with pytest.raises(RuntimeError):
        with LoggingTracer().span("boom") as span:
            raise RuntimeError("upstream down")

    assert span.tags["error"] is True
    assert span.tags["error.kind"] == "RuntimeError"
    assert "boom" in caplog.records[-1].getMessage()
