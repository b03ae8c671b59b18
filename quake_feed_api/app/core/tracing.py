"""
In-process tracing for feed client operations.

Instead of a process-wide tracer registered at startup, a tracer object
is handed to :class:`~quake_feed_api.app.services.earthquake_client.EarthquakeClient`
explicitly.  ``NoopTracer`` is the default and costs nothing;
``LoggingTracer`` writes each finished span, with its tags and
duration, to the log.  Both expose the same small interface::

    with tracer.span("EarthquakeClient.get_latest") as span:
        span.set_tag("location", latest.location)
"""

from __future__ import annotations

import logging
import time
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional


class Span:
    """A named unit of work carrying key/value tags."""

    def __init__(self, name: str) -> None:
        self.name = name
        self.tags: Dict[str, Any] = {}
        self.error: Optional[BaseException] = None

    def set_tag(self, key: str, value: Any) -> None:
        self.tags[key] = value


class NoopTracer:
    """Tracer that records tags on the span object and reports nothing."""

    @contextmanager
    def span(self, name: str) -> Iterator[Span]:
        yield Span(name)


class LoggingTracer(NoopTracer):
    """Tracer that logs every finished span.

    Spans left through an exception are logged with ``error=True`` and
    the exception type; the exception itself is re-raised unchanged.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, level: int = logging.DEBUG) -> None:
        self.logger = logger or logging.getLogger(__name__)
        self.level = level

    @contextmanager
    def span(self, name: str) -> Iterator[Span]:
        span = Span(name)
        started = time.perf_counter()
        try:
            yield span
        except BaseException as exc:
            span.error = exc
            raise
        finally:
            elapsed_ms = (time.perf_counter() - started) * 1000
            if span.error is not None:
                span.set_tag("error", True)
                span.set_tag("error.kind", type(span.error).__name__)
            self.logger.log(
                self.level,
                "span %s finished in %.1f ms tags=%s",
                span.name,
                elapsed_ms,
                span.tags,
            )
