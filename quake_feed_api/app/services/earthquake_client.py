"""
Client for the USGS earthquake feed.

``EarthquakeClient`` fetches today's events from the FDSN event service
and derives the three views exposed by the API: the latest event, the
biggest event and the events above a magnitude threshold.  Every call
performs one fresh upstream request; nothing is cached between calls.

The client holds a single ``httpx.AsyncClient`` whose configuration is
fixed at construction, so one instance can serve any number of
concurrent requests.  The current date and the display timezone are
injected (``clock`` and ``tz``) rather than read from ambient state,
which keeps the client deterministic under test.

The derived views are also available as plain functions
(:func:`latest_of`, :func:`biggest_of`, :func:`bigger_than`) that work
on an already fetched list.
"""

from __future__ import annotations

import asyncio
import logging
import math
from datetime import date, datetime, tzinfo
from operator import attrgetter
from typing import Callable, List, Optional, Sequence
from zoneinfo import ZoneInfo

import httpx
from pydantic import ValidationError

from ..core.config import Settings
from ..core.errors import NoDataError, UpstreamError
from ..core.tracing import LoggingTracer, NoopTracer, Span
from ..schemas.earthquake import Earthquake, EarthquakeResponse


logger = logging.getLogger(__name__)

DEFAULT_FEED_URL = "https://earthquake.usgs.gov/fdsnws/event/1/query"
DEFAULT_TIMEOUT = 10.0


def latest_of(earthquakes: Sequence[Earthquake]) -> Earthquake:
    """Return the first event in feed order.

    The feed is requested with ``orderby=time`` (newest first), so the
    first element is the most recent event.
    """
    if not earthquakes:
        raise NoDataError()
    return earthquakes[0]


def biggest_of(earthquakes: Sequence[Earthquake]) -> Earthquake:
    """Return the event with the highest magnitude.

    Among events sharing the highest magnitude the one appearing first
    in feed order wins.
    """
    if not earthquakes:
        raise NoDataError()
    return max(earthquakes, key=attrgetter("magnitude"))


def bigger_than(earthquakes: Sequence[Earthquake], threshold: float) -> List[Earthquake]:
    """Return events whose magnitude is strictly greater than ``threshold``.

    Feed order is preserved.  An empty result is a normal outcome.
    """
    if not math.isfinite(threshold):
        raise ValueError(f"threshold must be a finite number, got {threshold!r}")
    return [quake for quake in earthquakes if quake.magnitude > threshold]


class EarthquakeClient:
    """Fetches and derives today's earthquakes from the USGS feed.

    Parameters
    ----------
    base_url : str
        FDSN event query endpoint.
    timeout : float
        Bound in seconds applied to every upstream request.
    tz : Optional[tzinfo]
        Timezone used for "today" and for rendering event times.  ``None``
        means the process local timezone.
    clock : Optional[Callable[[], datetime]]
        Returns the current time.  Defaults to ``datetime.now(tz)``.
    tracer : Optional[NoopTracer]
        Receives one span per operation.  Defaults to a no-op tracer.
    http_client : Optional[httpx.AsyncClient]
        Pre-built client, e.g. one backed by ``httpx.MockTransport``.
        A client passed in is not closed by :meth:`aclose`.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_FEED_URL,
        timeout: float = DEFAULT_TIMEOUT,
        tz: Optional[tzinfo] = None,
        clock: Optional[Callable[[], datetime]] = None,
        tracer: Optional[NoopTracer] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        if not timeout or timeout <= 0:
            raise ValueError("timeout must be a positive number of seconds")
        self.base_url = base_url
        self.timeout = timeout
        self.tz = tz
        self.tracer = tracer or NoopTracer()
        self._clock = clock
        self._owns_http_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout),
            headers={"Accept": "application/geo+json, application/json"},
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "EarthquakeClient":
        """Build a client from application settings."""
        tz = ZoneInfo(settings.timezone) if settings.timezone else None
        tracer = LoggingTracer() if settings.trace_spans else NoopTracer()
        return cls(
            base_url=settings.usgs_feed_url,
            timeout=settings.usgs_timeout_seconds,
            tz=tz,
            tracer=tracer,
        )

    async def aclose(self) -> None:
        if self._owns_http_client:
            await self._http.aclose()

    def today(self) -> date:
        """Return the current calendar date in the configured timezone."""
        now = self._clock() if self._clock else datetime.now(self.tz)
        if self.tz is not None and now.tzinfo is not None:
            now = now.astimezone(self.tz)
        return now.date()

    # ------------------------------------------------------------------
    # Upstream fetch
    # ------------------------------------------------------------------
    async def fetch_all(self) -> List[Earthquake]:
        """Fetch every event that occurred since midnight today.

        Raises
        ------
        UpstreamError
            On a non-200 status, a timeout, a transport failure or a body
            that is not a geo-JSON feature collection.
        """
        with self.tracer.span("EarthquakeClient.fetch_all") as span:
            logger.info("Entering fetch_all()")
            params = {
                "format": "geojson",
                "starttime": self.today().isoformat(),
                "orderby": "time",
            }
            span.set_tag("starttime", params["starttime"])

            try:
                # The httpx timeout bounds each connect/read/write step; the
                # outer wait_for bounds the whole exchange including the body.
                response = await asyncio.wait_for(
                    self._http.get(self.base_url, params=params, timeout=self.timeout),
                    timeout=self.timeout,
                )
            except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
                message = f"Timed out after {self.timeout:g}s waiting for {self.base_url}"
                logger.error(message)
                raise UpstreamError(message, timed_out=True) from exc
            except httpx.RequestError as exc:
                message = f"Request to {self.base_url} failed: {exc}"
                logger.error(message)
                raise UpstreamError(message) from exc

            if response.status_code != httpx.codes.OK:
                message = f"Error response received from earthquake.usgs.gov: {response.status_code}"
                logger.error(message)
                raise UpstreamError(message, status_code=response.status_code)

            try:
                feed = EarthquakeResponse.model_validate_json(response.content)
            except ValidationError as exc:
                message = f"Malformed feed body from earthquake.usgs.gov: {exc.error_count()} error(s)"
                logger.error("%s\n%s", message, exc)
                raise UpstreamError(message, status_code=response.status_code, malformed=True) from exc

            try:
                earthquakes = [feature.properties.to_earthquake(self.tz) for feature in feed.features]
            except (ValueError, OverflowError, OSError) as exc:
                message = f"Malformed event time in feed from earthquake.usgs.gov: {exc}"
                logger.error(message)
                raise UpstreamError(message, status_code=response.status_code, malformed=True) from exc

            span.set_tag("count", len(earthquakes))
            logger.info("Exiting fetch_all() with %d earthquakes.", len(earthquakes))
            return earthquakes

    # ------------------------------------------------------------------
    # Derived views
    # ------------------------------------------------------------------
    async def get_latest(self) -> Earthquake:
        """Return the most recent earthquake of the day.

        Raises :class:`NoDataError` when no event has been recorded yet.
        """
        with self.tracer.span("EarthquakeClient.get_latest") as span:
            logger.info("Entering get_latest()")
            latest = latest_of(await self.fetch_all())
            _tag_earthquake(span, latest)
            logger.info(
                "Exiting get_latest() with an earthquake in %s, of magnitude %s which happened at %s",
                latest.location,
                latest.magnitude,
                latest.occurred_at,
            )
            return latest

    async def get_biggest(self) -> Earthquake:
        """Return the strongest earthquake of the day.

        Raises :class:`NoDataError` when no event has been recorded yet.
        """
        with self.tracer.span("EarthquakeClient.get_biggest") as span:
            logger.info("Entering get_biggest()")
            biggest = biggest_of(await self.fetch_all())
            _tag_earthquake(span, biggest)
            logger.info(
                "Exiting get_biggest() with an earthquake in %s, of magnitude %s which happened at %s",
                biggest.location,
                biggest.magnitude,
                biggest.occurred_at,
            )
            return biggest

    async def get_bigger_than(self, threshold: float) -> List[Earthquake]:
        """Return today's earthquakes with magnitude strictly above ``threshold``."""
        with self.tracer.span("EarthquakeClient.get_bigger_than") as span:
            logger.info("Entering get_bigger_than(threshold=%s)", threshold)
            span.set_tag("threshold", threshold)
            if not math.isfinite(threshold):
                raise ValueError(f"threshold must be a finite number, got {threshold!r}")
            matches = bigger_than(await self.fetch_all(), threshold)
            span.set_tag("count", len(matches))
            logger.info(
                "Exiting get_bigger_than(threshold=%s) with %d earthquakes", threshold, len(matches)
            )
            return matches


def _tag_earthquake(span: Span, earthquake: Earthquake) -> None:
    span.set_tag("location", earthquake.location)
    span.set_tag("magnitude", earthquake.magnitude)
    span.set_tag("timeGMT", earthquake.occurred_at)
