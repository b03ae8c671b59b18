"""Builders for fake USGS feed bodies and feed clients backed by ``httpx.MockTransport``."""

import asyncio
from datetime import datetime, timezone

import httpx

from quake_feed_api.app.services.earthquake_client import EarthquakeClient

FEED_URL = "https://feed.test/fdsnws/event/1/query"

# 2023-11-14 22:13:20 UTC
T1 = 1_700_000_000_000
T2 = T1 - 60_000
T3 = T1 - 120_000

FIXED_NOW = datetime(2023, 11, 14, 23, 0, 0, tzinfo=timezone.utc)


def feature(place, mag, time_ms, **extra_properties):
    """One geo-JSON feature as USGS sends it, including fields we ignore."""
    properties = {
        "mag": mag,
        "place": place,
        "time": time_ms,
        "updated": time_ms + 5_000,
        "tz": None,
        "url": "https://earthquake.usgs.gov/earthquakes/eventpage/test",
        "status": "automatic",
        "magType": "ml",
        "type": "earthquake",
    }
    properties.update(extra_properties)
    return {
        "type": "Feature",
        "properties": properties,
        "geometry": {"type": "Point", "coordinates": [139.69, 35.68, 10.0]},
        "id": f"test{time_ms}",
    }


def feed_body(*features):
    return {
        "type": "FeatureCollection",
        "metadata": {"generated": T1, "status": 200, "count": len(features)},
        "features": list(features),
        "bbox": [-180, -90, 0, 180, 90, 700],
    }


def scenario_body():
    return feed_body(
        feature("Tokyo", 3.2, T1),
        feature("Lima", 5.8, T2),
        feature("Fiji", 4.0, T3),
    )


class FeedStub:
    """Request handler for ``httpx.MockTransport``.

    Answers every request with the configured body and status, or raises
    ``exc``.  Received requests are kept in ``requests``.
    """

    def __init__(self, body=None, status_code=200, exc=None):
        self.body = feed_body() if body is None else body
        self.status_code = status_code
        self.exc = exc
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        if self.exc is not None:
            raise self.exc
        if isinstance(self.body, (bytes, str)):
            return httpx.Response(self.status_code, content=self.body)
        return httpx.Response(self.status_code, json=self.body)


def make_client(stub, **kwargs):
    options = {
        "base_url": FEED_URL,
        "timeout": 2.0,
        "tz": timezone.utc,
        "clock": lambda: FIXED_NOW,
    }
    options.update(kwargs)
    http_client = httpx.AsyncClient(transport=httpx.MockTransport(stub))
    return EarthquakeClient(http_client=http_client, **options)


def run(coro):
    return asyncio.run(coro)
