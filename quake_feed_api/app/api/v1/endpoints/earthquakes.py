"""
Earthquake endpoints for API v1.

Three read-only routes built on :class:`EarthquakeClient`:

* ``GET /latest`` – most recent event of the day.
* ``GET /biggest`` – strongest event of the day.
* ``GET /biggerthan/{threshold}`` – events above a magnitude.

``NoDataError`` is turned into a 404 here.  ``UpstreamError`` is left
to the application-level handler registered in ``main.py`` because it
applies to every route alike.
"""

import logging
import math
import re
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from quake_feed_api.app.core.dependencies import get_earthquake_client
from quake_feed_api.app.core.errors import NoDataError
from quake_feed_api.app.schemas.earthquake import Earthquake
from quake_feed_api.app.services.earthquake_client import EarthquakeClient


logger = logging.getLogger(__name__)

router = APIRouter()

THRESHOLD_PATTERN = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?", re.ASCII)


def parse_threshold(raw: str) -> float:
    """Parse a magnitude threshold from the request path.

    Only plain decimal numbers with an optional exponent are accepted.
    Underscores, surrounding whitespace, ``nan``, ``inf`` and values that
    overflow to infinity are rejected like any other malformed value.
    """
    threshold = float(raw) if THRESHOLD_PATTERN.fullmatch(raw) else math.nan
    if not math.isfinite(threshold):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=f"Invalid threshold: {raw}")
    return threshold


@router.get("/latest", response_model=Earthquake)
async def get_latest(client: EarthquakeClient = Depends(get_earthquake_client)) -> Earthquake:
    """Return the most recent earthquake recorded today."""
    logger.info("Entering GET /latest")
    try:
        latest = await client.get_latest()
    except NoDataError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    logger.info("Returning %s from GET /latest", latest.location)
    return latest


@router.get("/biggest", response_model=Earthquake)
async def get_biggest(client: EarthquakeClient = Depends(get_earthquake_client)) -> Earthquake:
    """Return the earthquake with the highest magnitude recorded today.

    Ties go to the event listed first by the feed.
    """
    logger.info("Entering GET /biggest")
    try:
        biggest = await client.get_biggest()
    except NoDataError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=e.message) from e
    logger.info("Exiting GET /biggest")
    return biggest


@router.get("/biggerthan/{threshold}", response_model=List[Earthquake])
async def get_bigger_than(
    threshold: str,
    client: EarthquakeClient = Depends(get_earthquake_client),
) -> List[Earthquake]:
    """Return today's earthquakes with magnitude strictly above ``threshold``.

    Responds 400 for a threshold that is not a finite number and 404
    when no event exceeds it.
    """
    logger.info("Entering GET /biggerthan/{threshold}")
    value = parse_threshold(threshold)
    earthquakes = await client.get_bigger_than(value)
    if not earthquakes:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No earthquakes found above magnitude {value}.",
        )
    logger.info("Returning %d earthquakes from GET /biggerthan/{threshold}.", len(earthquakes))
    return earthquakes
