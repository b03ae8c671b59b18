"""
Pydantic models for earthquake data.

Two groups of models live here:

* ``EarthquakeResponse``, ``EarthquakeFeature`` and
  ``EarthquakeProperties`` mirror the geo-JSON body returned by the
  USGS FDSN event service.  Only the fields we use are declared; any
  other field, at any level, is ignored so that growth of the upstream
  schema never breaks parsing.
* ``Earthquake`` is the simplified record returned by our own API.
"""

from datetime import datetime, tzinfo
from typing import List, Optional

from pydantic import BaseModel, Field

# Display format of ``Earthquake.occurred_at``.
TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


class Earthquake(BaseModel):
    """A single earthquake as exposed by the API.

    Instances are immutable and compare by value.  ``occurred_at`` is
    serialized as ``timeGMT`` for compatibility with existing clients;
    both names are accepted when constructing the model.
    """

    location: str = Field(..., examples=["12 km SSW of Idyllwild, CA"])
    magnitude: float = Field(..., examples=[2.43])
    occurred_at: str = Field(..., alias="timeGMT", examples=["2024-05-01 12:34:56"])

    model_config = {
        "frozen": True,
        "populate_by_name": True,
    }


class EarthquakeProperties(BaseModel):
    """The ``properties`` object of one upstream feature."""

    mag: float
    place: str
    time: int  # epoch milliseconds

    model_config = {"extra": "ignore"}

    def to_earthquake(self, tz: Optional[tzinfo] = None) -> Earthquake:
        """Convert to an :class:`Earthquake`.

        ``time`` is rendered with :data:`TIME_FORMAT` in ``tz``, or in the
        process local timezone when ``tz`` is ``None``.
        """
        occurred = datetime.fromtimestamp(self.time / 1000, tz=tz)
        return Earthquake(
            location=self.place,
            magnitude=self.mag,
            occurred_at=occurred.strftime(TIME_FORMAT),
        )


class EarthquakeFeature(BaseModel):
    properties: EarthquakeProperties

    model_config = {"extra": "ignore"}


class EarthquakeResponse(BaseModel):
    """Top-level geo-JSON ``FeatureCollection``."""

    features: List[EarthquakeFeature]

    model_config = {"extra": "ignore"}
