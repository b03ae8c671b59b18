"""
Error taxonomy for the earthquake feed.

The feed client raises these exceptions and never recovers from them
locally.  The API layer maps each kind to its own HTTP response, so
the kinds must stay distinguishable:

* :class:`UpstreamError` – the USGS request did not produce a usable
  response (non-200 status, timeout, transport failure or a body that
  does not match the geo-JSON shape).
* :class:`NoDataError` – the feed was fetched successfully but holds no
  events while the operation needs at least one.
"""

from typing import Optional


class QuakeFeedError(Exception):
    """Base class for all errors raised by the feed client."""


class UpstreamError(QuakeFeedError):
    """The upstream feed call failed.

    Attributes
    ----------
    status_code : Optional[int]
        HTTP status returned by the feed, or ``None`` when no response
        was received (timeout, connection failure).
    timed_out : bool
        ``True`` when the request exceeded the configured timeout.
    malformed : bool
        ``True`` when the feed answered 200 but the body could not be
        parsed.
    """

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        timed_out: bool = False,
        malformed: bool = False,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.timed_out = timed_out
        self.malformed = malformed


class NoDataError(QuakeFeedError):
    """The feed holds no events for today."""

    def __init__(self, message: str = "No earthquakes recorded today.") -> None:
        super().__init__(message)
        self.message = message
