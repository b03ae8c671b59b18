"""Quake Feed API client.

A small wrapper around the HTTP routes of this service, for scripts and
other services that want today's earthquakes without dealing with URLs
and status codes.  The client uses the ``requests`` library and exposes
one method per route:

* :meth:`QuakeFeedAPI.latest` – the most recent earthquake.
* :meth:`QuakeFeedAPI.biggest` – the strongest earthquake.
* :meth:`QuakeFeedAPI.bigger_than` – earthquakes above a magnitude.

Every method returns a tuple ``(data, error)``.  On success ``error`` is
``None``; on failure ``data`` is ``None`` and ``error`` is a dictionary
with the keys ``status_code`` and ``message``.  A 404 from the service
(no events today, or none above the threshold) is reported as an error
like any other non-success status.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Tuple

import requests


logger = logging.getLogger(__name__)

Error = Dict[str, Any]


class QuakeFeedAPI:
    """Client for the earthquake routes of a running Quake Feed API."""

    def __init__(
        self,
        *,
        base_url: str,
        prefix: str = "/api/v1/earthquake",
        session: Optional[requests.Session] = None,
        timeout: float = 15,
    ) -> None:
        """Initialise the API client.

        Args:
            base_url: Root URL of the service, e.g. ``http://localhost:8080``.
            prefix: Path under which the earthquake routes are mounted.
            session: Optional requests session.  If not supplied a
                session will be created automatically.
            timeout: Per-request timeout in seconds.
        """
        self.base_url = base_url.rstrip("/")
        self.prefix = "/" + prefix.strip("/") if prefix.strip("/") else ""
        self.session = session or requests.Session()
        self.timeout = timeout

    def _request(self, path: str) -> Tuple[Optional[Any], Optional[Error]]:
        """GET ``path`` below the earthquake prefix and decode the JSON body."""
        url = f"{self.base_url}{self.prefix}{path}"
        try:
            logger.debug("Sending GET request to %s", url)
            response = self.session.request(method="GET", url=url, timeout=self.timeout)
            response.raise_for_status()
            return response.json(), None
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            message = ""
            if exc.response is not None:
                try:
                    err_json = exc.response.json()
                    message = err_json.get("detail") or str(err_json)
                except ValueError:
                    message = exc.response.text
            if not message:
                message = str(exc)
            logger.error("API request failed (%s): %s", status, message)
            return None, {"status_code": status, "message": message}
        except requests.RequestException as exc:
            logger.error("API request failed: %s", exc)
            return None, {"status_code": None, "message": str(exc)}

    def latest(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve the most recent earthquake of the day."""
        return self._request("/latest")

    def biggest(self) -> Tuple[Optional[Dict[str, Any]], Optional[Error]]:
        """Retrieve the strongest earthquake of the day."""
        return self._request("/biggest")

    def bigger_than(self, threshold: float) -> Tuple[Optional[List[Dict[str, Any]]], Optional[Error]]:
        """Retrieve earthquakes with magnitude strictly above ``threshold``."""
        return self._request(f"/biggerthan/{threshold}")
