"""
FastAPI dependencies shared by the route modules.

The feed client is created once per application by ``create_app`` and
stored on ``app.state``; handlers obtain it through
:func:`get_earthquake_client` so tests can substitute their own.
"""

from fastapi import Request

from ..services.earthquake_client import EarthquakeClient


def get_earthquake_client(request: Request) -> EarthquakeClient:
    return request.app.state.earthquake_client
