"""
Top‑level router for version 1 of the API.

Aggregates the endpoint routers under their prefixes.  When new
endpoints are added, update this file to include their routers.
"""

from fastapi import APIRouter

from .endpoints import earthquakes

router = APIRouter()

router.include_router(earthquakes.router, prefix="/earthquake", tags=["earthquake"])
