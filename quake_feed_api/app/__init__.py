"""
Application package initializer.

The service is organised into small pieces: ``core`` holds
configuration, logging, tracing and the error taxonomy; ``schemas``
holds the pydantic models for the upstream feed and for our own
responses; ``services`` holds the feed client that fetches and derives
earthquake data; ``api`` exposes the versioned routes.
"""

from .main import app  # noqa: F401
