"""
Main entrypoint for the Quake Feed API.

This module assembles the FastAPI application, sets up logging and
includes versioned routers.  The ``create_app`` function builds and
configures the app, which is then instantiated at module import time
as ``app``, e.g.::

    uvicorn quake_feed_api.app.main:app --reload

The earthquake routes are served under ``/api/v1/earthquake`` and,
for clients of the earlier service, directly under ``/earthquake``.
"""

import json
import logging
from contextlib import asynccontextmanager
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import Settings, settings as default_settings
from .core.errors import UpstreamError
from .core.logging_config import setup_logging
from .api.v1.router import router as v1_router
from .services.earthquake_client import EarthquakeClient


logger = logging.getLogger(__name__)


class IndentedJSONResponse(JSONResponse):
    """JSON response rendered with two-space indentation."""

    def render(self, content: Any) -> bytes:
        return json.dumps(content, ensure_ascii=False, indent=2).encode("utf-8")


def create_app(
    settings: Optional[Settings] = None,
    earthquake_client: Optional[EarthquakeClient] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Application settings; the module-level ``settings`` by default.
    earthquake_client : Optional[EarthquakeClient]
        Feed client shared by all requests.  Built from ``settings``
        when omitted.  The application closes the client on shutdown.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    # Initialise logging before anything else so that the client and
    # routers can log during setup.
    setup_logging(settings.log_level, settings.log_file)

    client = earthquake_client or EarthquakeClient.from_settings(settings)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("Serving earthquakes from %s (timeout %ss)", client.base_url, client.timeout)
        yield
        await client.aclose()

    app = FastAPI(
        title=settings.project_name,
        version=settings.api_version,
        default_response_class=IndentedJSONResponse,
        lifespan=lifespan,
    )
    app.state.earthquake_client = client

    @app.exception_handler(UpstreamError)
    async def upstream_error_handler(request: Request, exc: UpstreamError) -> JSONResponse:
        status_code = status.HTTP_504_GATEWAY_TIMEOUT if exc.timed_out else status.HTTP_502_BAD_GATEWAY
        body = {"detail": exc.message}
        if exc.status_code is not None:
            body["upstream_status"] = exc.status_code
        logger.warning("%s %s failed upstream: %s", request.method, request.url.path, exc.message)
        return IndentedJSONResponse(status_code=status_code, content=body)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return IndentedJSONResponse(
            status_code=exc.status_code,
            content={"detail": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.get("/health", include_in_schema=False)
    async def health() -> dict:
        return {"status": "ok"}

    app.include_router(v1_router, prefix="/api/v1")
    # Unversioned paths used by the earlier service.
    app.include_router(v1_router)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
