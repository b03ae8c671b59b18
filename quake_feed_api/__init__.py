"""
Top‑level package for the Quake Feed API.

The service itself lives in the ``app`` subpackage and can be imported
using fully qualified names like ``quake_feed_api.app.main``.  The
``client`` and ``cli`` modules provide a small consumer for the
service's HTTP routes.
"""

__all__ = []
