"""
Gatehouse API package.

Provides the FastAPI application: public auth routes and the
bearer-protected user routes.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
