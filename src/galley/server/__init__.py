"""ASGI application factory and dependencies for the Galley server."""

from galley.server.app import app, create_app

__all__ = ["app", "create_app"]
