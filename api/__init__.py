"""
BridgeIt API package.

Provides the FastAPI application for the BridgeIt directory, chat and
catalog service.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
