"""
Portal API package.

Provides the FastAPI application for the student portal backend.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
