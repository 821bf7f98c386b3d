"""API module."""

from .app import create_fastapi_app
from .middleware import InstrumentationMiddleware, render

__all__ = ["InstrumentationMiddleware", "create_fastapi_app", "render"]
