"""HTTP client module."""

from .http_client import InstrumentedHTTPClient

__all__ = ["InstrumentedHTTPClient"]
