"""FastAPI application setup."""

from contextlib import asynccontextmanager

from fastapi import FastAPI

from ..app import Instrumentation
from ..client import InstrumentedHTTPClient
from ..config import InstrumentationConfig
from .middleware import InstrumentationMiddleware
from .routes import fetch


def create_fastapi_app(
    instrumentation: Instrumentation | None = None,
    http_client: InstrumentedHTTPClient | None = None,
) -> FastAPI:
    """Create and configure FastAPI application."""
    if instrumentation is None:
        instrumentation = Instrumentation(InstrumentationConfig.from_env())
    instrumentation.start()

    if http_client is None:
        http_client = InstrumentedHTTPClient(instrumentation.instrumenter)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Manage application lifespan."""
        yield
        await http_client.aclose()

    fastapi_app = FastAPI(
        title="Instrumenter API",
        description="Demo host for per-request runtime instrumentation",
        version="0.1.0",
        lifespan=lifespan,
    )
    fastapi_app.state.instrumentation = instrumentation

    fastapi_app.add_middleware(
        InstrumentationMiddleware,
        reporters=[instrumentation.reporter],
    )
    fastapi_app.include_router(fetch.create_fetch_router(http_client))

    return fastapi_app
