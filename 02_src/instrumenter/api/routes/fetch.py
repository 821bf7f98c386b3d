"""Fetch API routes."""

import httpx
from fastapi import APIRouter, HTTPException, Query, Request
from pydantic import BaseModel

from ...client import InstrumentedHTTPClient
from ..middleware import render


class FetchResponse(BaseModel):
    """Response model for a proxied fetch."""

    url: str
    status: int
    body: str


def create_fetch_router(http_client: InstrumentedHTTPClient) -> APIRouter:
    """Create fetch router."""
    router = APIRouter(prefix="/api", tags=["fetch"])

    @router.get("/fetch", response_model=FetchResponse)
    async def fetch(
        request: Request,
        url: str = Query(..., description="Upstream URL"),
        q: str | None = Query(None, description="Forwarded as ?q="),
    ) -> dict:
        """Fetch an upstream URL through the instrumented client."""
        params = {"q": q} if q else None
        try:
            response = await http_client.get(url, params=params)
        except httpx.HTTPError as e:
            raise HTTPException(status_code=502, detail=str(e))

        return render(
            request,
            lambda: {
                "url": str(response.url),
                "status": response.status_code,
                "body": response.text,
            },
        )

    return router
