"""Health endpoint.

- GET /health: service status, configured sources, and cache state
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter

if TYPE_CHECKING:
    from proxygen.sources.fetcher import SourceFetcher


def create_health_router(*, fetcher: "SourceFetcher") -> APIRouter:
    """Factory that creates the health router with injected dependencies."""
    health_router = APIRouter(tags=["health"])

    @health_router.get("/health")
    async def health() -> dict:
        """Service health check with cache statistics. Never touches the network."""
        return {
            "ok": True,
            "status": "healthy",
            "sources": [source["key"] for source in fetcher.list_sources()],
            "cache": fetcher.cache.get_stats(),
        }

    return health_router
