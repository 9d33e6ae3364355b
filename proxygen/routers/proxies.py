"""Proxy list endpoints.

- GET /api/proxies?source=<key>: normalized records for a source
- GET /api/sources: configured sources
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Query

from proxygen.models.responses import ProxyListResponse

if TYPE_CHECKING:
    from proxygen.sources.fetcher import SourceFetcher


def create_proxies_router(
    *,
    fetcher: "SourceFetcher",
    default_source_key: str = "all",
) -> APIRouter:
    """Factory that creates the proxy list router with injected dependencies.

    Parameters
    ----------
    fetcher:
        SourceFetcher used to resolve and retrieve sources.
    default_source_key:
        Source used when the ``source`` query parameter is missing or empty.
    """
    proxies_router = APIRouter(prefix="/api", tags=["proxies"])

    @proxies_router.get("/proxies")
    async def list_proxies(source: str | None = Query(default=None)) -> dict:
        """Return ``{count, items}`` for a source (unknown keys use the first source)."""
        records = await fetcher.get_records(source or default_source_key)
        return ProxyListResponse(
            count=len(records),
            items=[record.to_dict() for record in records],
        ).model_dump()

    @proxies_router.get("/sources")
    async def list_sources() -> dict:
        sources = fetcher.list_sources()
        return ProxyListResponse(count=len(sources), items=sources).model_dump()

    return proxies_router
