"""Response models for the public API.

Successful responses are returned as-is; failures are rendered by the
exception handlers as ``{ok: false, error}``.
"""

from __future__ import annotations

from pydantic import BaseModel


class ProxyListResponse(BaseModel):
    """Body of ``GET /api/proxies`` and ``GET /api/sources``."""

    count: int
    items: list[dict]


class SchemeCounts(BaseModel):
    trojan: int = 0
    vless: int = 0


class GenerateResponse(BaseModel):
    """Body of a successful ``POST /generate``."""

    ok: bool = True
    counts: SchemeCounts
    trojan: list[str]
    vless: list[str]
    combined: str
