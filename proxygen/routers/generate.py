"""URI generation endpoint.

- POST /generate: build trojan/vless URIs for selected proxies, or for a
  whole source when nothing is selected
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

from fastapi import APIRouter, Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from proxygen.models.requests import GenerateRequest

if TYPE_CHECKING:
    from proxygen.services.generation_service import GenerationService

logger = logging.getLogger(__name__)


async def _read_payload(request: Request) -> dict:
    """Decode the body as a JSON object regardless of its content type.

    An empty, undecodable, or non-object body yields ``{}`` so every field
    takes its default.
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        logger.debug("Ignoring undecodable /generate body (%d bytes)", len(raw))
        return {}
    return payload if isinstance(payload, dict) else {}


def create_generate_router(*, generation_service: "GenerationService") -> APIRouter:
    """Factory that creates the generate router with injected dependencies."""
    generate_router = APIRouter(tags=["generate"])

    @generate_router.post("/generate")
    async def generate(request: Request) -> dict:
        """Generate URIs. Missing or unreadable fields use the configured defaults."""
        try:
            body = GenerateRequest.model_validate(await _read_payload(request))
        except ValidationError as exc:
            raise RequestValidationError(exc.errors()) from exc

        response = await generation_service.generate(body)
        return response.model_dump()

    return generate_router
