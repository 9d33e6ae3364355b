"""Request correlation IDs.

Every request gets an ID: the caller's ``X-Request-ID`` when it is a short
token, otherwise a fresh UUID4. The ID is exposed three ways: on
``request.state.request_id``, through ``request_id_var`` (read by the
logging filter so fetcher and service logs carry it), and echoed back in the
``X-Request-ID`` response header.
"""

from __future__ import annotations

import re
import uuid
from contextvars import ContextVar

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Caller IDs end up in log lines; anything else is replaced
_ACCEPTED_ID_RE = re.compile(r"[A-Za-z0-9._\-]{1,128}")

request_id_var: ContextVar[str | None] = ContextVar("request_id", default=None)


def resolve_request_id(incoming: str | None) -> str:
    """Return *incoming* if it is an acceptable token, else a new UUID4."""
    if incoming and _ACCEPTED_ID_RE.fullmatch(incoming):
        return incoming
    return str(uuid.uuid4())


class RequestIdMiddleware(BaseHTTPMiddleware):
    """Binds a correlation ID to each request for the duration of the call."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        token = request_id_var.set(request_id)
        try:
            response: Response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
