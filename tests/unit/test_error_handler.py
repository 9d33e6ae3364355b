"""Unit tests for the error hierarchy and FastAPI exception handlers."""

from __future__ import annotations

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient
from pydantic import BaseModel

from proxygen.middleware.error_handler import (
    EmptyResultError,
    ProxygenError,
    SourceConfigError,
    SourceFetchError,
    register_error_handlers,
)


# ---------------------------------------------------------------------------
# Test app fixture
# ---------------------------------------------------------------------------


class Payload(BaseModel):
    name: str
    age: int


def _make_app() -> FastAPI:
    """Build a minimal FastAPI app with error handlers registered."""
    app = FastAPI()
    register_error_handlers(app)

    @app.get("/raise-base")
    async def _raise_base():
        raise ProxygenError()

    @app.get("/raise-fetch")
    async def _raise_fetch():
        raise SourceFetchError("Failed to fetch proxyList.txt: 502")

    @app.get("/raise-empty")
    async def _raise_empty():
        raise EmptyResultError()

    @app.get("/raise-details")
    async def _raise_details():
        raise EmptyResultError("Nothing left", source="txt")

    @app.get("/raise-unhandled")
    async def _raise_unhandled():
        raise RuntimeError("something unexpected")

    @app.post("/validate")
    async def _validate(payload: Payload):
        return {"ok": True}

    return app


@pytest.fixture()
def client():
    return TestClient(_make_app(), raise_server_exceptions=False)


# ---------------------------------------------------------------------------
# Error hierarchy tests
# ---------------------------------------------------------------------------


class TestErrorHierarchy:
    def test_all_subclass_proxygen_error(self):
        for cls in (SourceFetchError, EmptyResultError, SourceConfigError):
            assert issubclass(cls, ProxygenError)

    def test_status_codes(self):
        assert ProxygenError.status_code == 500
        assert SourceFetchError.status_code == 500
        assert EmptyResultError.status_code == 400

    def test_default_messages(self):
        assert ProxygenError().message == "Internal error"
        assert SourceFetchError().message == "Failed to fetch proxy source"
        assert EmptyResultError().message == "Proxy list is empty"

    def test_custom_message_override(self):
        err = SourceFetchError("Failed to fetch x: 404")
        assert err.message == "Failed to fetch x: 404"
        assert str(err) == "Failed to fetch x: 404"

    def test_details_kwargs(self):
        err = EmptyResultError("Nothing", source="txt")
        assert err.details == {"source": "txt"}


# ---------------------------------------------------------------------------
# Exception handler tests
# ---------------------------------------------------------------------------


class TestExceptionHandlers:
    @pytest.mark.parametrize(
        "path,expected_status,expected_error",
        [
            ("/raise-base", 500, "Internal error"),
            ("/raise-fetch", 500, "Failed to fetch proxyList.txt: 502"),
            ("/raise-empty", 400, "Proxy list is empty"),
        ],
    )
    def test_error_envelope(self, client, path, expected_status, expected_error):
        resp = client.get(path)
        assert resp.status_code == expected_status
        assert resp.json() == {"ok": False, "error": expected_error}

    def test_details_merged_into_body(self, client):
        resp = client.get("/raise-details")
        assert resp.status_code == 400
        assert resp.json() == {"ok": False, "error": "Nothing left", "source": "txt"}

    def test_pydantic_request_validation_error(self, client):
        resp = client.post("/validate", json={"name": 123})
        assert resp.status_code == 422
        body = resp.json()
        assert body["ok"] is False
        assert body["error"] == "Validation error"
        assert len(body["fields"]) > 0

    def test_unhandled_exception_returns_500_with_message(self, client):
        resp = client.get("/raise-unhandled")
        assert resp.status_code == 500
        assert resp.json() == {"ok": False, "error": "Internal error: something unexpected"}
