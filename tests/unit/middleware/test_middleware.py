"""Unit tests for middleware."""

import pytest
from fastapi import FastAPI
from fastapi.responses import JSONResponse
from httpx import ASGITransport, AsyncClient

from api.middleware.logging import RequestLoggingMiddleware
from api.middleware.request_id import RequestIDMiddleware, resolve_request_id
from api.middleware.security import SecurityHeadersMiddleware


def _create_app_with_middleware() -> FastAPI:
    """Create a minimal FastAPI app with the production middleware stack."""
    app = FastAPI()
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/test")
    async def _():
        return {"ok": True}

    @app.get("/cached")
    async def _cached():
        return JSONResponse({"ok": True}, headers={"Cache-Control": "max-age=60"})

    return app


async def _get(path: str, **kwargs):
    app = _create_app_with_middleware()
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        return await c.get(path, **kwargs)


class TestSecurityHeadersMiddleware:
    """Tests for SecurityHeadersMiddleware."""

    @pytest.mark.asyncio
    async def test_adds_x_content_type_options(self):
        """Response includes X-Content-Type-Options: nosniff."""
        response = await _get("/test")

        assert response.headers["x-content-type-options"] == "nosniff"

    @pytest.mark.asyncio
    async def test_adds_x_frame_options(self):
        """Response includes X-Frame-Options: DENY."""
        response = await _get("/test")

        assert response.headers["x-frame-options"] == "DENY"

    @pytest.mark.asyncio
    async def test_adds_referrer_policy(self):
        """Response includes Referrer-Policy header."""
        response = await _get("/test")

        assert response.headers["referrer-policy"] == "strict-origin-when-cross-origin"

    @pytest.mark.asyncio
    async def test_responses_are_not_cached_by_default(self):
        """Authenticated payloads must not be stored by shared caches."""
        response = await _get("/test")

        assert response.headers["cache-control"] == "no-store"

    @pytest.mark.asyncio
    async def test_route_cache_control_is_kept(self):
        """A route's own Cache-Control header is not overwritten."""
        response = await _get("/cached")

        assert response.headers["cache-control"] == "max-age=60"


class TestRequestIDMiddleware:
    """Tests for RequestIDMiddleware."""

    @pytest.mark.asyncio
    async def test_generates_request_id_when_not_provided(self):
        """Response includes a generated X-Request-ID header."""
        response = await _get("/test")

        assert len(response.headers["x-request-id"]) == 32

    @pytest.mark.asyncio
    async def test_propagates_existing_request_id(self):
        """A well-formed X-Request-ID is propagated to the response."""
        response = await _get("/test", headers={"X-Request-ID": "custom-req-123"})

        assert response.headers["x-request-id"] == "custom-req-123"

    @pytest.mark.asyncio
    async def test_replaces_malformed_request_id(self):
        """Ids with unsafe characters are replaced, not echoed."""
        response = await _get("/test", headers={"X-Request-ID": "bad id; drop"})

        assert response.headers["x-request-id"] != "bad id; drop"
        assert len(response.headers["x-request-id"]) == 32

    def test_resolve_request_id_rejects_overlong_values(self):
        assert resolve_request_id("a" * 65) != "a" * 65
        assert resolve_request_id("a" * 64) == "a" * 64

    def test_resolve_request_id_generates_unique_ids(self):
        assert resolve_request_id(None) != resolve_request_id(None)
