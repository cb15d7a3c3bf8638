"""Unit tests for the request middleware."""

from unittest.mock import AsyncMock

import pytest
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from person_service.core.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    TimingMiddleware,
    UnhandledExceptionMiddleware,
)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _make_request(path: str = "/health", method: str = "GET", headers: dict[str, str] | None = None) -> Request:
    """Build a minimal Starlette Request."""
    raw_headers = [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()]
    scope = {
        "type": "http",
        "method": method,
        "path": path,
        "query_string": b"",
        "headers": raw_headers,
        "root_path": "",
    }
    return Request(scope)


async def _ok_handler(request: Request) -> Response:
    """Dummy call_next that always returns 200."""
    return JSONResponse(status_code=200, content={"ok": True})


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestRequestIDMiddleware:
    @pytest.mark.asyncio
    async def test_incoming_request_id_echoed(self) -> None:
        middleware = RequestIDMiddleware(app=AsyncMock())
        request = _make_request(headers={"X-Request-ID": "req-123"})

        response = await middleware.dispatch(request, _ok_handler)

        assert response.headers["X-Request-ID"] == "req-123"
        assert request.state.request_id == "req-123"

    @pytest.mark.asyncio
    async def test_request_id_generated_when_absent(self) -> None:
        middleware = RequestIDMiddleware(app=AsyncMock())
        request = _make_request()

        response = await middleware.dispatch(request, _ok_handler)

        generated = response.headers["X-Request-ID"]
        assert len(generated) == 36
        assert request.state.request_id == generated


class TestTimingMiddleware:
    @pytest.mark.asyncio
    async def test_response_time_header_added(self) -> None:
        middleware = TimingMiddleware(app=AsyncMock())

        response = await middleware.dispatch(_make_request(), _ok_handler)

        assert response.headers["X-Response-Time"].endswith("s")

    @pytest.mark.asyncio
    async def test_request_logged(self, caplog) -> None:
        middleware = TimingMiddleware(app=AsyncMock())

        with caplog.at_level("INFO", logger="person_service.core.middleware"):
            await middleware.dispatch(_make_request(path="/api/key-value/a", method="DELETE"), _ok_handler)

        records = [r for r in caplog.records if r.getMessage() == "Request processed"]
        assert len(records) == 1
        assert records[0].method == "DELETE"
        assert records[0].path == "/api/key-value/a"
        assert records[0].status_code == 200


class TestSecurityHeadersMiddleware:
    @pytest.mark.asyncio
    async def test_headers_added(self) -> None:
        middleware = SecurityHeadersMiddleware(app=AsyncMock())

        response = await middleware.dispatch(_make_request(), _ok_handler)

        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Cache-Control"] == "no-store"


class TestUnhandledExceptionMiddleware:
    @pytest.mark.asyncio
    async def test_exception_rendered_by_handler(self) -> None:
        async def failing_handler(request: Request) -> Response:
            raise RuntimeError("boom")

        async def render(request: Request, exc: Exception) -> Response:
            return JSONResponse(status_code=500, content={"error": type(exc).__name__})

        middleware = UnhandledExceptionMiddleware(app=AsyncMock(), handler=render)

        response = await middleware.dispatch(_make_request(), failing_handler)

        assert response.status_code == 500
        assert response.body == b'{"error":"RuntimeError"}'

    @pytest.mark.asyncio
    async def test_successful_response_passes_through(self) -> None:
        render = AsyncMock()
        middleware = UnhandledExceptionMiddleware(app=AsyncMock(), handler=render)

        response = await middleware.dispatch(_make_request(), _ok_handler)

        assert response.status_code == 200
        render.assert_not_called()
