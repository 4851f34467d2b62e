"""Tests for the application shell: fallbacks, middleware and the HTML page."""

from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from sarweb.api.app import create_app
from sarweb.api.ratelimit import FixedWindowRateLimiter
from sarweb.config.settings import Settings
from tests.conftest import FakeAdapter, make_hit


class _ExplodingAdapter(FakeAdapter):
    """Raises a non-adapter error, which only the terminal handler catches."""

    async def search(self, query: dict[str, Any], **kwargs: Any):  # type: ignore[override]
        raise RuntimeError("unexpected failure in search")


# ── Fallback handlers ────────────────────────────────────────────────────────


class TestFallbacks:
    @pytest.mark.parametrize("path", ["/nope", "/api/nope", "/api/sar-reports/a/b"])
    def test_unmatched_route_returns_not_found(self, client: TestClient, path: str) -> None:
        resp = client.get(path)

        assert resp.status_code == 404
        assert resp.json() == {"error": "Not Found"}

    @pytest.mark.parametrize(
        ("method", "path"),
        [
            ("POST", "/api/sar-reports"),
            ("DELETE", "/api/sar-reports/sar-001"),
            ("PUT", "/api/health"),
            ("POST", "/"),
        ],
    )
    def test_unsupported_method_returns_not_found(self, client: TestClient, method: str, path: str) -> None:
        resp = client.request(method, path)

        assert resp.status_code == 404
        assert resp.json() == {"error": "Not Found"}
        assert "allow" not in resp.headers

    @pytest.mark.parametrize("path", ["/", "/api/health", "/api/sar-reports", "/api/sar-reports/sar-001"])
    def test_head_returns_not_found(self, client: TestClient, path: str) -> None:
        resp = client.head(path)

        assert resp.status_code == 404
        assert "allow" not in resp.headers

    def test_head_serves_static_files(self, client: TestClient) -> None:
        resp = client.head("/static/css/app.css")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/css")

    def test_unhandled_error_redacted_in_production(self, settings: Settings) -> None:
        client = TestClient(create_app(settings, adapter=_ExplodingAdapter()))

        resp = client.get("/api/sar-reports")

        assert resp.status_code == 500
        assert resp.json() == {"error": "Internal Server Error"}

    def test_unhandled_error_detailed_in_development(self, dev_settings: Settings) -> None:
        client = TestClient(create_app(dev_settings, adapter=_ExplodingAdapter()))

        resp = client.get("/api/sar-reports")

        assert resp.status_code == 500
        assert resp.json() == {
            "error": "Internal Server Error",
            "details": "unexpected failure in search",
        }

    def test_unhandled_error_keeps_security_and_cors_headers(self, settings: Settings) -> None:
        client = TestClient(create_app(settings, adapter=_ExplodingAdapter()))

        resp = client.get("/api/sar-reports", headers={"Origin": "https://example.com"})

        assert resp.status_code == 500
        assert "default-src 'self'" in resp.headers["content-security-policy"]
        assert resp.headers["x-content-type-options"] == "nosniff"
        assert resp.headers["access-control-allow-origin"] == "*"
        assert resp.headers["ratelimit-limit"] == "100"


# ── Middleware ───────────────────────────────────────────────────────────────


class TestMiddleware:
    def test_security_headers_present(self, client: TestClient) -> None:
        resp = client.get("/api/health")

        csp = resp.headers["content-security-policy"]
        assert "default-src 'self'" in csp
        assert "https://fonts.googleapis.com" in csp
        assert "https://fonts.gstatic.com" in csp
        assert resp.headers["x-content-type-options"] == "nosniff"
        assert resp.headers["x-frame-options"] == "SAMEORIGIN"

    def test_security_headers_on_not_found(self, client: TestClient) -> None:
        resp = client.get("/nope")
        assert "content-security-policy" in resp.headers

    def test_cors_allows_any_origin(self, client: TestClient) -> None:
        resp = client.get("/api/health", headers={"Origin": "https://example.com"})
        assert resp.headers["access-control-allow-origin"] == "*"

    def test_cors_preflight(self, client: TestClient) -> None:
        resp = client.options(
            "/api/sar-reports",
            headers={
                "Origin": "https://example.com",
                "Access-Control-Request-Method": "GET",
            },
        )
        assert resp.status_code == 200
        assert "GET" in resp.headers["access-control-allow-methods"]

    def test_large_responses_are_compressed(self, client: TestClient) -> None:
        resp = client.get("/api/sar-reports", params={"size": 25}, headers={"Accept-Encoding": "gzip"})

        assert resp.status_code == 200
        assert resp.headers.get("content-encoding") == "gzip"
        assert len(resp.json()["reports"]) == 25

    def test_rate_limit_headers_on_api_routes(self, client: TestClient) -> None:
        resp = client.get("/api/health")

        assert resp.headers["ratelimit-limit"] == "100"
        assert resp.headers["ratelimit-remaining"] == "99"

    def test_non_api_routes_are_not_rate_limited(self, client: TestClient) -> None:
        resp = client.get("/")
        assert "ratelimit-limit" not in resp.headers


class TestRateLimiting:
    def test_101st_request_in_window_is_rejected(self, client: TestClient) -> None:
        for _ in range(100):
            assert client.get("/api/health").status_code == 200

        resp = client.get("/api/sar-reports")

        assert resp.status_code == 429
        assert resp.json() == {"error": "Too many requests, please try again later."}
        assert int(resp.headers["retry-after"]) > 0
        assert resp.headers["ratelimit-remaining"] == "0"

    def test_root_page_still_served_when_limited(self, settings: Settings, adapter: FakeAdapter) -> None:
        limiter = FixedWindowRateLimiter(max_requests=1, window_seconds=60)
        client = TestClient(create_app(settings, adapter=adapter, rate_limiter=limiter))

        assert client.get("/api/health").status_code == 200
        assert client.get("/api/health").status_code == 429
        assert client.get("/").status_code == 200

    def test_window_expiry_admits_requests_again(self, settings: Settings, adapter: FakeAdapter) -> None:
        now = [0.0]
        limiter = FixedWindowRateLimiter(max_requests=2, window_seconds=900, clock=lambda: now[0])
        client = TestClient(create_app(settings, adapter=adapter, rate_limiter=limiter))

        assert client.get("/api/health").status_code == 200
        assert client.get("/api/health").status_code == 200
        assert client.get("/api/health").status_code == 429

        now[0] = 900.0
        assert client.get("/api/health").status_code == 200

    def test_disabled_rate_limit(self, adapter: FakeAdapter) -> None:
        settings = Settings(
            _env_file=None,  # type: ignore[call-arg]
            environment="production",
            rate_limit={"enabled": False, "max_requests": 1},
        )
        client = TestClient(create_app(settings, adapter=adapter))

        for _ in range(3):
            resp = client.get("/api/health")
            assert resp.status_code == 200
            assert "ratelimit-limit" not in resp.headers


# ── Pages and static assets ──────────────────────────────────────────────────


class TestPages:
    def test_index_renders_html(self, client: TestClient) -> None:
        resp = client.get("/")

        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/html")
        assert "SAR Web System" in resp.text
        assert "/static/js/app.js" in resp.text

    def test_static_assets_served(self, client: TestClient) -> None:
        resp = client.get("/static/css/app.css")
        assert resp.status_code == 200
        assert "text/css" in resp.headers["content-type"]

    def test_missing_static_asset_is_not_found(self, client: TestClient) -> None:
        resp = client.get("/static/missing.js")
        assert resp.status_code == 404


# ── Lifespan ─────────────────────────────────────────────────────────────────


class TestLifespan:
    def test_adapter_initialized_and_shut_down(self, settings: Settings) -> None:
        adapter = FakeAdapter([make_hit("sar-1", suspect_name="X")])
        app = create_app(settings, adapter=adapter)

        with TestClient(app) as client:
            assert adapter.initialized is True
            assert client.get("/api/sar-reports/sar-1").json() == {"id": "sar-1", "suspect_name": "X"}

        assert adapter.initialized is False
