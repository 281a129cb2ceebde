"""
Integration tests for informational routes and middleware.
"""

import socket

import httpx
from prometheus_client import REGISTRY


def request_count(labels):
    return REGISTRY.get_sample_value("demoapp_http_requests_total", labels) or 0


class TestWebRoutes:
    """Integration tests for /, /version, /metrics and /logger."""

    async def test_root(self, client):
        """Test the landing page names app, host and version."""
        response = await client.get("/")

        assert response.status_code == 200
        assert response.text == f"demoapp | {socket.gethostname()} | 1.2.3"

    async def test_version(self, client):
        """Test build information as JSON."""
        response = await client.get("/version")

        assert response.status_code == 200
        assert response.json()["branch"] == "main"

    async def test_metrics(self, client):
        """Test Prometheus exposition."""
        labels = {"handler": "/-/healthy", "code": "200"}
        before = request_count(labels)
        await client.get("/-/healthy")

        response = await client.get("/metrics")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/plain")
        assert "demoapp_ready" in response.text
        assert "demoapp_http_requests_total" in response.text
        assert request_count(labels) == before + 1

    async def test_logger(self, client, container, log_records):
        """Test one line per level is logged and the level returned."""
        container.reporter.set_level("warn")

        response = await client.get("/logger")

        assert response.text == "warning"
        levels = [r.levelname for r in log_records.records if "path=/logger" in r.getMessage()]
        assert levels == ["WARNING", "ERROR"]


class TestMiddleware:
    """Integration tests for request logging and stack tracing."""

    async def test_request_id_generated(self, client):
        """Test responses carry a request id."""
        response = await client.get("/-/healthy")

        assert response.headers["X-Request-ID"]

    async def test_request_id_propagated(self, client, log_records):
        """Test an incoming request id is echoed and logged."""
        response = await client.get("/-/healthy", headers={"X-Request-ID": "req-42"})

        assert response.headers["X-Request-ID"] == "req-42"
        assert any("request_id=req-42" in m for m in log_records.messages())

    async def test_unhandled_error_logged_with_traceback(self, app, log_records):
        """Test handler crashes are logged with their stack and answered 500."""

        async def explode():
            raise RuntimeError("handler exploded")

        app.add_api_route("/explode", explode)
        transport = httpx.ASGITransport(app=app, raise_app_exceptions=False)

        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/explode")

        assert response.status_code == 500
        crashes = [r for r in log_records.records if "handler exploded" in r.getMessage()]
        assert crashes
        assert crashes[0].exc_info is not None

    async def test_unmatched_paths_share_one_label(self, client):
        """Test unknown paths do not create a series per path."""
        labels = {"handler": "unmatched", "code": "404"}
        before = request_count(labels)

        await client.get("/no/such/page/1")
        await client.get("/no/such/page/2")

        assert request_count(labels) == before + 2
        assert (
            REGISTRY.get_sample_value(
                "demoapp_http_requests_total",
                {"handler": "/no/such/page/1", "code": "404"},
            )
            is None
        )

    async def test_mounted_route_label(self, client, ready_container):
        """Test status routes are labeled with their full path template."""
        labels = {"handler": "/api/v1/status/config", "code": "200"}
        before = request_count(labels)

        response = await client.get("/api/v1/status/config")

        assert response.status_code == 200
        assert request_count(labels) == before + 1

    async def test_gated_request_label(self, client):
        """Test requests refused by the readiness gate use the mount path."""
        labels = {"handler": "/api/v1", "code": "503"}
        before = request_count(labels)

        response = await client.get("/api/v1/status/flags")

        assert response.status_code == 503
        assert request_count(labels) == before + 1
