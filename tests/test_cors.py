"""
Tests for path-scoped CORS.

/api/** only admits the configured frontend origins, with credentials.
/actuator/** admits any origin but only for GET.
"""

import pytest


def preflight_headers(origin, method):
    return {
        "Origin": origin,
        "Access-Control-Request-Method": method,
        "Access-Control-Request-Headers": "Content-Type",
    }


class TestApiCors:

    @pytest.mark.parametrize(
        "origin",
        ["http://localhost:3000", "http://localhost:4200", "http://localhost:8081"],
    )
    async def test_preflight_allowed_origin(self, client, origin):
        response = await client.options(
            "/api/v1/accounts", headers=preflight_headers(origin, "POST")
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == origin
        assert response.headers["access-control-allow-credentials"] == "true"
        assert response.headers["access-control-max-age"] == "3600"
        for method in ("GET", "POST", "PUT", "DELETE", "OPTIONS"):
            assert method in response.headers["access-control-allow-methods"]

    async def test_preflight_unknown_origin_rejected(self, client):
        response = await client.options(
            "/api/v1/accounts", headers=preflight_headers("http://evil.example", "POST")
        )
        assert response.status_code == 400
        assert "access-control-allow-origin" not in response.headers

    async def test_simple_request_echoes_origin(self, client):
        response = await client.get(
            "/api/v1/accounts", headers={"Origin": "http://localhost:3000"}
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "http://localhost:3000"


class TestActuatorCors:

    async def test_any_origin_allowed_for_get(self, client):
        response = await client.get(
            "/actuator/info", headers={"Origin": "http://anywhere.example"}
        )

        assert response.status_code == 200
        assert response.headers["access-control-allow-origin"] == "*"

    async def test_preflight_rejects_non_get(self, client):
        response = await client.options(
            "/actuator/health", headers=preflight_headers("http://anywhere.example", "POST")
        )
        assert response.status_code == 400

    async def test_preflight_get(self, client):
        response = await client.options(
            "/actuator/health", headers=preflight_headers("http://anywhere.example", "GET")
        )
        assert response.status_code == 200
        assert response.headers["access-control-max-age"] == "3600"


class TestUnscopedPaths:

    async def test_docs_get_no_cors_headers(self, client):
        response = await client.get(
            "/v3/api-docs", headers={"Origin": "http://localhost:3000"}
        )
        assert response.status_code == 200
        assert "access-control-allow-origin" not in response.headers
