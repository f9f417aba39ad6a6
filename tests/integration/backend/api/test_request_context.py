"""
Integration Tests for Request Context Middleware.

Tests that request context is properly propagated through the API.
"""

import pytest
from httpx import AsyncClient


class TestRequestIdHeader:
    """Tests for X-Request-ID header handling."""

    @pytest.mark.asyncio
    async def test_generates_request_id(self, client: AsyncClient):
        """Should generate X-Request-ID when not provided."""
        response = await client.get("/health")

        assert response.status_code == 200
        # UUID format: 8-4-4-4-12 = 36 characters
        assert len(response.headers["X-Request-ID"]) == 36

    @pytest.mark.asyncio
    async def test_propagates_provided_request_id(self, client: AsyncClient):
        """Should use provided X-Request-ID header."""
        custom_id = "my-custom-request-id-12345"

        response = await client.get("/health", headers={"X-Request-ID": custom_id})

        assert response.status_code == 200
        assert response.headers["X-Request-ID"] == custom_id

    @pytest.mark.asyncio
    async def test_request_id_on_note_endpoints(self, client: AsyncClient):
        for endpoint in ["/health", "/notes", "/notes/paginated"]:
            response = await client.get(endpoint)
            assert len(response.headers["X-Request-ID"]) == 36


class TestResponseTimeHeader:
    """Tests for X-Response-Time header."""

    @pytest.mark.asyncio
    async def test_response_time_is_numeric(self, client: AsyncClient):
        """Should have numeric response time value in milliseconds."""
        response = await client.get("/health")

        time_header = response.headers["X-Response-Time"]
        assert time_header.endswith("ms")
        assert time_header[:-2].isdigit()

    @pytest.mark.asyncio
    async def test_response_time_on_error(self, client: AsyncClient):
        """Should include response time even on error responses."""
        response = await client.get("/notes/999")

        assert response.status_code == 404
        assert "X-Response-Time" in response.headers


class TestRequestContextInErrors:
    """Tests for request context in error responses."""

    @pytest.mark.asyncio
    async def test_error_response_includes_request_id(self, client: AsyncClient):
        """Should include request_id in error response metadata."""
        custom_id = "error-test-request-id"

        response = await client.get("/notes/999", headers={"X-Request-ID": custom_id})

        assert response.status_code == 404
        assert response.json()["metadata"]["request_id"] == custom_id

    @pytest.mark.asyncio
    async def test_validation_error_includes_request_id(self, client: AsyncClient):
        """Should include request_id in validation error response metadata."""
        custom_id = "validation-error-request-id"

        response = await client.post(
            "/notes",
            json={},
            headers={"X-Request-ID": custom_id},
        )

        assert response.status_code == 400
        assert response.json()["metadata"]["request_id"] == custom_id
