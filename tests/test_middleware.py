from __future__ import annotations

import logging
import uuid
from fastapi import status
from typing import TYPE_CHECKING

from bookstore.core.logging import RequestLogFilter, request_id_var

if TYPE_CHECKING:
    from fastapi.testclient import TestClient


class TestRequestContextMiddleware:
    """Test request id propagation."""

    def test_request_id_generated(self, test_client: TestClient) -> None:
        response = test_client.get("/api/authors")

        assert response.status_code == status.HTTP_200_OK
        request_id = response.headers["X-Request-ID"]
        assert uuid.UUID(request_id)

    def test_request_id_echoed(
        self, test_client: TestClient, headers_with_correlation: dict[str, str]
    ) -> None:
        response = test_client.get("/api/books", headers=headers_with_correlation)

        assert response.headers["X-Request-ID"] == headers_with_correlation["X-Request-ID"]

    def test_request_id_on_error_response(self, test_client: TestClient) -> None:
        response = test_client.get("/api/books/missing", headers={"X-Request-ID": "req-42"})

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.headers["X-Request-ID"] == "req-42"

    def test_request_id_reset_after_request(self, test_client: TestClient) -> None:
        test_client.get("/api/authors", headers={"X-Request-ID": "req-1"})

        assert request_id_var.get() == "-"

    def test_access_log_line(self, test_client: TestClient, caplog) -> None:
        with caplog.at_level(logging.INFO, logger="bookstore.core.middleware_request"):
            test_client.get("/api/authors")

        assert any("GET /api/authors -> 200" in r.getMessage() for r in caplog.records)


class TestRequestLogFilter:
    """Test the logging filter."""

    def test_fills_missing_request_id(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)

        assert RequestLogFilter().filter(record) is True
        assert record.request_id == "-"

    def test_uses_context_request_id(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        token = request_id_var.set("abc")
        try:
            RequestLogFilter().filter(record)
        finally:
            request_id_var.reset(token)

        assert record.request_id == "abc"

    def test_keeps_explicit_request_id(self) -> None:
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)
        record.request_id = "given"

        RequestLogFilter().filter(record)

        assert record.request_id == "given"


class TestAppEndpoints:
    """Test root and health endpoints."""

    def test_root(self, test_client: TestClient) -> None:
        response = test_client.get("/")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["endpoints"]["books"] == "/api/books"

    def test_health(self, test_client: TestClient) -> None:
        response = test_client.get("/health")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {"status": "healthy", "database": "reachable"}

    def test_health_unhealthy(self, test_client: TestClient, db_session, monkeypatch) -> None:
        from sqlalchemy.exc import OperationalError

        def _fail(*args, **kwargs):
            raise OperationalError("SELECT 1", {}, Exception("down"))

        monkeypatch.setattr(db_session, "execute", _fail)

        response = test_client.get("/health")

        assert response.status_code == status.HTTP_503_SERVICE_UNAVAILABLE
        assert response.json() == {"status": "unhealthy", "error": "Failed to reach the database"}

    def test_unknown_api_route(self, test_client: TestClient) -> None:
        response = test_client.get("/api/publishers")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json() == {"error": "Not Found"}
