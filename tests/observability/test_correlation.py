"""
Test suite for correlation ids and logging setup.

System role: Verification of request/job correlation in logs
"""

import logging

from fastapi import FastAPI
from fastapi.testclient import TestClient

from jobserver.observability.correlation import correlation_scope, get_correlation_id, set_correlation_id
from jobserver.observability.logger import CorrelationIdFilter
from jobserver.observability.middleware import CORRELATION_HEADER, CorrelationMiddleware


class TestCorrelationScope:
    """Test suite for the correlation context."""

    def test_scope_binds_and_restores(self) -> None:
        set_correlation_id("outer")

        with correlation_scope("job-1") as correlation_id:
            assert correlation_id == "job-1"
            assert get_correlation_id() == "job-1"

        assert get_correlation_id() == "outer"

    def test_scope_generates_id_when_missing(self) -> None:
        with correlation_scope() as correlation_id:
            assert len(correlation_id) == 36


def test_filter_stamps_records() -> None:
    record = logging.LogRecord("test", logging.INFO, __file__, 1, "msg", None, None)

    with correlation_scope("abc"):
        assert CorrelationIdFilter().filter(record)

    assert record.correlation_id == "abc"


class TestCorrelationMiddleware:
    """Test suite for the HTTP middleware."""

    def _client(self) -> TestClient:
        app = FastAPI()
        app.add_middleware(CorrelationMiddleware)

        @app.get("/ping")
        async def ping() -> dict:
            return {"correlation_id": get_correlation_id()}

        return TestClient(app)

    def test_incoming_header_is_used_and_echoed(self) -> None:
        response = self._client().get("/ping", headers={CORRELATION_HEADER: "req-42"})

        assert response.json() == {"correlation_id": "req-42"}
        assert response.headers[CORRELATION_HEADER] == "req-42"

    def test_id_is_generated_when_header_missing(self) -> None:
        response = self._client().get("/ping")

        assert response.headers[CORRELATION_HEADER] == response.json()["correlation_id"]
        assert response.headers[CORRELATION_HEADER]
