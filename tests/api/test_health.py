"""
Test suite for the health endpoints.

System role: Verification of liveness and database checks
"""

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from jobserver.api.deps import ServiceCache, get_service_cache
from jobserver.api.main import create_app
from jobserver.configs import Settings
from jobserver.configs.database import DatabaseSettings


@pytest.fixture
def services(tmp_path) -> ServiceCache:
    return ServiceCache(
        Settings(database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'health.db'}"))
    )


def test_health_check_reports_live_workers() -> None:
    services = MagicMock()
    services.worker_pool.running = 4
    app = create_app()
    app.dependency_overrides[get_service_cache] = lambda: services

    response = TestClient(app).get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Server Healthy", "workers": 4}


def test_health_check_without_pool() -> None:
    services = MagicMock()
    services.worker_pool = None
    app = create_app()
    app.dependency_overrides[get_service_cache] = lambda: services

    response = TestClient(app).get("/health")

    assert response.json()["workers"] is None


def test_health_check_db(services) -> None:
    with TestClient(create_app(services)) as client:
        response = client.get("/health/db")

    assert response.status_code == 200
    assert response.json() == {"status": "healthy", "message": "Database connection OK", "workers": None}
