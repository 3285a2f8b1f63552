"""
End-to-end job flow through the FastAPI app.

Real repository (temporary SQLite file), in-process worker pool and the
HTTP processor client pointed at an httpx MockTransport.

System role: Verification of submit → dispatch → process → lookup
"""

import time

import httpx
import pytest
from fastapi.testclient import TestClient

from jobserver.api.deps import ServiceCache
from jobserver.api.main import create_app
from jobserver.boundary.processor import HttpJobProcessor
from jobserver.configs import Settings
from jobserver.configs.database import DatabaseSettings
from jobserver.configs.registry import RegistrySettings
from jobserver.configs.worker import WorkerSettings


class ProcessorStub:
    """Answers every /process call with the configured status."""

    def __init__(self) -> None:
        self.status_code = 200

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if self.status_code >= 400:
            return httpx.Response(self.status_code, text="Internal Server Error")
        return httpx.Response(200, json={"status": "success"})


@pytest.fixture
def processor_stub() -> ProcessorStub:
    return ProcessorStub()


@pytest.fixture
def client(tmp_path, processor_stub):
    settings = Settings(
        database=DatabaseSettings(url=f"sqlite+aiosqlite:///{tmp_path / 'flow.db'}", create_tables=True),
        registry=RegistrySettings(user_ids=[1, 2], project_ids=[10]),
        worker=WorkerSettings(instances=2),
    )
    services = ServiceCache(settings)
    services._processor = HttpJobProcessor(
        base_url="http://processor:8081/",
        client=httpx.AsyncClient(transport=httpx.MockTransport(processor_stub)),
    )
    with TestClient(create_app(services)) as test_client:
        yield test_client


def wait_for_terminal(client: TestClient, job_id: str, timeout: float = 5.0) -> dict:
    deadline = time.monotonic() + timeout
    while True:
        data = client.get(f"/jobs/{job_id}").json()
        if data["status"] in ("COMPLETED", "FAILED") or time.monotonic() > deadline:
            return data
        time.sleep(0.02)


def test_submitted_job_completes(client) -> None:
    # Act
    response = client.post("/jobs", json={"userId": 1, "projectId": 10, "parameters": {"task": "x"}})

    # Assert
    assert response.status_code == 202
    assert response.json()["status"] == "PENDING"
    data = wait_for_terminal(client, response.json()["jobId"])
    assert data["status"] == "COMPLETED"
    assert data["result"] == {"status": "success"}
    assert data["error"] is None
    assert data["parameters"] == {"task": "x"}


def test_processor_500_fails_job(client, processor_stub) -> None:
    # Arrange
    processor_stub.status_code = 500

    # Act
    response = client.post("/jobs", json={"userId": 1, "parameters": {}})

    # Assert
    data = wait_for_terminal(client, response.json()["jobId"])
    assert data["status"] == "FAILED"
    assert "500" in data["error"]
    assert data["result"] is None


def test_unknown_user_is_rejected_and_nothing_stored(client) -> None:
    response = client.post("/jobs", json={"userId": 999, "parameters": {}})

    assert response.status_code == 400
    assert response.json() == {"error": "User not found: 999"}
    assert client.get("/jobs/user/999").json() == []


def test_unknown_project_is_rejected(client) -> None:
    response = client.post("/jobs", json={"userId": 1, "projectId": 11})

    assert response.status_code == 400
    assert response.json() == {"error": "Project not found: 11"}


def test_user_listing_is_newest_first(client) -> None:
    ids = [client.post("/jobs", json={"userId": 2, "parameters": {"n": n}}).json()["jobId"] for n in range(3)]

    listing = client.get("/jobs/user/2").json()

    assert [item["jobId"] for item in listing] == list(reversed(ids))
    assert all(item["userId"] == 2 for item in listing)
