"""
Test suite for the job endpoints.

JobService is replaced with an AsyncMock through dependency_overrides.

System role: Verification of the job HTTP API contract
"""

from datetime import timedelta
from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient

from jobserver.api.deps import get_job_service
from jobserver.api.main import create_app
from jobserver.application.services.job_service import JobService
from jobserver.core.exceptions import (
    PersistenceError,
    ProjectNotFoundError,
    UserNotFoundError,
)
from jobserver.core.job import JobResult, JobStatus, Payload


@pytest.fixture
def mock_job_service() -> AsyncMock:
    return AsyncMock(spec=JobService)


@pytest.fixture
def client(mock_job_service):
    app = create_app()
    app.dependency_overrides[get_job_service] = lambda: mock_job_service
    return TestClient(app)


class TestSubmitJob:
    """Test suite for POST /jobs."""

    def test_accepted_submission_returns_202(self, client, mock_job_service, make_job) -> None:
        # Arrange
        job = make_job(user_id=1, task="x")
        mock_job_service.submit_job.return_value = job

        # Act
        response = client.post("/jobs", json={"userId": 1, "parameters": {"task": "x"}})

        # Assert
        assert response.status_code == 202
        assert response.json() == {"jobId": job.id, "status": "PENDING"}
        mock_job_service.submit_job.assert_awaited_once_with(
            user_id=1, project_id=None, parameters={"task": "x"}
        )

    def test_parameters_default_to_empty_object(self, client, mock_job_service, make_job) -> None:
        mock_job_service.submit_job.return_value = make_job(user_id=1, project_id=2)

        response = client.post("/jobs", json={"userId": 1, "projectId": 2})

        assert response.status_code == 202
        mock_job_service.submit_job.assert_awaited_once_with(user_id=1, project_id=2, parameters={})

    def test_unknown_user_returns_400(self, client, mock_job_service) -> None:
        mock_job_service.submit_job.side_effect = UserNotFoundError(999)

        response = client.post("/jobs", json={"userId": 999, "parameters": {}})

        assert response.status_code == 400
        assert response.json() == {"error": "User not found: 999"}

    def test_unknown_project_returns_400(self, client, mock_job_service) -> None:
        mock_job_service.submit_job.side_effect = ProjectNotFoundError(5)

        response = client.post("/jobs", json={"userId": 1, "projectId": 5})

        assert response.status_code == 400
        assert response.json() == {"error": "Project not found: 5"}

    def test_storage_failure_returns_generic_500(self, client, mock_job_service) -> None:
        mock_job_service.submit_job.side_effect = PersistenceError("Failed to save: disk full")

        response = client.post("/jobs", json={"userId": 1})

        assert response.status_code == 500
        assert response.json() == {"error": "Internal server error"}

    def test_missing_user_id_returns_400(self, client, mock_job_service) -> None:
        response = client.post("/jobs", json={"parameters": {}})

        assert response.status_code == 400
        assert "userId" in response.json()["error"]
        mock_job_service.submit_job.assert_not_awaited()


class TestGetJob:
    """Test suite for GET /jobs/{job_id}."""

    def test_completed_job_has_result_and_no_error(self, client, mock_job_service, make_job) -> None:
        # Arrange
        job = make_job(user_id=1, project_id=3, task="x")
        job.status = JobStatus.COMPLETED
        job.result = JobResult('{"status":"success"}')
        mock_job_service.get_job.return_value = job

        # Act
        response = client.get(f"/jobs/{job.id}")

        # Assert
        assert response.status_code == 200
        assert response.json() == {
            "jobId": job.id,
            "status": "COMPLETED",
            "userId": 1,
            "projectId": 3,
            "parameters": {"task": "x"},
            "result": {"status": "success"},
            "error": None,
        }
        mock_job_service.get_job.assert_awaited_once_with(job.id)

    def test_failed_job_has_error(self, client, mock_job_service, make_job) -> None:
        job = make_job()
        job.status = JobStatus.FAILED
        job.error_message = "External API returned error: 500 - boom"
        mock_job_service.get_job.return_value = job

        data = client.get(f"/jobs/{job.id}").json()

        assert data["status"] == "FAILED"
        assert data["result"] is None
        assert data["error"] == "External API returned error: 500 - boom"

    def test_non_json_parameters_are_returned_as_text(self, client, mock_job_service, make_job) -> None:
        job = make_job()
        job.parameters = Payload("<task/>", encoding="application/xml")
        mock_job_service.get_job.return_value = job

        assert client.get(f"/jobs/{job.id}").json()["parameters"] == "<task/>"

    def test_unknown_job_returns_404(self, client, mock_job_service) -> None:
        mock_job_service.get_job.return_value = None

        response = client.get("/jobs/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {"error": "Job not found: does-not-exist"}


class TestListUserJobs:
    """Test suite for GET /jobs/user/{user_id}."""

    def test_jobs_are_summarised_in_service_order(self, client, mock_job_service, make_job) -> None:
        # Arrange
        older = make_job(user_id=7)
        newer = make_job(user_id=7, project_id=1)
        newer.created_at = older.created_at + timedelta(seconds=1)
        mock_job_service.get_jobs_by_user.return_value = [newer, older]

        # Act
        response = client.get("/jobs/user/7")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert [item["jobId"] for item in data] == [newer.id, older.id]
        assert set(data[0]) == {"jobId", "status", "userId", "projectId", "createdAt"}
        assert data[0]["projectId"] == 1
        mock_job_service.get_jobs_by_user.assert_awaited_once_with(7)

    def test_user_without_jobs_gets_empty_list(self, client, mock_job_service) -> None:
        mock_job_service.get_jobs_by_user.return_value = []

        response = client.get("/jobs/user/42")

        assert response.status_code == 200
        assert response.json() == []

    def test_user_route_does_not_shadow_job_lookup(self, client, mock_job_service) -> None:
        mock_job_service.get_job.return_value = None

        client.get("/jobs/user")

        mock_job_service.get_job.assert_awaited_once_with("user")
