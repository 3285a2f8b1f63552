"""
Test suite for HttpJobProcessor.

Uses httpx.MockTransport in place of the external service.

System role: Verification of the external processor client
"""

import json

import httpx
import pytest

from jobserver.boundary.processor.http_processor import HttpJobProcessor, build_process_url
from jobserver.core.exceptions import RemoteProcessingError


def make_processor(handler, base_url: str = "http://processor:8081/") -> HttpJobProcessor:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return HttpJobProcessor(base_url=base_url, client=client)


class TestBuildProcessUrl:
    """Test suite for endpoint URL joining."""

    @pytest.mark.parametrize(
        "base_url",
        ["http://localhost:8081", "http://localhost:8081/", "http://localhost:8081//"],
    )
    def test_exactly_one_slash_before_process(self, base_url: str) -> None:
        assert build_process_url(base_url) == "http://localhost:8081/process"

    def test_base_path_is_kept(self) -> None:
        assert build_process_url("http://host/api/") == "http://host/api/process"


class TestProcess:
    """Test suite for HttpJobProcessor.process."""

    async def test_success_posts_job_id_and_wraps_body(self, make_job) -> None:
        # Arrange
        requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            requests.append(request)
            return httpx.Response(200, json={"status": "success", "jobId": "ignored"})

        processor = make_processor(handler)
        job = make_job(task="x")

        # Act
        result = await processor.process(job)

        # Assert
        assert result.to_object() == {"status": "success", "jobId": "ignored"}
        assert len(requests) == 1
        assert requests[0].method == "POST"
        assert str(requests[0].url) == "http://processor:8081/process"
        assert json.loads(requests[0].content) == {"jobId": job.id}

    async def test_error_status_raises_with_code_and_body(self, make_job) -> None:
        processor = make_processor(lambda request: httpx.Response(500, text="Internal Server Error"))

        with pytest.raises(RemoteProcessingError) as exc_info:
            await processor.process(make_job())

        assert str(exc_info.value) == "External API returned error: 500 - Internal Server Error"
        assert exc_info.value.status_code == 500

    async def test_client_error_status_is_a_failure_too(self, make_job) -> None:
        processor = make_processor(lambda request: httpx.Response(404, text="no such job"))

        with pytest.raises(RemoteProcessingError) as exc_info:
            await processor.process(make_job())

        assert "404 - no such job" in str(exc_info.value)

    async def test_transport_error_is_wrapped(self, make_job) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("Connection refused", request=request)

        processor = make_processor(handler)

        with pytest.raises(RemoteProcessingError) as exc_info:
            await processor.process(make_job())

        assert "Connection refused" in str(exc_info.value)
        assert exc_info.value.status_code is None
        assert isinstance(exc_info.value.__cause__, httpx.ConnectError)

    async def test_non_json_success_body_is_an_error(self, make_job) -> None:
        processor = make_processor(lambda request: httpx.Response(200, text="not json"))

        with pytest.raises(RemoteProcessingError, match="invalid JSON"):
            await processor.process(make_job())


class TestClientOwnership:
    """Test suite for client lifecycle."""

    async def test_injected_client_is_left_open(self) -> None:
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200, json={})))
        processor = HttpJobProcessor(base_url="http://processor", client=client)

        await processor.aclose()

        assert not client.is_closed
        await client.aclose()

    async def test_own_client_is_closed(self) -> None:
        processor = HttpJobProcessor(base_url="http://processor", timeout_seconds=2.5)

        await processor.aclose()

        assert processor._client.is_closed
