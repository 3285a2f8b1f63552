"""
Test suite for CeleryDispatchChannel.

The Celery app is a MagicMock; no broker is contacted.

System role: Verification of broker-backed dispatch
"""

from unittest.mock import MagicMock

import pytest

from jobserver.boundary.queue.celery_channel import PROCESS_JOB_TASK, CeleryDispatchChannel
from jobserver.core.exceptions import DispatchError


async def test_publish_sends_one_task_per_job() -> None:
    # Arrange
    app = MagicMock()
    channel = CeleryDispatchChannel(app, queue="jobs")

    # Act
    await channel.publish("job-1")

    # Assert
    app.send_task.assert_called_once_with(PROCESS_JOB_TASK, args=["job-1"], queue="jobs")


async def test_broker_failure_becomes_dispatch_error() -> None:
    app = MagicMock()
    app.send_task.side_effect = ConnectionError("broker unreachable")
    channel = CeleryDispatchChannel(app)

    with pytest.raises(DispatchError, match="broker unreachable"):
        await channel.publish("job-1")


def test_task_name() -> None:
    assert PROCESS_JOB_TASK == "jobserver.process_job"
