"""
Celery application for broker-backed job dispatch.

Used when WORKER_DISPATCH_BACKEND=celery. The API publishes job ids as
tasks; `celery -A jobserver.workers.celery_app worker` runs them through
the same JobWorker chain as the in-process pool.

Tasks are acknowledged early, so a crashed worker does not cause
redelivery, matching the in-process channel.

Dependencies: celery, jobserver.configs
System role: Durable background task processing
"""

from celery import Celery

from jobserver.configs import get_settings

settings = get_settings()
celery_config = settings.celery

celery_app = Celery(
    "jobserver",
    broker=celery_config.broker_url,
    backend=celery_config.result_backend_url,
    include=["jobserver.workers.tasks.job_processing"],
)

celery_app.conf.update(
    task_serializer=celery_config.task_serializer,
    result_serializer=celery_config.result_serializer,
    accept_content=celery_config.accept_content,
    timezone=celery_config.timezone,
    task_default_queue=celery_config.queue_name,
    task_acks_late=False,
    task_ignore_result=True,
    worker_prefetch_multiplier=1,
)
