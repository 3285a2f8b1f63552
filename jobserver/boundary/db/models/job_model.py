"""
Job ORM model.

Persists job records driven through PENDING → PROCESSING → COMPLETED/FAILED.
Payloads are stored as opaque text tagged with their encoding.

Dependencies: sqlalchemy, jobserver.boundary.db.base
System role: Durable storage of job records
"""

from sqlalchemy import BigInteger, Enum, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from jobserver.boundary.db.base import Base, TimestampMixin
from jobserver.core.job import JSON_ENCODING, JobStatus


class JobModel(Base, TimestampMixin):
    """
    Job ORM model.

    Attributes:
        id: UUID string primary key, generated by the service before insert
        user_id: Submitting user
        project_id: Optional project
        status: Lifecycle state (PENDING/PROCESSING/COMPLETED/FAILED)
        parameters: Caller payload content
        parameters_encoding: Encoding tag of ``parameters``
        result: Processor payload content; set only when COMPLETED
        result_encoding: Encoding tag of ``result``
        error_message: Failure reason; set only when FAILED
        created_at: Creation timestamp (UTC)
        updated_at: Last mutation timestamp (UTC)

    Workflow:
        1. API validates the submission and inserts the row with status=PENDING
        2. Worker claims it with a conditional update to PROCESSING
        3. Worker stores result or error_message, then moves to COMPLETED/FAILED
        4. Clients poll GET /jobs/{id}
    """

    __tablename__ = "jobs"
    __table_args__ = (
        Index("ix_jobs_user_id_created_at", "user_id", "created_at"),
    )

    id: Mapped[str] = mapped_column(String(36), primary_key=True)

    user_id: Mapped[int] = mapped_column(BigInteger, nullable=False)

    project_id: Mapped[int | None] = mapped_column(BigInteger, nullable=True)

    status: Mapped[JobStatus] = mapped_column(
        Enum(JobStatus, native_enum=False, length=16),
        nullable=False,
        default=JobStatus.PENDING,
    )

    parameters: Mapped[str] = mapped_column(Text, nullable=False, default="{}")

    parameters_encoding: Mapped[str] = mapped_column(
        String(64),
        nullable=False,
        default=JSON_ENCODING,
    )

    result: Mapped[str | None] = mapped_column(Text, nullable=True)

    result_encoding: Mapped[str | None] = mapped_column(String(64), nullable=True)

    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
