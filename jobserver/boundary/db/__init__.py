"""
Database boundary layer: ORM model, CRUD operations, connection management
and the JobRepository implementation.

Exports:
  - Base, TimestampMixin: Model building blocks
  - get_async_engine(), get_async_session_factory(): Async connection management
  - JobModel: Job ORM model
  - job_crud: CRUD operation singleton
  - SqlAlchemyJobRepository: Persistence port adapter
  - create_all_tables(): Schema creation

Dependencies: sqlalchemy, jobserver.configs
System role: Database adapter providing durable storage for job records
"""

from jobserver.boundary.db.base import Base, TimestampMixin
from jobserver.boundary.db.connection import get_async_engine, get_async_session_factory
from jobserver.boundary.db.models.job_model import JobModel
from jobserver.boundary.db.CRUD import BaseCRUD, JobCRUD, job_crud
from jobserver.boundary.db.job_repository import SqlAlchemyJobRepository
from jobserver.boundary.db.create_tables import create_all_tables, drop_all_tables

__all__ = [
    "Base",
    "TimestampMixin",
    "get_async_engine",
    "get_async_session_factory",
    "JobModel",
    "BaseCRUD",
    "JobCRUD",
    "job_crud",
    "SqlAlchemyJobRepository",
    "create_all_tables",
    "drop_all_tables",
]
