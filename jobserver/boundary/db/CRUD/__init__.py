"""
CRUD operations for database models.

Exports base CRUD class and the job CRUD implementation
with a pre-instantiated singleton for direct use.

Usage:
    from jobserver.boundary.db.CRUD import job_crud

    job = await job_crud.get_by_id(db, job_id)
"""

from jobserver.boundary.db.CRUD.base_crud import BaseCRUD
from jobserver.boundary.db.CRUD.job_crud import JobCRUD, job_crud

__all__ = [
    "BaseCRUD",
    "JobCRUD",
    "job_crud",
]
