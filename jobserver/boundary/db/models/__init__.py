"""
Database models package.

Exports:
  - JobModel: Job ORM model

Dependencies: sqlalchemy, jobserver.boundary.db.base
System role: Database model definitions for domain entities
"""

from jobserver.boundary.db.models.job_model import JobModel

__all__ = ["JobModel"]
