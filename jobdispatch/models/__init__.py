"""SQLAlchemy ORM models.

All models share one declarative Base and live in a single database.
"""

from jobdispatch.models.base import Base
from jobdispatch.models.user import (
    User, UserSession, ROLES, ROLE_ADMIN, ROLE_SUPERVISOR, ROLE_TECHNICIAN,
)
from jobdispatch.models.job_type import JobType
from jobdispatch.models.job import Job, JobStatusHistory
from jobdispatch.models.report import TechnicianReport

__all__ = [
    "Base",
    "User", "UserSession", "ROLES", "ROLE_ADMIN", "ROLE_SUPERVISOR", "ROLE_TECHNICIAN",
    "JobType",
    "Job", "JobStatusHistory",
    "TechnicianReport",
]
