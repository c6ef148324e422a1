"""Pydantic request/response schemas."""

from jobdispatch.schemas.job_type import JobTypeWrite, JobTypeRead
from jobdispatch.schemas.report import ReportRead, ReportWithAuthor
from jobdispatch.schemas.user import (
    UserRead, RoleRead, TechnicianSummary, PreferencesRead, PreferencesUpdate,
)
from jobdispatch.schemas.job import (
    JobCreate, JobUpdate, JobRead, JobSummary, JobDetail, StatusHistoryRead,
)

__all__ = [
    "JobTypeWrite", "JobTypeRead",
    "ReportRead", "ReportWithAuthor",
    "UserRead", "RoleRead", "TechnicianSummary", "PreferencesRead", "PreferencesUpdate",
    "JobCreate", "JobUpdate", "JobRead", "JobSummary", "JobDetail", "StatusHistoryRead",
]
