from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel, field_validator
from jobdispatch.schemas.job_type import JobTypeRead
from jobdispatch.schemas.report import ReportWithAuthor
from jobdispatch.schemas.user import TechnicianSummary
from jobdispatch.services.scheduling import as_utc


class JobCreate(BaseModel):
    job_type_id: int
    location: str
    start_time: datetime
    end_time: datetime | None = None
    status: str = "Pending"
    technician_id: int | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalise_times(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class JobUpdate(BaseModel):
    """Partial update. An explicit null technician_id unassigns the job;
    an explicit null end_time clears it."""
    location: str | None = None
    start_time: datetime | None = None
    end_time: datetime | None = None
    status: str | None = None
    technician_id: int | None = None

    @field_validator("start_time", "end_time")
    @classmethod
    def normalise_times(cls, v: datetime | None) -> datetime | None:
        return as_utc(v)


class JobRead(BaseModel):
    id: int
    job_type_id: int
    job_type_name: str | None = None
    technician_id: int | None = None
    status: str
    location: str
    start_time: datetime
    end_time: datetime | None = None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class JobSummary(JobRead):
    job_type: JobTypeRead | None = None
    technician: TechnicianSummary | None = None


class JobDetail(JobSummary):
    reports: list[ReportWithAuthor] = []


class StatusHistoryRead(BaseModel):
    id: int
    job_id: int
    previous_status: str
    current_status: str
    user_id: int | None = None
    changed_at: datetime

    model_config = {"from_attributes": True}
