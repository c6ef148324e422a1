from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel


class ReportAuthor(BaseModel):
    name: str
    email: str

    model_config = {"from_attributes": True}


class ReportRead(BaseModel):
    id: int
    job_id: int
    user_id: int
    notes: str
    images: list = []
    signature: str | None = None
    submission_date: datetime

    model_config = {"from_attributes": True}


class ReportWithAuthor(ReportRead):
    user: ReportAuthor | None = None
