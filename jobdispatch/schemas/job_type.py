from __future__ import annotations
from datetime import datetime
from pydantic import BaseModel


class JobTypeWrite(BaseModel):
    name: str | None = None
    description: str | None = None


class JobTypeRead(BaseModel):
    id: int
    name: str
    description: str | None = None
    deleted_at: datetime | None = None
    created_at: datetime

    model_config = {"from_attributes": True}
