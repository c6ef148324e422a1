from __future__ import annotations
from pydantic import BaseModel, Field


class RoleRead(BaseModel):
    name: str


class TechnicianSummary(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class UserRead(BaseModel):
    id: int
    name: str
    email: str
    is_available: bool
    role: RoleRead
    preferred_working_location: str | None = None
    preferred_latitude: float | None = None
    preferred_longitude: float | None = None
    preferred_radius_km: float | None = None


class PreferencesRead(BaseModel):
    id: int
    name: str
    email: str
    is_available: bool
    preferred_working_location: str | None = None
    preferred_latitude: float | None = None
    preferred_longitude: float | None = None
    preferred_radius_km: float | None = None

    model_config = {"from_attributes": True}


class PreferencesUpdate(BaseModel):
    preferred_working_location: str | None = None
    preferred_latitude: float | None = Field(default=None, ge=-90, le=90)
    preferred_longitude: float | None = Field(default=None, ge=-180, le=180)
    preferred_radius_km: float | None = Field(default=None, gt=0)
