"""User accounts and the DB-backed sessions that identify them."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Boolean, DateTime, Float, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobdispatch.models.base import Base, IdMixin

ROLE_ADMIN = "ADMIN"
ROLE_SUPERVISOR = "SUPERVISOR"
ROLE_TECHNICIAN = "TECHNICIAN"
ROLES = (ROLE_ADMIN, ROLE_SUPERVISOR, ROLE_TECHNICIAN)


class User(Base, IdMixin):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(255), default="")
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), default="")
    role: Mapped[str] = mapped_column(String(20), default=ROLE_TECHNICIAN)  # ADMIN | SUPERVISOR | TECHNICIAN
    is_available: Mapped[bool] = mapped_column(Boolean, default=True)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)

    # Technician location preferences, consumed by dispatchers
    preferred_working_location: Mapped[str | None] = mapped_column(String(255), nullable=True, default=None)
    preferred_latitude: Mapped[float | None] = mapped_column(Float, nullable=True, default=None)
    preferred_longitude: Mapped[float | None] = mapped_column(Float, nullable=True, default=None)
    preferred_radius_km: Mapped[float | None] = mapped_column(Float, nullable=True, default=None)

    jobs = relationship("Job", back_populates="technician", foreign_keys="Job.technician_id")


class UserSession(Base, IdMixin):
    __tablename__ = "user_sessions"

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"))
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, index=True)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    ip_address: Mapped[str] = mapped_column(String(45), default="")
