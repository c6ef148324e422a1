"""Job model: dispatched to technicians, with a status change log."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobdispatch.models.base import Base, IdMixin, utcnow


class Job(Base, IdMixin):
    __tablename__ = "jobs"

    job_type_id: Mapped[int] = mapped_column(Integer, ForeignKey("job_types.id"))
    # Snapshot of the type name at creation; renaming the type leaves it alone
    job_type_name: Mapped[str | None] = mapped_column(String(200), nullable=True, default=None)
    technician_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True, default=None)
    status: Mapped[str] = mapped_column(String(50), default="Pending")
    location: Mapped[str] = mapped_column(String(500), default="")
    start_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)
    end_time: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    job_type = relationship("JobType", back_populates="jobs", lazy="selectin")
    technician = relationship("User", back_populates="jobs", foreign_keys=[technician_id], lazy="selectin")
    reports = relationship(
        "TechnicianReport", back_populates="job", lazy="selectin",
        order_by="TechnicianReport.submission_date.desc()",
    )
    status_history = relationship(
        "JobStatusHistory", back_populates="job",
        order_by="JobStatusHistory.changed_at.desc()",
    )


class JobStatusHistory(Base, IdMixin):
    __tablename__ = "job_status_history"

    job_id: Mapped[int] = mapped_column(Integer, ForeignKey("jobs.id"))
    previous_status: Mapped[str] = mapped_column(String(50))
    current_status: Mapped[str] = mapped_column(String(50))
    user_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("users.id"), nullable=True)
    changed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    job = relationship("Job", back_populates="status_history")
