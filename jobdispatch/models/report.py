from __future__ import annotations

from datetime import datetime

from sqlalchemy import Text, JSON, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobdispatch.models.base import Base, IdMixin, utcnow


class TechnicianReport(Base, IdMixin):
    __tablename__ = "technician_reports"

    user_id: Mapped[int] = mapped_column(Integer, ForeignKey("users.id"))
    job_id: Mapped[int] = mapped_column(Integer, ForeignKey("jobs.id"))
    notes: Mapped[str] = mapped_column(Text)
    images: Mapped[list] = mapped_column(JSON, default=list)
    signature: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    submission_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow)

    user = relationship("User", lazy="selectin")
    job = relationship("Job", back_populates="reports")
