"""Job type catalog: soft-deleted via deleted_at."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column, relationship

from jobdispatch.models.base import Base, IdMixin


class JobType(Base, IdMixin):
    __tablename__ = "job_types"

    name: Mapped[str] = mapped_column(String(200), unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True, default=None)
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True, default=None)

    jobs = relationship("Job", back_populates="job_type")

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
