"""CRUD operations for users, job types, jobs and technician reports."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import select, update, func
from sqlalchemy.ext.asyncio import AsyncSession

from jobdispatch.models import (
    User, JobType, Job, JobStatusHistory, TechnicianReport,
)
from jobdispatch.services.status_guard import COMPLETED, is_completed

# Statuses that no longer count as open work
CLOSED_STATUSES = ("Completed", "Cancelled")
# Statuses that count as active when a job type is retired
ACTIVE_STATUSES = ("pending", "in progress", "in_progress")


# ── Users ────────────────────────────────────────────────

async def get_user(db: AsyncSession, user_id: int) -> User | None:
    return await db.get(User, user_id)


async def get_user_by_email(db: AsyncSession, email: str) -> User | None:
    result = await db.execute(select(User).where(User.email == email))
    return result.scalars().first()


async def create_user(
    db: AsyncSession, name: str, email: str, role: str,
    password_hash: str = "", is_available: bool = True,
) -> User:
    user = User(
        name=name, email=email, role=role,
        password_hash=password_hash, is_available=is_available,
    )
    db.add(user)
    await db.commit()
    await db.refresh(user)
    return user


async def list_users(db: AsyncSession, role: str | None = None) -> list[User]:
    stmt = select(User).where(User.is_active == True)
    if role:
        stmt = stmt.where(User.role == role)
    result = await db.execute(stmt.order_by(User.name))
    return list(result.scalars().all())


async def update_user(db: AsyncSession, user: User, **kwargs) -> User:
    for k, v in kwargs.items():
        setattr(user, k, v)
    await db.commit()
    await db.refresh(user)
    return user


async def count_incomplete_jobs(db: AsyncSession, user_id: int) -> int:
    """Jobs assigned to a user whose status is neither Completed nor Cancelled."""
    result = await db.execute(
        select(func.count(Job.id)).where(
            Job.technician_id == user_id,
            Job.status.not_in(CLOSED_STATUSES),
        )
    )
    return result.scalar_one()


# ── JobType ──────────────────────────────────────────────

async def get_job_type(db: AsyncSession, job_type_id: int) -> JobType | None:
    return await db.get(JobType, job_type_id)


async def get_job_type_by_name(db: AsyncSession, name: str) -> JobType | None:
    result = await db.execute(select(JobType).where(JobType.name == name))
    return result.scalars().first()


async def list_active_job_types(db: AsyncSession) -> list[JobType]:
    result = await db.execute(
        select(JobType).where(JobType.deleted_at.is_(None)).order_by(JobType.name)
    )
    return list(result.scalars().all())


async def list_deleted_job_types(db: AsyncSession) -> list[JobType]:
    result = await db.execute(
        select(JobType).where(JobType.deleted_at.is_not(None)).order_by(JobType.name)
    )
    return list(result.scalars().all())


async def create_job_type(db: AsyncSession, name: str, description: str | None = None) -> JobType:
    jt = JobType(name=name, description=description)
    db.add(jt)
    await db.commit()
    await db.refresh(jt)
    return jt


async def update_job_type(db: AsyncSession, jt: JobType, name: str, description: str | None) -> JobType:
    jt.name = name
    jt.description = description
    await db.commit()
    await db.refresh(jt)
    return jt


async def soft_delete_job_type(db: AsyncSession, jt: JobType) -> JobType:
    jt.deleted_at = datetime.now(timezone.utc)
    await db.commit()
    await db.refresh(jt)
    return jt


async def restore_job_type(db: AsyncSession, jt: JobType) -> JobType:
    jt.deleted_at = None
    await db.commit()
    await db.refresh(jt)
    return jt


async def count_active_jobs_for_type(db: AsyncSession, job_type_id: int) -> int:
    result = await db.execute(
        select(func.count(Job.id)).where(
            Job.job_type_id == job_type_id,
            func.lower(Job.status).in_(ACTIVE_STATUSES),
        )
    )
    return result.scalar_one()


# ── Job ──────────────────────────────────────────────────

async def get_job(db: AsyncSession, job_id: int) -> Job | None:
    result = await db.execute(
        select(Job).where(Job.id == job_id).execution_options(populate_existing=True)
    )
    return result.scalars().first()


async def list_jobs(
    db: AsyncSession, status: str | None = None, technician_id: int | None = None,
) -> list[Job]:
    stmt = select(Job)
    if status:
        stmt = stmt.where(Job.status == status)
    if technician_id is not None:
        stmt = stmt.where(Job.technician_id == technician_id)
    result = await db.execute(stmt.order_by(Job.start_time.desc(), Job.id.desc()))
    return list(result.scalars().all())


async def create_job(
    db: AsyncSession, job_type: JobType, location: str, start_time: datetime,
    status: str = "Pending", end_time: datetime | None = None,
    technician_id: int | None = None,
) -> Job:
    job = Job(
        job_type_id=job_type.id,
        job_type_name=job_type.name,
        location=location,
        start_time=start_time,
        end_time=end_time,
        status=status,
        technician_id=technician_id,
    )
    db.add(job)
    await db.commit()
    return await get_job(db, job.id)


async def update_job(db: AsyncSession, job: Job, **fields) -> Job:
    """Apply schedule, location and assignment changes. Status goes through set_job_status."""
    for k, v in fields.items():
        setattr(job, k, v)
    await db.commit()
    return await get_job(db, job.id)


async def list_open_jobs_for_technician(
    db: AsyncSession, technician_id: int, exclude_job_id: int | None = None,
) -> list[Job]:
    """Jobs that still occupy the technician's schedule."""
    stmt = select(Job).where(
        Job.technician_id == technician_id,
        func.lower(Job.status).not_in([s.lower() for s in CLOSED_STATUSES]),
    )
    if exclude_job_id is not None:
        stmt = stmt.where(Job.id != exclude_job_id)
    result = await db.execute(stmt.order_by(Job.start_time))
    return list(result.scalars().all())


async def set_job_status(
    db: AsyncSession, job: Job, new_status: str, user_id: int | None = None,
) -> bool:
    """Write ``new_status`` unless the stored status is completed.

    The check and the write are one conditional UPDATE, so a job completed by
    a concurrent request cannot be reopened. Returns False when the update was
    not applied. Moving to a completed status is always applied.
    """
    previous = job.status
    stmt = (
        update(Job)
        .where(Job.id == job.id)
        .values(status=new_status, updated_at=datetime.now(timezone.utc))
        .execution_options(synchronize_session=False)
    )
    if not is_completed(new_status):
        stmt = stmt.where(func.lower(Job.status) != COMPLETED)

    result = await db.execute(stmt)
    if result.rowcount == 0:
        return False

    if new_status != previous:
        db.add(JobStatusHistory(
            job_id=job.id,
            previous_status=previous,
            current_status=new_status,
            user_id=user_id,
        ))
    await db.commit()
    await db.refresh(job, attribute_names=["status", "updated_at"])
    return True


async def list_status_history(db: AsyncSession, job_id: int) -> list[JobStatusHistory]:
    result = await db.execute(
        select(JobStatusHistory)
        .where(JobStatusHistory.job_id == job_id)
        .order_by(JobStatusHistory.changed_at.desc(), JobStatusHistory.id.desc())
    )
    return list(result.scalars().all())


# ── TechnicianReport ─────────────────────────────────────

async def create_report(
    db: AsyncSession, job_id: int, user_id: int, notes: str,
    images: list | None = None, signature: str | None = None,
) -> TechnicianReport:
    report = TechnicianReport(
        job_id=job_id, user_id=user_id, notes=notes,
        images=images or [], signature=signature,
    )
    db.add(report)
    await db.commit()
    await db.refresh(report)
    return report


async def list_reports_for_job(db: AsyncSession, job_id: int) -> list[TechnicianReport]:
    result = await db.execute(
        select(TechnicianReport)
        .where(TechnicianReport.job_id == job_id)
        .order_by(TechnicianReport.submission_date.desc(), TechnicianReport.id.desc())
    )
    return list(result.scalars().all())
