"""Job type catalog API: public active listing, admin management."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from jobdispatch.db import crud
from jobdispatch.db.engine import get_db
from jobdispatch.dependencies import require_admin
from jobdispatch.services.auth import AuthContext
from jobdispatch.schemas import JobTypeRead, JobTypeWrite

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/job-types", tags=["job_types"])

DUPLICATE_NAME_MESSAGE = "A job type with this name already exists"


def _clean(body: JobTypeWrite) -> tuple[str, str | None]:
    name = (body.name or "").strip()
    if not name:
        raise HTTPException(400, "Job type name is required")
    return name, body.description or None


async def _get_or_404(db: AsyncSession, job_type_id: int):
    jt = await crud.get_job_type(db, job_type_id)
    if not jt:
        raise HTTPException(404, "Job type not found")
    return jt


@router.get("", response_model=list[JobTypeRead])
async def list_job_types(db: AsyncSession = Depends(get_db)):
    """Active job types, for the job creation form."""
    return await crud.list_active_job_types(db)


@router.get("/all", response_model=list[JobTypeRead])
async def list_deleted_job_types(
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    return await crud.list_deleted_job_types(db)


@router.post("", response_model=JobTypeRead, status_code=201)
async def create_job_type(
    body: JobTypeWrite,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    name, description = _clean(body)
    if await crud.get_job_type_by_name(db, name):
        raise HTTPException(409, DUPLICATE_NAME_MESSAGE)

    try:
        jt = await crud.create_job_type(db, name, description)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(409, DUPLICATE_NAME_MESSAGE)
    logger.info("Job type %s created by user %s: %s", jt.id, auth.user_id, jt.name)
    return jt


@router.patch("/{job_type_id}", response_model=JobTypeRead)
async def update_job_type(
    job_type_id: int,
    body: JobTypeWrite,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    name, description = _clean(body)
    jt = await _get_or_404(db, job_type_id)

    existing = await crud.get_job_type_by_name(db, name)
    if existing and existing.id != jt.id:
        raise HTTPException(409, DUPLICATE_NAME_MESSAGE)

    try:
        jt = await crud.update_job_type(db, jt, name, description)
    except IntegrityError:
        await db.rollback()
        raise HTTPException(409, DUPLICATE_NAME_MESSAGE)
    logger.info("Job type %s updated by user %s", jt.id, auth.user_id)
    return jt


@router.delete("/{job_type_id}")
async def delete_job_type(
    job_type_id: int,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Soft delete: the row stays so jobs keep their foreign key."""
    jt = await _get_or_404(db, job_type_id)
    active_jobs = await crud.count_active_jobs_for_type(db, jt.id)

    if not jt.is_deleted:
        await crud.soft_delete_job_type(db, jt)
    logger.info("Job type %s deleted by user %s (%d active jobs)", jt.id, auth.user_id, active_jobs)
    return {"message": "Job type deleted successfully", "active_jobs_count": active_jobs}


@router.put("/{job_type_id}")
async def restore_job_type(
    job_type_id: int,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    jt = await _get_or_404(db, job_type_id)
    await crud.restore_job_type(db, jt)
    logger.info("Job type %s restored by user %s", jt.id, auth.user_id)
    return {"message": "Job type restored successfully"}
