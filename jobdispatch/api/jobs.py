"""Job API: detail, listing, creation, edits, status updates and technician reports."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from jobdispatch.db import crud
from jobdispatch.db.engine import get_db
from jobdispatch.dependencies import require_auth, require_admin_or_supervisor, enforce
from jobdispatch.models.user import ROLE_TECHNICIAN
from jobdispatch.services.auth import AuthContext
from jobdispatch.services.permissions import can_act_on_job
from jobdispatch.services.scheduling import as_utc, overlaps
from jobdispatch.services.status_guard import check_status_change, COMPLETED_LOCK_MESSAGE
from jobdispatch.schemas import (
    JobCreate, JobUpdate, JobSummary, JobDetail, ReportRead, ReportWithAuthor, StatusHistoryRead,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/jobs", tags=["jobs"])


async def _get_job_or_404(db: AsyncSession, job_id: int):
    job = await crud.get_job(db, job_id)
    if not job:
        raise HTTPException(404, "Job not found")
    return job


@router.get("", response_model=list[JobSummary])
async def list_jobs(
    status: str | None = None,
    technician_id: int | None = None,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    # Technicians only ever see their own jobs
    if auth.role == ROLE_TECHNICIAN:
        technician_id = auth.user_id
    return await crud.list_jobs(db, status=status, technician_id=technician_id)


async def _require_active_technician(db: AsyncSession, technician_id: int) -> None:
    tech = await crud.get_user(db, technician_id)
    if not tech or not tech.is_active or tech.role != ROLE_TECHNICIAN:
        raise HTTPException(400, "Technician not found")


@router.post("", response_model=JobSummary, status_code=201)
async def create_job(
    body: JobCreate,
    auth: AuthContext = Depends(require_admin_or_supervisor),
    db: AsyncSession = Depends(get_db),
):
    location = body.location.strip()
    status = body.status.strip()
    if not location or not status:
        raise HTTPException(400, "Location and status are required")
    if body.end_time is not None and body.end_time <= body.start_time:
        raise HTTPException(400, "End time must be after start time")

    job_type = await crud.get_job_type(db, body.job_type_id)
    if not job_type or job_type.is_deleted:
        raise HTTPException(400, "Job type not found or deleted")

    if body.technician_id is not None:
        await _require_active_technician(db, body.technician_id)

    job = await crud.create_job(
        db,
        job_type=job_type,
        location=location,
        start_time=body.start_time,
        end_time=body.end_time,
        status=status,
        technician_id=body.technician_id,
    )
    logger.info("Job %s (%s) created by user %s", job.id, job.job_type_name, auth.user_id)
    return job


@router.patch("/{job_id}", response_model=JobSummary)
async def update_job(
    job_id: int,
    body: JobUpdate,
    auth: AuthContext = Depends(require_admin_or_supervisor),
    db: AsyncSession = Depends(get_db),
):
    """Reassign, reschedule, relocate or restatus a job.

    Only fields present in the body change. A status change is subject to the
    completed-lock and is recorded in the job's status history.
    """
    job = await _get_job_or_404(db, job_id)
    sent = body.model_fields_set
    changes = {}

    if "location" in sent:
        location = (body.location or "").strip()
        if not location:
            raise HTTPException(400, "Location is required")
        changes["location"] = location

    start = body.start_time if body.start_time is not None else as_utc(job.start_time)
    end = body.end_time if "end_time" in sent else as_utc(job.end_time)
    if end is not None and end <= start:
        raise HTTPException(400, "End time must be after start time")
    if body.start_time is not None:
        changes["start_time"] = start
    if "end_time" in sent:
        changes["end_time"] = end

    technician_id = job.technician_id
    if "technician_id" in sent:
        technician_id = body.technician_id
        if technician_id is not None:
            await _require_active_technician(db, technician_id)
        changes["technician_id"] = technician_id

    if technician_id is not None and sent & {"start_time", "end_time", "technician_id"}:
        booked = await crud.list_open_jobs_for_technician(db, technician_id, exclude_job_id=job.id)
        conflicts = [j.id for j in booked if overlaps(start, end, j.start_time, j.end_time)]
        if conflicts:
            raise HTTPException(
                409, f"Scheduling conflict with job(s) {', '.join(str(i) for i in conflicts)}",
            )

    new_status = None
    if "status" in sent:
        if not body.status or not body.status.strip():
            raise HTTPException(400, "Status is required")
        decision = check_status_change(job.status, body.status)
        if not decision:
            raise HTTPException(400, decision.reason)
        if body.status != job.status:
            new_status = body.status

    previous = job.status
    if new_status is not None:
        if not await crud.set_job_status(db, job, new_status, user_id=auth.user_id):
            raise HTTPException(400, COMPLETED_LOCK_MESSAGE)
        logger.info("Job %s status %r -> %r by user %s", job_id, previous, new_status, auth.user_id)

    if changes:
        job = await crud.update_job(db, job, **changes)
        logger.info("Job %s updated by user %s: %s", job_id, auth.user_id, ", ".join(sorted(changes)))
        return job
    return await crud.get_job(db, job_id)


@router.get("/{job_id}", response_model=JobDetail)
async def get_job(
    job_id: int,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    job = await _get_job_or_404(db, job_id)
    reports = await crud.list_reports_for_job(db, job.id)

    detail = JobDetail.model_validate(job)
    detail.reports = [ReportWithAuthor.model_validate(r) for r in reports]
    return detail


@router.get("/{job_id}/history", response_model=list[StatusHistoryRead])
async def get_job_history(
    job_id: int,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    job = await _get_job_or_404(db, job_id)
    return await crud.list_status_history(db, job.id)


@router.patch("/{job_id}/status", response_model=JobSummary)
async def update_job_status(
    job_id: int,
    body: dict,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    job = await _get_job_or_404(db, job_id)
    enforce(can_act_on_job(auth, job.technician_id), auth)

    new_status = body.get("status")
    if not isinstance(new_status, str) or not new_status.strip():
        raise HTTPException(400, "Status is required")

    decision = check_status_change(job.status, new_status)
    if not decision:
        raise HTTPException(400, decision.reason)

    previous = job.status
    if not await crud.set_job_status(db, job, new_status, user_id=auth.user_id):
        # Completed by someone else between our read and the write
        raise HTTPException(400, COMPLETED_LOCK_MESSAGE)

    logger.info("Job %s status %r -> %r by user %s", job_id, previous, new_status, auth.user_id)
    return await crud.get_job(db, job_id)


@router.post("/{job_id}/report", response_model=ReportRead, status_code=201)
async def submit_report(
    job_id: int,
    body: dict,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    job = await _get_job_or_404(db, job_id)
    enforce(can_act_on_job(auth, job.technician_id), auth)

    notes = body.get("notes")
    if not isinstance(notes, str) or not notes.strip():
        raise HTTPException(400, "Notes are required")

    images = body.get("images")
    if images is None:
        images = []
    elif not isinstance(images, list):
        raise HTTPException(400, "Images must be a list")

    signature = body.get("signature")
    if signature is not None and not isinstance(signature, str):
        raise HTTPException(400, "Signature must be a string")
    signature = signature or None

    report = await crud.create_report(
        db, job_id=job.id, user_id=auth.user_id,
        notes=notes, images=images, signature=signature,
    )
    logger.info(
        "Report %s submitted for job %s by user %s (%d images, signature=%s)",
        report.id, job.id, auth.user_id, len(images), signature is not None,
    )
    return report
