"""Technician self-service API: availability and location preferences."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from jobdispatch.db import crud
from jobdispatch.db.engine import get_db
from jobdispatch.dependencies import require_technician
from jobdispatch.services.auth import AuthContext
from jobdispatch.schemas import PreferencesRead, PreferencesUpdate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/technician", tags=["technician"])


async def _current_user(db: AsyncSession, auth: AuthContext):
    user = await crud.get_user(db, auth.user_id)
    if not user:
        raise HTTPException(404, "Technician not found")
    return user


@router.post("/availability")
async def set_availability(
    body: dict,
    auth: AuthContext = Depends(require_technician),
    db: AsyncSession = Depends(get_db),
):
    """Toggle the caller's own availability flag."""
    is_available = body.get("isAvailable", body.get("available"))
    # JSON booleans only; "true" or 1 are rejected
    if not isinstance(is_available, bool):
        raise HTTPException(400, "isAvailable must be a boolean")

    user = await _current_user(db, auth)
    await crud.update_user(db, user, is_available=is_available)
    logger.info("Technician %s availability set to %s", auth.user_id, is_available)

    return {
        "success": True,
        "isAvailable": is_available,
        "message": f"Availability updated to {'available' if is_available else 'unavailable'}",
    }


@router.get("/preferences", response_model=PreferencesRead)
async def get_preferences(
    auth: AuthContext = Depends(require_technician),
    db: AsyncSession = Depends(get_db),
):
    return await _current_user(db, auth)


@router.patch("/preferences", response_model=PreferencesRead)
async def update_preferences(
    body: PreferencesUpdate,
    auth: AuthContext = Depends(require_technician),
    db: AsyncSession = Depends(get_db),
):
    user = await _current_user(db, auth)
    updates = body.model_dump(exclude_unset=True)
    if updates:
        user = await crud.update_user(db, user, **updates)
        logger.info("Technician %s updated preferences: %s", auth.user_id, sorted(updates))
    return user
