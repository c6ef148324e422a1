"""Admin API: user management support."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobdispatch.db import crud
from jobdispatch.db.engine import get_db
from jobdispatch.dependencies import require_admin
from jobdispatch.services.auth import AuthContext

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/users/{user_id}/deletion-check")
async def deletion_check(
    user_id: int,
    auth: AuthContext = Depends(require_admin),
    db: AsyncSession = Depends(get_db),
):
    """Count the user's open jobs so the UI can warn before removal."""
    incomplete = await crud.count_incomplete_jobs(db, user_id)
    return {"incomplete": incomplete}
