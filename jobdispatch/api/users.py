from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from jobdispatch.db import crud
from jobdispatch.db.engine import get_db
from jobdispatch.dependencies import require_auth
from jobdispatch.services.auth import AuthContext
from jobdispatch.schemas import UserRead

router = APIRouter(prefix="/api/users", tags=["users"])


@router.get("", response_model=list[UserRead])
async def list_users(
    role: str | None = None,
    auth: AuthContext = Depends(require_auth),
    db: AsyncSession = Depends(get_db),
):
    users = await crud.list_users(db, role=role.upper() if role else None)
    return [
        {
            "id": u.id,
            "name": u.name,
            "email": u.email,
            "is_available": u.is_available,
            "role": {"name": u.role},
            "preferred_working_location": u.preferred_working_location,
            "preferred_latitude": u.preferred_latitude,
            "preferred_longitude": u.preferred_longitude,
            "preferred_radius_km": u.preferred_radius_km,
        }
        for u in users
    ]
