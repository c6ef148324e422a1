"""FastAPI dependency providers for caller resolution and role enforcement."""

from __future__ import annotations

import logging

from fastapi import Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from jobdispatch.db.engine import get_db
from jobdispatch.models.user import ROLE_ADMIN, ROLE_SUPERVISOR, ROLE_TECHNICIAN
from jobdispatch.services.auth import AuthContext, resolve_caller
from jobdispatch.services.permissions import Decision, has_role

logger = logging.getLogger(__name__)


async def get_optional_auth(
    request: Request,
    db: AsyncSession = Depends(get_db),
) -> AuthContext | None:
    """Resolve the caller from the session cookie; None when anonymous."""
    return await resolve_caller(request, db)


async def require_auth(
    auth: AuthContext | None = Depends(get_optional_auth),
) -> AuthContext:
    """Require a valid authenticated session. Returns AuthContext."""
    if auth is None:
        raise HTTPException(status_code=401, detail="Unauthorized")
    return auth


def enforce(decision: Decision, auth: AuthContext) -> None:
    """Raise 403 for a denied decision."""
    if not decision:
        logger.warning("Denied user %s (%s): %s", auth.user_id, auth.role, decision.reason)
        raise HTTPException(status_code=403, detail=decision.reason or "Forbidden")


def require_role(*allowed_roles: str):
    """Factory: returns a dependency that enforces role membership."""
    async def _check(auth: AuthContext = Depends(require_auth)) -> AuthContext:
        enforce(has_role(auth, *allowed_roles), auth)
        return auth
    return _check


require_admin = require_role(ROLE_ADMIN)
require_admin_or_supervisor = require_role(ROLE_ADMIN, ROLE_SUPERVISOR)
require_technician = require_role(ROLE_TECHNICIAN)
