"""Authentication service: DB-backed session lookup and bcrypt passwords.

Sessions are issued elsewhere; this module only resolves a session cookie to
the caller's identity.
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from datetime import datetime, timezone

import bcrypt
from fastapi import Request
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from jobdispatch.config import get_settings
from jobdispatch.models.user import User, UserSession


@dataclass
class AuthContext:
    user_id: int
    role: str  # 'ADMIN' | 'SUPERVISOR' | 'TECHNICIAN'
    email: str
    name: str


def hash_password(plain: str) -> str:
    return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def _hash_token(token: str) -> str:
    """SHA-256 hash of a session token for DB storage."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


async def validate_session(token: str, db: AsyncSession) -> User | None:
    """Look up session by token hash, return User if valid."""
    token_hash = _hash_token(token)
    result = await db.execute(
        select(UserSession).where(
            UserSession.token_hash == token_hash,
            UserSession.expires_at > datetime.now(timezone.utc),
        )
    )
    session = result.scalars().first()
    if not session:
        return None

    user = await db.get(User, session.user_id)
    if not user or not user.is_active:
        return None
    return user


async def resolve_caller(request: Request, db: AsyncSession) -> AuthContext | None:
    """Read the session cookie and return the caller, or None when anonymous."""
    token = request.cookies.get(get_settings().session_cookie_name)
    if not token:
        return None

    user = await validate_session(token, db)
    if not user:
        return None

    return AuthContext(
        user_id=user.id,
        role=user.role,
        email=user.email,
        name=user.name,
    )
