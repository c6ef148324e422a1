"""Shared fixtures: in-memory database, seeded accounts, per-user API clients."""

from __future__ import annotations

import os

os.environ.setdefault("JOBDISPATCH_DATABASE_URL", "sqlite+aiosqlite:///:memory:")

from datetime import datetime, timezone, timedelta
from types import SimpleNamespace

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from jobdispatch.db.engine import get_db
from jobdispatch.main import app
from jobdispatch.models import Base, User, UserSession, ROLE_ADMIN, ROLE_SUPERVISOR, ROLE_TECHNICIAN
from jobdispatch.services.auth import _hash_token

SESSION_COOKIE_NAME = "session_token"


async def seed_user(
    factory, role: str, name: str, email: str,
    token: str | None = None, expires_in: timedelta = timedelta(hours=24),
    is_active: bool = True,
) -> tuple[User, str]:
    """Insert a user plus a session row; returns (user, raw token)."""
    token = token or f"token-{email}"
    async with factory() as db:
        user = User(name=name, email=email, role=role, is_active=is_active)
        db.add(user)
        await db.flush()
        db.add(UserSession(
            user_id=user.id,
            token_hash=_hash_token(token),
            expires_at=datetime.now(timezone.utc) + expires_in,
            ip_address="127.0.0.1",
        ))
        await db.commit()
        await db.refresh(user)
    return user, token


@pytest_asyncio.fixture
async def session_factory():
    engine = create_async_engine("sqlite+aiosqlite:///:memory:", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    yield factory
    await engine.dispose()


@pytest_asyncio.fixture
async def db(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def api(session_factory):
    """Clients for an admin, a supervisor, two technicians and an anonymous caller."""
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    transport = ASGITransport(app=app)
    clients = []

    def client_for(token: str | None = None) -> AsyncClient:
        cookies = {SESSION_COOKIE_NAME: token} if token else None
        c = AsyncClient(transport=transport, base_url="http://test", cookies=cookies)
        clients.append(c)
        return c

    admin, admin_token = await seed_user(session_factory, ROLE_ADMIN, "Alice Admin", "admin@test.com")
    supervisor, sup_token = await seed_user(session_factory, ROLE_SUPERVISOR, "Sam Supervisor", "sup@test.com")
    tech, tech_token = await seed_user(session_factory, ROLE_TECHNICIAN, "Terry Tech", "tech@test.com")
    other, other_token = await seed_user(session_factory, ROLE_TECHNICIAN, "Olive Other", "other@test.com")

    yield SimpleNamespace(
        factory=session_factory,
        client_for=client_for,
        admin=client_for(admin_token),
        supervisor=client_for(sup_token),
        tech=client_for(tech_token),
        other_tech=client_for(other_token),
        anon=client_for(),
        admin_user=admin,
        supervisor_user=supervisor,
        tech_user=tech,
        other_tech_user=other,
    )

    for c in clients:
        await c.aclose()
    app.dependency_overrides.clear()


async def create_job_type(client: AsyncClient, name: str = "HVAC Repair", **extra) -> dict:
    r = await client.post("/api/job-types", json={"name": name, **extra})
    assert r.status_code == 201, r.text
    return r.json()


async def create_job(
    client: AsyncClient, job_type_id: int, technician_id: int | None = None,
    status: str = "Pending", start_time: str = "2026-10-20T09:00:00Z",
) -> dict:
    r = await client.post("/api/jobs", json={
        "job_type_id": job_type_id,
        "location": "12 Jalan Ampang, Kuala Lumpur",
        "start_time": start_time,
        "status": status,
        "technician_id": technician_id,
    })
    assert r.status_code == 201, r.text
    return r.json()
