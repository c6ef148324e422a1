"""Pure permission checks.

Each check takes the resolved caller and returns a Decision; the HTTP layer
turns a denial into 403 (and an anonymous caller into 401).
"""

from __future__ import annotations

from dataclasses import dataclass

from jobdispatch.models.user import ROLE_ADMIN, ROLE_TECHNICIAN
from jobdispatch.services.auth import AuthContext


@dataclass(frozen=True)
class Decision:
    allowed: bool
    reason: str = ""

    @classmethod
    def allow(cls) -> "Decision":
        return cls(True)

    @classmethod
    def deny(cls, reason: str) -> "Decision":
        return cls(False, reason)

    def __bool__(self) -> bool:
        return self.allowed


def has_role(auth: AuthContext, *roles: str) -> Decision:
    if auth.role in roles:
        return Decision.allow()
    return Decision.deny("Insufficient permissions")


def can_act_on_job(auth: AuthContext, technician_id: int | None) -> Decision:
    """Admins may act on any job; technicians only on jobs assigned to them."""
    if auth.role == ROLE_ADMIN:
        return Decision.allow()
    if auth.role == ROLE_TECHNICIAN and technician_id is not None and auth.user_id == technician_id:
        return Decision.allow()
    return Decision.deny("Forbidden")
