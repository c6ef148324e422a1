"""Completed-lock: a completed job's status can never be changed to anything else."""

from __future__ import annotations

from jobdispatch.services.permissions import Decision

COMPLETED = "completed"
COMPLETED_LOCK_MESSAGE = "Cannot change status of completed jobs"


def is_completed(status: str | None) -> bool:
    return (status or "").lower() == COMPLETED


def check_status_change(current: str | None, requested: str) -> Decision:
    """Decide whether ``current`` may move to ``requested``.

    Comparison is case-insensitive. Completed -> completed is an allowed
    no-op; every transition out of a non-completed status is allowed.
    """
    if is_completed(current) and not is_completed(requested):
        return Decision.deny(COMPLETED_LOCK_MESSAGE)
    return Decision.allow()
