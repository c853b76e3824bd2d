"""Create a profile row the first time an identity is seen."""
from __future__ import annotations

import logging
import sqlite3
from typing import Literal, Optional

from pydantic import BaseModel

from observability import log_event
from storage.profiles import ProfileRecord, insert_profile_if_absent

from .auth import AuthUser

logger = logging.getLogger(__name__)

SyncReason = Literal["created", "exists", "no-session", "store-error"]


class SyncResult(BaseModel):
    created: bool
    reason: SyncReason
    error: Optional[str] = None


def sync_profile(user: Optional[AuthUser]) -> SyncResult:
    """Insert an empty profile for ``user`` unless one exists.

    Safe to call repeatedly and concurrently; the store's insert-if-absent is
    a single statement.
    """

    if user is None:
        logger.info("sync_profile: no user session yet, skipping")
        return SyncResult(created=False, reason="no-session")
    record = ProfileRecord(
        id=user.id,
        email=user.email,
        full_name=user.name or "",
        phone=user.phone or "",
    )
    try:
        created = insert_profile_if_absent(record)
    except sqlite3.Error as exc:
        logger.warning("sync_profile: insert failed for %s: %s", user.id, exc)
        return SyncResult(created=False, reason="store-error", error=str(exc))
    if not created:
        return SyncResult(created=False, reason="exists")
    log_event("profile_created", "-", reason=user.email or user.id)
    return SyncResult(created=True, reason="created")


__all__ = ["SyncResult", "sync_profile"]
