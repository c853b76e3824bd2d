"""Profile store backed by SQLite."""
from __future__ import annotations

import datetime as dt
from typing import Optional

from pydantic import BaseModel

from .sqlite import get_conn

PROFILE_FIELDS = (
    "id",
    "email",
    "full_name",
    "college_name",
    "city",
    "birth_date",
    "highest_education",
    "phone",
    "linkedin_url",
    "github_url",
    "resume_url",
    "preferred_roles",
    "updated_at",
)


class ProfileRecord(BaseModel):
    id: str
    email: Optional[str] = None
    full_name: str = ""
    college_name: str = ""
    city: str = ""
    birth_date: Optional[str] = None
    highest_education: str = ""
    phone: str = ""
    linkedin_url: str = ""
    github_url: str = ""
    resume_url: str = ""
    preferred_roles: str = ""
    updated_at: Optional[str] = None


def _values(record: ProfileRecord) -> tuple:
    data = record.model_dump()
    return tuple(data[name] for name in PROFILE_FIELDS)


def select_profile(profile_id: str) -> Optional[ProfileRecord]:
    with get_conn() as conn:
        row = conn.execute(
            f"SELECT {', '.join(PROFILE_FIELDS)} FROM profiles WHERE id = ?",
            (profile_id,),
        ).fetchone()
    return ProfileRecord(**dict(row)) if row else None


def upsert_profile(record: ProfileRecord) -> ProfileRecord:
    """Insert or replace every column of the profile, stamping ``updated_at``."""

    record = record.model_copy(update={"updated_at": dt.datetime.now(dt.timezone.utc).isoformat()})
    columns = ", ".join(PROFILE_FIELDS)
    placeholders = ", ".join("?" for _ in PROFILE_FIELDS)
    updates = ", ".join(f"{name} = excluded.{name}" for name in PROFILE_FIELDS if name != "id")
    with get_conn() as conn:
        conn.execute(
            f"INSERT INTO profiles ({columns}) VALUES ({placeholders}) ON CONFLICT(id) DO UPDATE SET {updates}",
            _values(record),
        )
    return record


def insert_profile_if_absent(record: ProfileRecord) -> bool:
    """Insert the profile unless a row with the same id exists.

    The existence check and the insert are a single statement, so concurrent
    callers for one id create at most one row. Returns True when a row was
    created.
    """

    columns = ", ".join(PROFILE_FIELDS)
    placeholders = ", ".join("?" for _ in PROFILE_FIELDS)
    with get_conn() as conn:
        cur = conn.execute(
            f"INSERT INTO profiles ({columns}) VALUES ({placeholders}) ON CONFLICT(id) DO NOTHING",
            _values(record),
        )
        return cur.rowcount == 1
