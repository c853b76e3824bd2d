import sqlite3
import threading

from services.auth import AuthUser
from services.profile_sync import sync_profile
from storage import profiles
from storage.profiles import select_profile
from storage.sqlite import get_conn


def _count(profile_id: str) -> int:
    with get_conn() as conn:
        return conn.execute("SELECT COUNT(*) FROM profiles WHERE id = ?", (profile_id,)).fetchone()[0]


def test_first_sync_creates_empty_profile():
    result = sync_profile(AuthUser(id="u1", email="ada@example.com", name="Ada", phone="555"))

    assert result.created is True
    assert result.reason == "created"
    record = select_profile("u1")
    assert record.email == "ada@example.com"
    assert record.full_name == "Ada"
    assert record.phone == "555"
    assert record.college_name == ""
    assert record.preferred_roles == ""


def test_second_sync_leaves_existing_profile_untouched():
    sync_profile(AuthUser(id="u1", email="ada@example.com", name="Ada"))
    with get_conn() as conn:
        conn.execute("UPDATE profiles SET city = 'Pune' WHERE id = 'u1'")

    result = sync_profile(AuthUser(id="u1", email="other@example.com", name="Someone else"))

    assert result.created is False
    assert result.reason == "exists"
    record = select_profile("u1")
    assert record.city == "Pune"
    assert record.email == "ada@example.com"
    assert _count("u1") == 1


def test_no_user_is_a_no_op():
    result = sync_profile(None)
    assert result.reason == "no-session"
    with get_conn() as conn:
        assert conn.execute("SELECT COUNT(*) FROM profiles").fetchone()[0] == 0


def test_concurrent_syncs_create_one_row():
    user = AuthUser(id="u-race", email="race@example.com")
    barrier = threading.Barrier(8)
    results = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        result = sync_profile(user)
        with lock:
            results.append(result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert _count("u-race") == 1
    assert sum(1 for r in results if r.created) == 1
    assert all(r.reason in ("created", "exists") for r in results)


def test_store_failure_is_reported(monkeypatch):
    def broken(_record):
        raise sqlite3.OperationalError("database is locked")

    monkeypatch.setattr("services.profile_sync.insert_profile_if_absent", broken)

    result = sync_profile(AuthUser(id="u2"))

    assert result.created is False
    assert result.reason == "store-error"
    assert "locked" in result.error


def test_insert_if_absent_reports_creation():
    record = profiles.ProfileRecord(id="u3", email="x@example.com")
    assert profiles.insert_profile_if_absent(record) is True
    assert profiles.insert_profile_if_absent(record) is False
