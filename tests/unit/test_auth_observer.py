from services.auth import AuthStateObserver, AuthUser
from services.profile_sync import sync_profile
from storage.profiles import select_profile

from tests.fakes import FakeIdentityProvider


def test_existing_user_is_handled_on_start():
    seen = []
    provider = FakeIdentityProvider(AuthUser(id="u1", email="a@example.com"))

    with AuthStateObserver(provider, seen.append) as observer:
        assert observer.active

    assert [u.id for u in seen] == ["u1"]


def test_sign_in_events_reach_callback_and_sign_out_is_ignored():
    seen = []
    provider = FakeIdentityProvider()

    with AuthStateObserver(provider, seen.append):
        assert seen == []
        provider.sign_in_with_otp("b@example.com", "http://localhost/dashboard")
        provider.sign_out()
        provider.sign_in_with_oauth("google", "http://localhost/dashboard")

    assert [u.id for u in seen] == ["otp-b@example.com", "google-user"]


def test_leaving_scope_unsubscribes_exactly_once():
    seen = []
    provider = FakeIdentityProvider()
    observer = AuthStateObserver(provider, seen.append)

    with observer:
        assert len(provider.listeners) == 1
    observer.stop()

    assert provider.listeners == {}
    assert provider.unsubscribe_calls == 1
    assert not observer.active
    provider.sign_in_with_otp("late@example.com", "http://localhost")
    assert seen == []


def test_start_twice_keeps_single_subscription():
    provider = FakeIdentityProvider()
    observer = AuthStateObserver(provider, lambda _user: None)
    observer.start()
    observer.start()
    assert len(provider.listeners) == 1
    observer.stop()


def test_observer_drives_profile_sync():
    provider = FakeIdentityProvider()

    with AuthStateObserver(provider, sync_profile):
        provider.sign_in_with_otp("c@example.com", "http://localhost")
        provider.emit("TOKEN_REFRESHED")

    record = select_profile("otp-c@example.com")
    assert record is not None
    assert record.email == "c@example.com"
