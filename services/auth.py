"""Identity provider interface and a scoped auth-state observer."""
from __future__ import annotations

import logging
from typing import Callable, Optional, Protocol

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class AuthUser(BaseModel):  # Signed-in identity as reported by the provider
    id: str
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None


AuthCallback = Callable[[str, Optional[AuthUser]], None]


class IdentityProvider(Protocol):  # External OAuth / magic-link provider
    def get_user(self) -> Optional[AuthUser]: ...

    def sign_in_with_oauth(self, provider: str, redirect_to: str) -> None: ...

    def sign_in_with_otp(self, email: str, redirect_to: str) -> None: ...

    def sign_out(self) -> None: ...

    def on_auth_state_change(self, callback: AuthCallback) -> Callable[[], None]: ...


class AuthStateObserver:
    """Run ``on_user`` for the current user and every later sign-in.

    The subscription lives only inside the ``with`` block; the observer is
    passed explicitly to whatever needs it.
    """

    def __init__(self, provider: IdentityProvider, on_user: Callable[[AuthUser], object]) -> None:
        self._provider = provider
        self._on_user = on_user
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def active(self) -> bool:
        return self._unsubscribe is not None

    def __enter__(self) -> "AuthStateObserver":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def start(self) -> None:
        if self._unsubscribe is not None:
            return
        user = self._provider.get_user()
        if user is not None:
            self._on_user(user)
        self._unsubscribe = self._provider.on_auth_state_change(self._handle)

    def stop(self) -> None:
        unsubscribe, self._unsubscribe = self._unsubscribe, None
        if unsubscribe is not None:
            unsubscribe()

    def _handle(self, event: str, user: Optional[AuthUser]) -> None:
        if user is None:
            logger.debug("Auth event %s without user", event)
            return
        self._on_user(user)


__all__ = ["AuthCallback", "AuthStateObserver", "AuthUser", "IdentityProvider"]
