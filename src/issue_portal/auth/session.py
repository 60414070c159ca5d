"""
issue_portal.auth.session

Explicit session state for console clients.

Responsibilities:
- Hold the current (identity, is_admin) pair in one object instead of ambient globals.
- On every session change, re-resolve the identity, re-run the role check and
  notify subscribers.
"""

from __future__ import annotations

import inspect
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field

import httpx

from issue_portal.errors import UpstreamError
from issue_portal.observability.logging import get_logger
from issue_portal.platform_clients.auth_http import PlatformAuthClient
from issue_portal.platform_clients.base import PlatformCredential
from issue_portal.platform_clients.models import PlatformUser
from issue_portal.platform_clients.rest_http import PlatformRestClient
from issue_portal.repositories.user_roles import UserRoleRepo
from issue_portal.settings import Settings

log = get_logger(__name__)


@dataclass(frozen=True, slots=True)
class SessionState:
    user: PlatformUser | None = None
    is_admin: bool = False
    access_token: str | None = field(default=None, repr=False)

    @property
    def signed_in(self) -> bool:
        return self.user is not None


SessionListener = Callable[[SessionState], Awaitable[None] | None]


class SessionTracker:
    """
    Feed it every token change coming from the platform's auth stream
    (sign-in, refresh, sign-out) via `on_session_change`.
    """

    def __init__(self, *, settings: Settings, http: httpx.AsyncClient) -> None:
        self._settings = settings
        self._http = http
        self._auth = PlatformAuthClient(settings=settings, http=http)
        self._listeners: list[SessionListener] = []
        self._state = SessionState()

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def on_session_change(self, access_token: str | None) -> SessionState:
        state = await self._resolve(access_token)
        self._state = state
        for listener in list(self._listeners):
            result = listener(state)
            if inspect.isawaitable(result):
                await result
        return state

    async def _resolve(self, access_token: str | None) -> SessionState:
        if not access_token:
            return SessionState()
        user = await self._auth.get_user(access_token)
        if user is None:
            return SessionState()

        rest = PlatformRestClient(
            http=self._http,
            credential=PlatformCredential.for_caller(self._settings, access_token),
        )
        try:
            is_admin = await UserRoleRepo(rest).has_role(user.id, self._settings.admin_role)
        except UpstreamError:
            log.warning("session_role_check_failed", user_id=user.id)
            is_admin = False
        return SessionState(user=user, is_admin=is_admin, access_token=access_token)


# --- Module Notes -----------------------------------------------------------
# Listeners get the new state after it is stored, so `tracker.state` is already current
# inside a callback.
