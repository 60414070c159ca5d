from __future__ import annotations

import httpx
import pytest
from fake_platform import FakePlatform

from issue_portal.auth.session import SessionState, SessionTracker
from issue_portal.settings import Settings


@pytest.fixture
def tracker(settings: Settings, platform_http: httpx.AsyncClient) -> SessionTracker:
    return SessionTracker(settings=settings, http=platform_http)


@pytest.mark.asyncio
async def test_session_change_propagates_identity_and_role(
    tracker: SessionTracker, platform: FakePlatform
) -> None:
    admin_id, token = platform.add_user("root@portal.test", admin=True)
    seen_sync: list[SessionState] = []
    seen_async: list[SessionState] = []

    async def async_listener(state: SessionState) -> None:
        seen_async.append(state)

    tracker.subscribe(seen_sync.append)
    tracker.subscribe(async_listener)

    state = await tracker.on_session_change(token)

    assert state.signed_in and state.is_admin
    assert state.user is not None and state.user.id == admin_id
    assert tracker.state == state
    assert seen_sync == [state] and seen_async == [state]
    assert token not in repr(state)


@pytest.mark.asyncio
async def test_role_is_rechecked_on_every_change(
    tracker: SessionTracker, platform: FakePlatform
) -> None:
    _, token = platform.add_user("root@portal.test", admin=True)
    assert (await tracker.on_session_change(token)).is_admin

    platform.user_roles.clear()
    refreshed = await tracker.on_session_change(token)

    assert refreshed.signed_in and not refreshed.is_admin


@pytest.mark.asyncio
async def test_sign_out_and_invalid_token_give_anonymous_state(
    tracker: SessionTracker, platform: FakePlatform
) -> None:
    _, token = platform.add_user("root@portal.test", admin=True)
    await tracker.on_session_change(token)

    assert await tracker.on_session_change(None) == SessionState()
    assert await tracker.on_session_change("expired") == SessionState()
    assert not tracker.state.signed_in


@pytest.mark.asyncio
async def test_role_check_error_means_not_admin(
    tracker: SessionTracker, platform: FakePlatform
) -> None:
    _, token = platform.add_user("root@portal.test", admin=True)
    platform.fail[("POST", "/rest/v1/rpc/has_role")] = (404, {"message": "function not found"})

    state = await tracker.on_session_change(token)

    assert state.signed_in and not state.is_admin


@pytest.mark.asyncio
async def test_unsubscribe_stops_notifications(tracker: SessionTracker) -> None:
    seen: list[SessionState] = []
    unsubscribe = tracker.subscribe(seen.append)

    await tracker.on_session_change(None)
    unsubscribe()
    unsubscribe()
    await tracker.on_session_change(None)

    assert len(seen) == 1
