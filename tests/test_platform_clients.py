from __future__ import annotations

import httpx
import pytest
from fake_platform import ANON_KEY, SERVICE_KEY, FakePlatform

from issue_portal.errors import UpstreamError
from issue_portal.platform_clients.auth_http import PlatformAdminClient, PlatformAuthClient
from issue_portal.platform_clients.base import PlatformCredential, error_message
from issue_portal.platform_clients.rest_http import PlatformRestClient, eq, in_, or_ilike
from issue_portal.settings import Settings


@pytest.mark.parametrize(
    ("body", "expected"),
    [
        ({"msg": "gotrue says no"}, "gotrue says no"),
        ({"message": "postgrest says no", "code": "42501"}, "postgrest says no"),
        ({"error": "invalid_grant", "error_description": "bad creds"}, "bad creds"),
        ({"error": "Duplicate"}, "Duplicate"),
    ],
)
def test_error_message_extraction(body: dict[str, str], expected: str) -> None:
    assert error_message(httpx.Response(400, json=body)) == expected


def test_error_message_falls_back_to_text_then_status() -> None:
    assert error_message(httpx.Response(502, text="bad gateway")) == "bad gateway"
    assert "502" in error_message(httpx.Response(502))


def test_credentials_stay_out_of_repr(settings: Settings) -> None:
    cred = PlatformCredential.service(settings)

    assert SERVICE_KEY not in repr(cred)
    assert SERVICE_KEY not in repr(settings)
    assert cred.headers() == {"apikey": SERVICE_KEY, "Authorization": f"Bearer {SERVICE_KEY}"}


def test_caller_credential_uses_anon_apikey(settings: Settings) -> None:
    cred = PlatformCredential.for_caller(settings, "tok")
    assert cred.headers() == {"apikey": ANON_KEY, "Authorization": "Bearer tok"}


def test_filter_helpers() -> None:
    assert eq("id", "abc") == ("id", "eq.abc")
    assert in_("id", ["a", "b"]) == ("id", "in.(a,b)")
    assert or_ilike(["username", "issue_title"], "lo(g,in)*") == (
        "or",
        "(username.ilike.*login*,issue_title.ilike.*login*)",
    )


@pytest.mark.asyncio
async def test_get_user_returns_none_for_rejected_token(
    settings: Settings, platform: FakePlatform, platform_http: httpx.AsyncClient
) -> None:
    user_id, token = platform.add_user("a@b.com")
    auth = PlatformAuthClient(settings=settings, http=platform_http)

    assert await auth.get_user("nope") is None
    user = await auth.get_user(token)
    assert user is not None and user.id == user_id and user.email == "a@b.com"


@pytest.mark.asyncio
async def test_admin_client_raises_upstream_error(
    settings: Settings, platform_http: httpx.AsyncClient
) -> None:
    admin = PlatformAdminClient(settings=settings, http=platform_http)

    with pytest.raises(UpstreamError) as exc_info:
        await admin.update_user_password(user_id="ghost", password="secret1")
    assert exc_info.value.message == "User not found"
    assert exc_info.value.upstream_status == 404
    assert await admin.get_user(user_id="ghost") is None


@pytest.mark.asyncio
async def test_rest_client_refuses_unfiltered_mutation(
    settings: Settings, platform: FakePlatform, platform_http: httpx.AsyncClient
) -> None:
    rest = PlatformRestClient(http=platform_http, credential=PlatformCredential.service(settings))

    with pytest.raises(ValueError):
        await rest.delete("websites", filters=[])
    with pytest.raises(ValueError):
        await rest.update("websites", {"name": "x"}, filters=[])
    assert platform.calls == []


@pytest.mark.asyncio
async def test_admin_client_keeps_user_id_in_one_path_segment(
    settings: Settings, platform: FakePlatform, platform_http: httpx.AsyncClient
) -> None:
    platform.add_row("reports", username="budi")
    raw_paths: list[bytes] = []
    original = platform.handle

    def spy(request: httpx.Request) -> httpx.Response:
        raw_paths.append(request.url.raw_path)
        return original(request)

    platform.transport.handler = spy  # type: ignore[attr-defined]
    admin = PlatformAdminClient(settings=settings, http=platform_http)

    with pytest.raises(UpstreamError, match="User not found"):
        await admin.delete_user(user_id="../../../../rest/v1/reports?id=neq.x")

    assert raw_paths == [
        b"/auth/v1/admin/users/..%2F..%2F..%2F..%2Frest%2Fv1%2Freports%3Fid%3Dneq.x"
    ]
    assert len(platform.tables["reports"]) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", ["", ".", ".."])
async def test_admin_client_refuses_dot_segment_ids(
    settings: Settings, platform: FakePlatform, platform_http: httpx.AsyncClient, user_id: str
) -> None:
    admin = PlatformAdminClient(settings=settings, http=platform_http)

    with pytest.raises(ValueError):
        await admin.delete_user(user_id=user_id)
    assert platform.calls == []


@pytest.mark.asyncio
async def test_rest_insert_without_returning_asks_for_minimal(
    settings: Settings, platform: FakePlatform, platform_http: httpx.AsyncClient
) -> None:
    prefer: list[str | None] = []
    original = platform.handle

    def spy(request: httpx.Request) -> httpx.Response:
        prefer.append(request.headers.get("prefer"))
        return original(request)

    platform.transport.handler = spy  # type: ignore[attr-defined]
    rest = PlatformRestClient(http=platform_http, credential=PlatformCredential.anonymous(settings))

    assert await rest.insert("reports", {"username": "budi"}, returning=False) == []
    with pytest.raises(UpstreamError, match="permission denied"):
        await rest.insert("reports", {"username": "siti"})

    assert prefer == ["return=minimal", "return=representation"]
    assert [r["username"] for r in platform.tables["reports"]] == ["budi"]
