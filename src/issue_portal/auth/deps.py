"""
issue_portal.auth.deps

FastAPI dependency functions for authentication and authorization.

Responsibilities:
- Convert a bearer token into a `Caller` by asking the platform (401 otherwise).
- Require the admin role via the platform's role-check RPC, issued with the caller's token (403 otherwise).
"""

from __future__ import annotations

import httpx
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from issue_portal.api.deps import auth_client, platform_http, settings_dep
from issue_portal.auth.models import Caller
from issue_portal.errors import AuthenticationError, AuthorizationError, UpstreamError
from issue_portal.observability.logging import get_logger
from issue_portal.platform_clients.auth_http import PlatformAuthClient
from issue_portal.platform_clients.base import PlatformCredential
from issue_portal.platform_clients.rest_http import PlatformRestClient
from issue_portal.repositories.user_roles import UserRoleRepo
from issue_portal.settings import Settings

log = get_logger(__name__)

_bearer = HTTPBearer(auto_error=False)


async def get_caller(
    creds: HTTPAuthorizationCredentials | None = Depends(_bearer),
    auth: PlatformAuthClient = Depends(auth_client),
) -> Caller:
    if creds is None or not creds.credentials:
        raise AuthenticationError()

    user = await auth.get_user(creds.credentials)
    if user is None:
        raise AuthenticationError()
    return Caller(id=user.id, email=user.email, access_token=creds.credentials)


async def require_admin(
    caller: Caller = Depends(get_caller),
    settings: Settings = Depends(settings_dep),
    http: httpx.AsyncClient = Depends(platform_http),
) -> Caller:
    # The caller's own credential, not the service key: a role the platform won't
    # confirm for this token is a role the caller doesn't have.
    rest = PlatformRestClient(
        http=http, credential=PlatformCredential.for_caller(settings, caller.access_token)
    )
    try:
        is_admin = await UserRoleRepo(rest).has_role(caller.id, settings.admin_role)
    except UpstreamError as e:
        log.warning("role_check_failed", user_id=caller.id, upstream_status=e.upstream_status)
        is_admin = False

    if not is_admin:
        log.info("admin_required", user_id=caller.id)
        raise AuthorizationError()
    return caller


# --- Module Notes -----------------------------------------------------------
# The role is re-checked on every privileged request; no "is admin" flag is
# cached anywhere in the service.
