"""
issue_portal.api.routers.admin_management

The privileged admin-management endpoint.

Responsibilities:
- Gate every call on a verified admin caller (401/403 from `require_admin`).
- Parse the `action` tag into a typed request and hand it to `AdminManagementService`.
"""

from __future__ import annotations

import json
from typing import Any

from fastapi import APIRouter, Depends, Request

from issue_portal.api.deps import admin_client, service_rest_client, settings_dep
from issue_portal.auth.deps import require_admin
from issue_portal.auth.models import Caller
from issue_portal.errors import ValidationError
from issue_portal.platform_clients.auth_http import PlatformAdminClient
from issue_portal.platform_clients.rest_http import PlatformRestClient
from issue_portal.repositories.user_roles import UserRoleRepo
from issue_portal.services.admin_actions import parse_action
from issue_portal.services.admin_management import AdminManagementService
from issue_portal.settings import Settings

router = APIRouter(prefix="/functions/v1", tags=["admin-management"])


async def _read_payload(request: Request) -> Any:
    raw = await request.body()
    try:
        return json.loads(raw or b"{}")
    except ValueError as e:
        raise ValidationError("Invalid JSON body") from e


@router.post("/admin-management")
async def admin_management(
    request: Request,
    caller: Caller = Depends(require_admin),
    settings: Settings = Depends(settings_dep),
    admin: PlatformAdminClient = Depends(admin_client),
    rest: PlatformRestClient = Depends(service_rest_client),
) -> dict[str, Any]:
    # The body is read only after the caller is authenticated and authorized.
    payload = await _read_payload(request)
    action = parse_action(payload, min_password_length=settings.min_password_length)

    svc = AdminManagementService(settings=settings, admin=admin, roles=UserRoleRepo(rest))
    return await svc.execute(caller=caller, request=action)


# --- Module Notes -----------------------------------------------------------
# The body is read only after the auth dependencies pass, so 401/403 never depend on it.
