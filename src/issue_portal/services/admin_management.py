"""
issue_portal.services.admin_management

Privileged admin-account operations.

Responsibilities:
- Change a password, create an admin, list admins, delete an admin.
- Use only the elevated platform clients handed in; never the caller's token.
- Refuse self-deletion before any destructive call.

Multi-step actions are not transactional. `create_admin` leaves the account in
place when the role grant fails; `delete_admin` revokes the role before deleting
the account, so a failed delete leaves a non-admin account behind.
"""

from __future__ import annotations

from typing import Any

from issue_portal.auth.models import Caller
from issue_portal.errors import ValidationError
from issue_portal.models import AdminSummary
from issue_portal.observability.logging import get_logger
from issue_portal.platform_clients.auth_http import PlatformAdminClient
from issue_portal.repositories.user_roles import UserRoleRepo
from issue_portal.services.admin_actions import (
    CANNOT_DELETE_SELF,
    CREDENTIALS_REQUIRED,
    PASSWORD_TOO_SHORT,
    USER_ID_REQUIRED,
    ActionRequest,
    ChangePassword,
    CreateAdmin,
    DeleteAdmin,
    ListAdmins,
)
from issue_portal.settings import Settings

log = get_logger(__name__)


class AdminManagementService:
    def __init__(
        self,
        *,
        settings: Settings,
        admin: PlatformAdminClient,
        roles: UserRoleRepo,
    ) -> None:
        self._settings = settings
        self._admin = admin
        self._roles = roles

    async def execute(self, *, caller: Caller, request: ActionRequest) -> dict[str, Any]:
        if isinstance(request, ChangePassword):
            await self.change_password(
                caller=caller, new_password=request.new_password, user_id=request.user_id
            )
            return {"success": True}
        if isinstance(request, CreateAdmin):
            user_id = await self.create_admin(
                email=request.email, password=request.password, actor=caller.id
            )
            return {"success": True, "user_id": user_id}
        if isinstance(request, ListAdmins):
            admins = await self.list_admins()
            return {"success": True, "admins": [a.model_dump() for a in admins]}
        if isinstance(request, DeleteAdmin):
            await self.delete_admin(caller=caller, user_id=request.user_id)
            return {"success": True}
        raise TypeError(f"unsupported action request: {type(request).__name__}")

    async def change_password(
        self, *, caller: Caller, new_password: str, user_id: str | None = None
    ) -> None:
        min_length = self._settings.min_password_length
        if len(new_password) < min_length:
            raise ValidationError(PASSWORD_TOO_SHORT.format(min_length=min_length))

        # An empty or missing user_id means "my own password".
        target = user_id or caller.id
        await self._admin.update_user_password(user_id=target, password=new_password)
        log.info("password_changed", actor=caller.id, user_id=target)

    async def create_admin(self, *, email: str, password: str, actor: str) -> str:
        if not email or not password:
            raise ValidationError(CREDENTIALS_REQUIRED)

        user = await self._admin.create_user(email=email, password=password, email_confirm=True)
        log.info("account_created", actor=actor, user_id=user.id)

        # No rollback: if the grant fails the account stays, without the role.
        await self._roles.grant(user.id, self._settings.admin_role)
        log.info("admin_role_granted", actor=actor, user_id=user.id)
        return user.id

    async def list_admins(self) -> list[AdminSummary]:
        admins: list[AdminSummary] = []
        for user_id in await self._roles.list_user_ids(self._settings.admin_role):
            user = await self._admin.get_user(user_id=user_id)
            if user is None:
                # Role row outlived its account.
                log.warning("admin_role_without_account", user_id=user_id)
                continue
            admins.append(
                AdminSummary(
                    id=user.id,
                    email=user.email,
                    created_at=user.created_at,
                    last_sign_in_at=user.last_sign_in_at,
                )
            )
        return admins

    async def delete_admin(self, *, caller: Caller, user_id: str) -> None:
        if not user_id:
            raise ValidationError(USER_ID_REQUIRED)
        if user_id == caller.id:
            raise ValidationError(CANNOT_DELETE_SELF)

        # Role first: a failed account delete leaves a non-admin account, never an admin
        # without an account entry.
        await self._roles.revoke(user_id, self._settings.admin_role)
        log.info("admin_role_revoked", actor=caller.id, user_id=user_id)
        await self._admin.delete_user(user_id=user_id)
        log.info("account_deleted", actor=caller.id, user_id=user_id)


# --- Module Notes -----------------------------------------------------------
# Concurrent create/delete calls for the same account are not coordinated here;
# duplicate role rows or delete-after-delete are left to platform constraints.
