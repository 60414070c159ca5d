"""
issue_portal.repositories.user_roles

Repository for `user_roles` rows and the `has_role` database function.

Responsibilities:
- Grant/revoke a role for a user id.
- Enumerate user ids holding a role (in the order the platform returns them).
- Answer "does user X hold role Y" through the platform RPC.
"""

from __future__ import annotations

from issue_portal.platform_clients.rest_http import PlatformRestClient, eq

TABLE = "user_roles"


class UserRoleRepo:
    def __init__(self, rest: PlatformRestClient) -> None:
        self._rest = rest

    async def has_role(self, user_id: str, role: str) -> bool:
        result = await self._rest.rpc("has_role", {"_user_id": user_id, "_role": role})
        return result is True

    async def grant(self, user_id: str, role: str) -> None:
        await self._rest.insert(TABLE, {"user_id": user_id, "role": role}, returning=False)

    async def revoke(self, user_id: str, role: str) -> None:
        await self._rest.delete(TABLE, filters=[eq("user_id", user_id), eq("role", role)])

    async def list_user_ids(self, role: str) -> list[str]:
        rows = await self._rest.select(TABLE, columns="user_id", filters=[eq("role", role)])
        return [str(row["user_id"]) for row in rows]


# --- Module Notes -----------------------------------------------------------
# `has_role` is called with the caller's own token so the platform, not this
# service, decides whether the caller may even ask.
