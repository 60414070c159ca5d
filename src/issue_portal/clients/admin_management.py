"""
issue_portal.clients.admin_management

HTTP client for the admin-management endpoint, as used by the account page.

Responsibilities:
- Attach the signed-in admin's bearer token and the public apikey.
- Surface the endpoint's `error` field as `AdminManagementError`.
"""

from __future__ import annotations

from typing import Any

import httpx

from issue_portal.models import AdminSummary

ADMIN_MANAGEMENT_PATH = "/functions/v1/admin-management"


class AdminManagementError(Exception):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class AdminManagementClient:
    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        access_token: str,
        anon_key: str = "",
        path: str = ADMIN_MANAGEMENT_PATH,
    ) -> None:
        self._http = http
        self._access_token = access_token
        self._anon_key = anon_key
        self._path = path

    async def _call(self, action: str, **params: Any) -> dict[str, Any]:
        r = await self._http.post(
            self._path,
            json={"action": action, **params},
            headers={
                "Authorization": f"Bearer {self._access_token}",
                "apikey": self._anon_key,
            },
        )
        try:
            body = r.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}
        if "error" in body or not r.is_success:
            raise AdminManagementError(r.status_code, str(body.get("error") or r.text))
        return body

    async def change_password(self, new_password: str, *, user_id: str | None = None) -> None:
        params: dict[str, Any] = {"new_password": new_password}
        if user_id is not None:
            params["user_id"] = user_id
        await self._call("change_password", **params)

    async def create_admin(self, email: str, password: str) -> str:
        body = await self._call("create_admin", email=email, password=password)
        return str(body["user_id"])

    async def list_admins(self) -> list[AdminSummary]:
        body = await self._call("list_admins")
        return [AdminSummary.model_validate(a) for a in body.get("admins", [])]

    async def delete_admin(self, user_id: str) -> None:
        await self._call("delete_admin", user_id=user_id)


# --- Module Notes -----------------------------------------------------------
# Mirrors the endpoint's action names one method each.
