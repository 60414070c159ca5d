"""
issue_portal.repositories.statuses

Repository for the `statuses` reference table.
"""

from __future__ import annotations

from issue_portal.errors import ValidationError
from issue_portal.models import DEFAULT_STATUS_COLOR, Status
from issue_portal.platform_clients.rest_http import PlatformRestClient, eq
from issue_portal.repositories import first_row

TABLE = "statuses"


def _clean_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Nama status wajib diisi")
    return cleaned


class StatusRepo:
    def __init__(self, rest: PlatformRestClient) -> None:
        self._rest = rest

    async def list(self) -> list[Status]:
        rows = await self._rest.select(TABLE, order="created_at.asc")
        return [Status.model_validate(r) for r in rows]

    async def create(self, name: str, color: str = DEFAULT_STATUS_COLOR) -> Status:
        rows = await self._rest.insert(TABLE, {"name": _clean_name(name), "color": color})
        return Status.model_validate(first_row(rows, missing="Status gagal disimpan"))

    async def update(self, status_id: str, *, name: str, color: str) -> None:
        await self._rest.update(
            TABLE, {"name": _clean_name(name), "color": color}, filters=[eq("id", status_id)]
        )

    async def delete(self, status_id: str) -> None:
        await self._rest.delete(TABLE, filters=[eq("id", status_id)])


# --- Module Notes -----------------------------------------------------------
# Colors are stored as given; the admin page supplies hex values.
