"""
issue_portal.repositories.websites

Repository for the `websites` reference table.
"""

from __future__ import annotations

from issue_portal.errors import ValidationError
from issue_portal.models import Website
from issue_portal.platform_clients.rest_http import PlatformRestClient, eq
from issue_portal.repositories import first_row

TABLE = "websites"


def _clean_name(name: str) -> str:
    cleaned = name.strip()
    if not cleaned:
        raise ValidationError("Nama website wajib diisi")
    return cleaned


class WebsiteRepo:
    def __init__(self, rest: PlatformRestClient) -> None:
        self._rest = rest

    async def list(self) -> list[Website]:
        rows = await self._rest.select(TABLE, order="created_at.asc")
        return [Website.model_validate(r) for r in rows]

    async def create(self, name: str) -> Website:
        rows = await self._rest.insert(TABLE, {"name": _clean_name(name)})
        return Website.model_validate(first_row(rows, missing="Website gagal disimpan"))

    async def rename(self, website_id: str, name: str) -> None:
        await self._rest.update(TABLE, {"name": _clean_name(name)}, filters=[eq("id", website_id)])

    async def delete(self, website_id: str) -> None:
        await self._rest.delete(TABLE, filters=[eq("id", website_id)])


# --- Module Notes -----------------------------------------------------------
# Reports keep their `website_id`; what happens to them on delete is up to the platform schema.
