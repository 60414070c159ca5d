"""
issue_portal.repositories.site_settings

Repository for the single-row `site_settings` table.
"""

from __future__ import annotations

from typing import Any

from issue_portal.models import SiteSettings
from issue_portal.platform_clients.rest_http import PlatformRestClient, eq
from issue_portal.repositories import first_row

TABLE = "site_settings"


class SiteSettingsRepo:
    def __init__(self, rest: PlatformRestClient) -> None:
        self._rest = rest

    async def get(self) -> SiteSettings | None:
        rows = await self._rest.select(TABLE)
        return SiteSettings.model_validate(rows[0]) if rows else None

    async def update(self, settings_id: str, **fields: Any) -> SiteSettings:
        rows = await self._rest.update(TABLE, fields, filters=[eq("id", settings_id)])
        return SiteSettings.model_validate(
            first_row(rows, missing="Pengaturan situs tidak ditemukan")
        )


# --- Module Notes -----------------------------------------------------------
# The table is seeded with exactly one row; `get` returns the first row it sees.
