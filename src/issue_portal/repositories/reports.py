"""
issue_portal.repositories.reports

Repository for submitted `reports`.

Responsibilities:
- List reports for the triage dashboard (newest first, date range, status and text filters).
- Insert a report from the intake form.
- Change a report's status; delete one or many reports.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from typing import Any

from issue_portal.models import Report
from issue_portal.platform_clients.rest_http import (
    Filter,
    PlatformRestClient,
    eq,
    gte,
    in_,
    lte,
    or_ilike,
)

TABLE = "reports"
_LIST_COLUMNS = "*,websites(name),statuses(name,color)"
_SEARCH_COLUMNS = ("username", "whatsapp", "issue_title")


class ReportRepo:
    def __init__(self, rest: PlatformRestClient) -> None:
        self._rest = rest

    async def list(
        self,
        *,
        date_from: date | None = None,
        date_to: date | None = None,
        status_id: str | None = None,
        search: str | None = None,
    ) -> list[Report]:
        filters: list[Filter] = []
        if date_from is not None:
            filters.append(gte("issue_date", date_from.isoformat()))
        if date_to is not None:
            filters.append(lte("issue_date", date_to.isoformat()))
        if status_id:
            filters.append(eq("status_id", status_id))
        if search and search.strip():
            filters.append(or_ilike(_SEARCH_COLUMNS, search))

        rows = await self._rest.select(
            TABLE, columns=_LIST_COLUMNS, filters=filters, order="created_at.desc"
        )
        return [Report.model_validate(r) for r in rows]

    async def create(self, row: dict[str, Any]) -> None:
        # The public form may insert reports it is not allowed to read back.
        await self._rest.insert(TABLE, row, returning=False)

    async def update_status(self, report_id: str, status_id: str) -> None:
        await self._rest.update(TABLE, {"status_id": status_id}, filters=[eq("id", report_id)])

    async def delete(self, report_id: str) -> None:
        await self._rest.delete(TABLE, filters=[eq("id", report_id)])

    async def delete_many(self, report_ids: Sequence[str]) -> None:
        if not report_ids:
            return
        await self._rest.delete(TABLE, filters=[in_("id", report_ids)])


# --- Module Notes -----------------------------------------------------------
# Visibility of rows is decided by the platform's row-level policies for the
# caller's token; this repo adds no authorization of its own.
