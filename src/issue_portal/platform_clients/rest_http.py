"""
issue_portal.platform_clients.rest_http

Client for the platform's REST table API (PostgREST dialect) and RPC endpoint.

Responsibilities:
- Select/insert/update/delete rows with query-string filters.
- Call database functions (e.g. `has_role`).
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any

import httpx

from issue_portal.platform_clients.base import PlatformCredential, raise_for_platform_error

Filter = tuple[str, str]

_RETURN_ROWS = {"Prefer": "return=representation"}
# Writers without read access (the anonymous intake form) cannot ask for the row back.
_RETURN_NOTHING = {"Prefer": "return=minimal"}
# PostgREST uses these as syntax inside `or=(...)`.
_RESERVED_SEARCH_CHARS = str.maketrans("", "", ",()*")


def eq(column: str, value: Any) -> Filter:
    return column, f"eq.{value}"


def gte(column: str, value: Any) -> Filter:
    return column, f"gte.{value}"


def lte(column: str, value: Any) -> Filter:
    return column, f"lte.{value}"


def in_(column: str, values: Iterable[Any]) -> Filter:
    return column, "in.({})".format(",".join(str(v) for v in values))


def or_ilike(columns: Sequence[str], term: str) -> Filter:
    cleaned = term.translate(_RESERVED_SEARCH_CHARS).strip()
    return "or", "({})".format(",".join(f"{c}.ilike.*{cleaned}*" for c in columns))


class PlatformRestClient:
    def __init__(self, *, http: httpx.AsyncClient, credential: PlatformCredential) -> None:
        self._http = http
        self._cred = credential

    async def select(
        self,
        table: str,
        *,
        columns: str = "*",
        filters: Sequence[Filter] = (),
        order: str | None = None,
    ) -> list[dict[str, Any]]:
        params: list[Filter] = [("select", columns), *filters]
        if order is not None:
            params.append(("order", order))
        r = await self._http.get(f"/rest/v1/{table}", params=params, headers=self._cred.headers())
        raise_for_platform_error(r)
        return list(r.json())

    async def insert(
        self, table: str, row: dict[str, Any], *, returning: bool = True
    ) -> list[dict[str, Any]]:
        prefer = _RETURN_ROWS if returning else _RETURN_NOTHING
        r = await self._http.post(
            f"/rest/v1/{table}",
            json=row,
            headers={**self._cred.headers(), **prefer},
        )
        raise_for_platform_error(r)
        return list(r.json()) if returning else []

    async def update(
        self, table: str, values: dict[str, Any], *, filters: Sequence[Filter]
    ) -> list[dict[str, Any]]:
        self._require_filters(filters)
        r = await self._http.patch(
            f"/rest/v1/{table}",
            params=list(filters),
            json=values,
            headers={**self._cred.headers(), **_RETURN_ROWS},
        )
        raise_for_platform_error(r)
        return list(r.json())

    async def delete(self, table: str, *, filters: Sequence[Filter]) -> None:
        self._require_filters(filters)
        r = await self._http.delete(
            f"/rest/v1/{table}", params=list(filters), headers=self._cred.headers()
        )
        raise_for_platform_error(r)

    async def rpc(self, function: str, params: dict[str, Any]) -> Any:
        r = await self._http.post(
            f"/rest/v1/rpc/{function}", json=params, headers=self._cred.headers()
        )
        raise_for_platform_error(r)
        return r.json()

    @staticmethod
    def _require_filters(filters: Sequence[Filter]) -> None:
        # An unfiltered PATCH/DELETE would hit every row the credential can see.
        if not filters:
            raise ValueError("refusing to mutate a table without filters")


# --- Module Notes -----------------------------------------------------------
# Filters are passed as (column, expression) pairs so the same column can appear twice
# (e.g. `gte` and `lte` on `issue_date`).
