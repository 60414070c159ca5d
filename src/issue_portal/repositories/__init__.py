"""
issue_portal.repositories

Repositories over the platform's REST table API.

Responsibilities:
- One small class per table the portal reads or writes.
"""

from __future__ import annotations

from typing import Any

from issue_portal.errors import ValidationError


def first_row(rows: list[dict[str, Any]], *, missing: str) -> dict[str, Any]:
    # An empty representation means no row matched or row-level policies hid it.
    if not rows:
        raise ValidationError(missing)
    return rows[0]


# --- Module Notes -----------------------------------------------------------
# Helpers here are shared by repositories that read back written rows.
