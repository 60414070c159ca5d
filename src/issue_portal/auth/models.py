"""
issue_portal.auth.models

Auth domain models.

Responsibilities:
- Define the authenticated identity type (`Caller`) injected into endpoints.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class Caller:
    """
    Identity resolved from the request's bearer token.
    Re-resolved on every request; never cached across calls.
    """

    id: str
    email: str | None
    access_token: str = field(repr=False)


# --- Module Notes -----------------------------------------------------------
# Built per request by `auth.deps.get_caller`; never cached across requests.
