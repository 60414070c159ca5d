"""
issue_portal.platform_clients.models

Typed views over platform payloads.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PlatformUser(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: str
    email: str | None = None
    created_at: str | None = None
    last_sign_in_at: str | None = None


# --- Module Notes -----------------------------------------------------------
# Only the fields the admin list shows are modelled; the platform sends many more.
