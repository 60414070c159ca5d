"""
issue_portal.models

Row and payload models for the portal's platform-hosted tables.

Responsibilities:
- Type the rows read from `websites`, `statuses`, `reports` and `site_settings`.
- Type the admin summary returned by the admin-management endpoint.
"""

from __future__ import annotations

from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

AssetField = Literal["favicon_url", "logo_url", "background_url"]

DEFAULT_STATUS_COLOR = "#6b7280"


class _Row(BaseModel):
    model_config = ConfigDict(extra="ignore")


class Website(_Row):
    id: str
    name: str
    created_at: str | None = None


class Status(_Row):
    id: str
    name: str
    color: str | None = None
    created_at: str | None = None


class WebsiteRef(_Row):
    name: str


class StatusRef(_Row):
    name: str
    color: str | None = None


class Report(_Row):
    id: str
    username: str
    whatsapp: str
    issue_date: date
    issue_title: str
    issue_description: str
    website_id: str | None = None
    status_id: str | None = None
    image_url: str | None = None
    created_at: str | None = None
    # Embedded via `select=*,websites(name),statuses(name,color)`.
    website: WebsiteRef | None = Field(default=None, alias="websites")
    status: StatusRef | None = Field(default=None, alias="statuses")


class ReportSubmission(BaseModel):
    """Fields collected by the public intake form."""

    model_config = ConfigDict(str_strip_whitespace=True)

    username: str = Field(min_length=1)
    whatsapp: str = Field(min_length=1)
    issue_date: date
    issue_title: str = Field(min_length=1)
    website_id: str = Field(min_length=1)
    issue_description: str = Field(min_length=1)
    status_id: str = Field(min_length=1)


class SiteSettings(_Row):
    id: str
    site_title: str | None = None
    favicon_url: str | None = None
    logo_url: str | None = None
    background_url: str | None = None
    button_color: str | None = None
    border_color: str | None = None


class AdminSummary(BaseModel):
    id: str
    email: str | None = None
    created_at: str | None = None
    last_sign_in_at: str | None = None


# --- Module Notes -----------------------------------------------------------
# `Report` reads the embedded `websites`/`statuses` objects the list query selects.
