"""
issue_portal.services.console

Per-session wiring for console code (admin pages and the public form).

Responsibilities:
- Build repositories and services bound to one explicit session's credential.
"""

from __future__ import annotations

from dataclasses import dataclass

import httpx

from issue_portal.auth.session import SessionState
from issue_portal.platform_clients.base import PlatformCredential
from issue_portal.platform_clients.rest_http import PlatformRestClient
from issue_portal.platform_clients.storage_http import PlatformStorageClient
from issue_portal.repositories.reports import ReportRepo
from issue_portal.repositories.site_settings import SiteSettingsRepo
from issue_portal.repositories.statuses import StatusRepo
from issue_portal.repositories.websites import WebsiteRepo
from issue_portal.services.branding import SiteBrandingService
from issue_portal.services.intake import ReportIntakeService
from issue_portal.settings import Settings


@dataclass(frozen=True, slots=True)
class Console:
    websites: WebsiteRepo
    statuses: StatusRepo
    reports: ReportRepo
    site_settings: SiteSettingsRepo
    intake: ReportIntakeService
    branding: SiteBrandingService

    @classmethod
    def for_session(
        cls, *, settings: Settings, http: httpx.AsyncClient, session: SessionState
    ) -> Console:
        # Signed-out sessions fall back to the anon key, like the public form.
        if session.access_token:
            cred = PlatformCredential.for_caller(settings, session.access_token)
        else:
            cred = PlatformCredential.anonymous(settings)

        rest = PlatformRestClient(http=http, credential=cred)
        storage = PlatformStorageClient(settings=settings, http=http, credential=cred)
        reports = ReportRepo(rest)
        site_settings = SiteSettingsRepo(rest)
        return cls(
            websites=WebsiteRepo(rest),
            statuses=StatusRepo(rest),
            reports=reports,
            site_settings=site_settings,
            intake=ReportIntakeService(settings=settings, reports=reports, storage=storage),
            branding=SiteBrandingService(
                settings=settings, site_settings=site_settings, storage=storage
            ),
        )


# --- Module Notes -----------------------------------------------------------
# Build one `Console` per session change; it holds no mutable state of its own.
