"""
issue_portal.services.intake

Public report intake.

Responsibilities:
- Upload the optional screenshot to the reports bucket.
- Insert exactly one report row referencing the chosen website and status.
"""

from __future__ import annotations

from typing import Any

from issue_portal.models import ReportSubmission
from issue_portal.observability.logging import get_logger
from issue_portal.platform_clients.storage_http import PlatformStorageClient
from issue_portal.repositories.reports import ReportRepo
from issue_portal.services.uploads import UploadedFile, check_size, random_object_name
from issue_portal.settings import Settings

log = get_logger(__name__)


class ReportIntakeService:
    def __init__(
        self,
        *,
        settings: Settings,
        reports: ReportRepo,
        storage: PlatformStorageClient,
    ) -> None:
        self._settings = settings
        self._reports = reports
        self._storage = storage

    async def submit(
        self, submission: ReportSubmission, *, image: UploadedFile | None = None
    ) -> dict[str, Any]:
        """
        Store one report and return the row as submitted.

        The platform is not asked for the stored row: anonymous reporters may
        insert reports but cannot read them.
        """
        image_url: str | None = None
        if image is not None:
            check_size(image, max_bytes=self._settings.max_upload_bytes)
            bucket = self._settings.reports_bucket
            path = random_object_name(image)
            await self._storage.upload(bucket, path, image.content, content_type=image.content_type)
            image_url = self._storage.public_url(bucket, path)

        row: dict[str, Any] = submission.model_dump()
        row["issue_date"] = submission.issue_date.isoformat()
        row["image_url"] = image_url
        # An uploaded image is not removed if the insert fails.
        await self._reports.create(row)
        log.info("report_submitted", has_image=image_url is not None)
        return row


# --- Module Notes -----------------------------------------------------------
# Used by signed-out visitors, so everything here must work with the anon credential.
