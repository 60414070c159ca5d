"""
issue_portal.services.branding

Site branding editor.

Responsibilities:
- Save title and colors on the single `site_settings` row.
- Upload favicon/logo/background images and point the settings row at them.
"""

from __future__ import annotations

from typing import get_args

from issue_portal.errors import ValidationError
from issue_portal.models import AssetField, SiteSettings
from issue_portal.observability.logging import get_logger
from issue_portal.platform_clients.storage_http import PlatformStorageClient
from issue_portal.repositories.site_settings import SiteSettingsRepo
from issue_portal.services.uploads import UploadedFile, check_size, epoch_millis
from issue_portal.settings import Settings

log = get_logger(__name__)

_ASSET_FIELDS = frozenset(get_args(AssetField))


class SiteBrandingService:
    def __init__(
        self,
        *,
        settings: Settings,
        site_settings: SiteSettingsRepo,
        storage: PlatformStorageClient,
    ) -> None:
        self._settings = settings
        self._site_settings = site_settings
        self._storage = storage

    async def _current(self) -> SiteSettings:
        current = await self._site_settings.get()
        if current is None:
            raise ValidationError("Pengaturan situs belum tersedia")
        return current

    async def save(self, *, site_title: str, button_color: str, border_color: str) -> SiteSettings:
        current = await self._current()
        return await self._site_settings.update(
            current.id,
            site_title=site_title,
            button_color=button_color,
            border_color=border_color,
        )

    async def upload_asset(self, field: AssetField, upload: UploadedFile) -> SiteSettings:
        if field not in _ASSET_FIELDS:
            raise ValidationError(f"Unknown asset field: {field}")
        check_size(upload, max_bytes=self._settings.max_upload_bytes)
        # Checked before uploading so a missing row leaves no orphan object.
        current = await self._current()

        bucket = self._settings.assets_bucket
        path = f"{field}-{epoch_millis()}.{upload.extension}"
        await self._storage.upload(
            bucket, path, upload.content, content_type=upload.content_type, upsert=True
        )
        updated = await self._site_settings.update(
            current.id, **{field: self._storage.public_url(bucket, path)}
        )
        log.info("site_asset_updated", field=field)
        return updated


# --- Module Notes -----------------------------------------------------------
# Asset uploads use upsert so re-uploading within the same millisecond cannot fail.
