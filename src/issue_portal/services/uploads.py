"""
issue_portal.services.uploads

Uploaded file handling shared by the intake form and the branding editor.
"""

from __future__ import annotations

import secrets
import time
from dataclasses import dataclass

from issue_portal.errors import ValidationError


@dataclass(frozen=True, slots=True)
class UploadedFile:
    filename: str
    content: bytes
    content_type: str = "application/octet-stream"

    @property
    def extension(self) -> str:
        # "photo.final.png" -> "png"; a name without a dot is its own extension.
        return self.filename.rsplit(".", 1)[-1]


def check_size(upload: UploadedFile, *, max_bytes: int) -> None:
    if len(upload.content) > max_bytes:
        raise ValidationError(f"Ukuran file maksimal {max_bytes // (1024 * 1024)}MB")


def epoch_millis() -> int:
    return int(time.time() * 1000)


def random_object_name(upload: UploadedFile) -> str:
    return f"{epoch_millis()}-{secrets.token_hex(6)}.{upload.extension}"


# --- Module Notes -----------------------------------------------------------
# Object names are never derived from the client filename beyond its extension.
