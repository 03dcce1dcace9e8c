"""Avatar upload and cleanup against object storage.

Both operations report failures as values: ``upload_image`` returns an
``UploadResult`` and ``delete_image`` returns a bool. Callers treat avatar
cleanup as best effort, so nothing here raises past its own boundary.
"""
from __future__ import annotations

import logging
from urllib.parse import urlparse
from uuid import UUID

from silentnote.application.dto.upload import UploadResult
from silentnote.application.ports.clock import Clock, SystemClock
from silentnote.application.ports.storage import ObjectStorage

logger = logging.getLogger(__name__)

DEFAULT_BUCKET = "avatars"
MAX_IMAGE_BYTES = 10 * 1024 * 1024
ALLOWED_IMAGE_TYPES = frozenset({"image/jpeg", "image/jpg", "image/png", "image/webp"})


def validate_image(content_type: str | None, size: int, max_bytes: int = MAX_IMAGE_BYTES) -> str | None:
    """Return a user-facing reason the file is rejected, or None if it is fine."""
    if (content_type or "").lower() not in ALLOWED_IMAGE_TYPES:
        return "Please select a JPG, PNG, or WebP image file."
    if size > max_bytes:
        return f"Please select an image smaller than {max_bytes // (1024 * 1024)}MB."
    return None


def build_storage_path(owner_id: UUID | str, filename: str, epoch_ms: int) -> str:
    extension = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"{owner_id}/{owner_id}_{epoch_ms}.{extension}"


def path_from_public_url(file_url: str) -> str:
    """Recover ``<owner>/<file>`` from a public URL."""
    parts = [p for p in urlparse(file_url).path.split("/") if p]
    if len(parts) < 2:
        raise ValueError(f"Not a storage URL: {file_url}")
    return "/".join(parts[-2:])


async def upload_image(
    storage: ObjectStorage,
    data: bytes,
    filename: str,
    content_type: str | None,
    owner_id: UUID | str,
    *,
    bucket: str = DEFAULT_BUCKET,
    max_bytes: int = MAX_IMAGE_BYTES,
    clock: Clock | None = None,
) -> UploadResult:
    reason = validate_image(content_type, len(data), max_bytes)
    if reason is not None:
        return UploadResult(success=False, error=reason)

    clock = clock or SystemClock()
    path = build_storage_path(owner_id, filename, int(clock.now().timestamp() * 1000))
    try:
        await storage.upload(bucket, path, data, content_type=content_type or "", upsert=False)
        url = storage.public_url(bucket, path)
    except Exception as exc:  # noqa: BLE001
        logger.error("Upload of %s to bucket=%s failed: %s", path, bucket, exc)
        return UploadResult(success=False, error=str(exc) or "Upload failed")

    logger.info("Uploaded %s to bucket=%s", path, bucket)
    return UploadResult(success=True, url=url)


async def delete_image(
    storage: ObjectStorage,
    file_url: str,
    *,
    bucket: str = DEFAULT_BUCKET,
) -> bool:
    try:
        path = path_from_public_url(file_url)
        await storage.remove(bucket, [path])
    except Exception as exc:  # noqa: BLE001
        logger.error("Delete of %s failed: %s", file_url, exc)
        return False
    return True
