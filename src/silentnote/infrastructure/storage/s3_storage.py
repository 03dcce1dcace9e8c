"""S3-compatible object storage (AWS S3, Cloudflare R2, MinIO, Supabase S3)."""
from __future__ import annotations

import asyncio
import logging
from typing import Any

import boto3
from botocore.exceptions import ClientError

logger = logging.getLogger(__name__)


class ObjectExistsError(Exception):
    pass


class ObjectDeleteError(Exception):
    pass


class S3ObjectStorage:
    """Implements application.ports.storage.ObjectStorage on top of boto3."""

    def __init__(
        self,
        *,
        public_base_url: str,
        endpoint_url: str | None = None,
        region_name: str = "auto",
        access_key_id: str = "",
        secret_access_key: str = "",
        client: Any = None,
    ) -> None:
        self._public_base_url = public_base_url.rstrip("/")
        self._client = client or boto3.client(
            "s3",
            endpoint_url=endpoint_url,
            region_name=region_name,
            aws_access_key_id=access_key_id or None,
            aws_secret_access_key=secret_access_key or None,
        )

    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        *,
        content_type: str,
        upsert: bool = False,
    ) -> None:
        await asyncio.to_thread(self._put, bucket, path, data, content_type, upsert)

    def _put(self, bucket: str, path: str, data: bytes, content_type: str, upsert: bool) -> None:
        kwargs: dict[str, Any] = {
            "Bucket": bucket,
            "Key": path,
            "Body": data,
            "ContentType": content_type,
            "CacheControl": "max-age=3600",
        }
        if not upsert:
            # Conditional write: fails with 412 when the key already exists.
            kwargs["IfNoneMatch"] = "*"
        try:
            self._client.put_object(**kwargs)
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code")
            if code in ("PreconditionFailed", "412"):
                raise ObjectExistsError(f"Object already exists: {path}") from exc
            raise

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._public_base_url}/{bucket}/{path.lstrip('/')}"

    async def remove(self, bucket: str, paths: list[str]) -> None:
        if not paths:
            return
        response = await asyncio.to_thread(
            self._client.delete_objects,
            Bucket=bucket,
            Delete={"Objects": [{"Key": p} for p in paths], "Quiet": True},
        )
        # Per-key failures come back in a 200 response, not as a ClientError.
        errors = response.get("Errors") or []
        if errors:
            failed = ", ".join(f"{e.get('Key')} ({e.get('Code')})" for e in errors)
            raise ObjectDeleteError(f"Could not delete from {bucket}: {failed}")
        logger.info("Removed %d object(s) from bucket=%s", len(paths), bucket)
