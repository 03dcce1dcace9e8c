from __future__ import annotations

from typing import Protocol


class ObjectStorage(Protocol):
    async def upload(
        self,
        bucket: str,
        path: str,
        data: bytes,
        *,
        content_type: str,
        upsert: bool = False,
    ) -> None: ...

    def public_url(self, bucket: str, path: str) -> str: ...

    async def remove(self, bucket: str, paths: list[str]) -> None: ...
