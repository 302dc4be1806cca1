"""Media service - bucket layout, file type rules and uploads."""

from datetime import datetime
from typing import FrozenSet, List, Optional

import structlog

from src.application.dto import UploadedFile
from src.domain.exceptions import ValidationException
from src.domain.interfaces import StorageClient

logger = structlog.get_logger(__name__)

MB = 1024 * 1024

PROFILE_IMAGES_BUCKET = "profile-images"
PROPERTY_PHOTOS_BUCKET = "property-photos"
APPLICATION_DOCUMENTS_BUCKET = "application-documents"

IMAGE_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "image/webp"})
PHOTO_TYPES = frozenset({"image/jpeg", "image/png", "image/gif", "application/pdf"})
DOCUMENT_TYPES = frozenset({
    "image/jpeg",
    "image/png",
    "image/gif",
    "image/webp",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "application/vnd.ms-excel",
    "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    "text/plain",
})

PROFILE_IMAGE_MAX_BYTES = 5 * MB
PROPERTY_PHOTO_MAX_BYTES = 50 * MB
DOCUMENT_MAX_BYTES = 10 * MB
MAX_PHOTOS_PER_REQUEST = 10
MAX_PHOTOS_PER_PROPERTY = 20

_EXTENSIONS = {
    "image/jpeg": "jpg",
    "image/png": "png",
    "image/gif": "gif",
    "image/webp": "webp",
    "application/pdf": "pdf",
    "text/plain": "txt",
}


def timestamp() -> int:
    """Millisecond timestamp used to make object keys unique."""
    return int(datetime.utcnow().timestamp() * 1000)


def extension_for(file: UploadedFile) -> str:
    return file.extension or _EXTENSIONS.get(file.content_type, "bin")


def check_file(
    file: UploadedFile,
    allowed_types: FrozenSet[str],
    max_bytes: int,
    label: str = "file",
) -> None:
    """
    Enforce content type and size limits.

    Raises:
        ValidationException: If the file is empty, too large or of a
            disallowed type
    """
    if file.size == 0:
        raise ValidationException(f"{label} is empty")
    if file.content_type not in allowed_types:
        raise ValidationException(f"{label} has unsupported type {file.content_type}")
    if file.size > max_bytes:
        raise ValidationException(f"{label} exceeds the {max_bytes // MB}MB limit")


class MediaService:
    """Stores uploaded files and hands back their public URLs."""

    def __init__(self, storage_client: StorageClient):
        self._storage = storage_client

    async def store(self, bucket: str, path: str, file: UploadedFile) -> str:
        await self._storage.upload(bucket, path, file.content, file.content_type)
        logger.info("file_stored", bucket=bucket, path=path, size=file.size)
        return self._storage.public_url(bucket, path)

    async def delete_urls(self, bucket: str, urls: List[Optional[str]]) -> None:
        paths = [self._storage.object_path(bucket, url) for url in urls if url]
        if paths:
            await self._storage.remove(bucket, paths)
            logger.info("files_removed", bucket=bucket, count=len(paths))

    async def signed_url(self, bucket: str, url: str, expires_in: int) -> str:
        path = self._storage.object_path(bucket, url)
        return await self._storage.create_signed_url(bucket, path, expires_in)

    async def download(self, bucket: str, url: str) -> bytes:
        return await self._storage.download(bucket, self._storage.object_path(bucket, url))
