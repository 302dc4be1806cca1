"""Conversion of multipart uploads into application-layer files."""

from typing import List, Optional

from fastapi import UploadFile

from src.application.dto import UploadedFile


async def read_upload(upload: Optional[UploadFile]) -> Optional[UploadedFile]:
    """Read an upload fully into memory. Returns None when no file was sent."""
    if upload is None or not upload.filename:
        return None
    content = await upload.read()
    return UploadedFile(
        filename=upload.filename,
        content_type=upload.content_type or "application/octet-stream",
        content=content,
    )


async def read_uploads(uploads: List[UploadFile]) -> List[UploadedFile]:
    files = []
    for upload in uploads:
        file = await read_upload(upload)
        if file is not None:
            files.append(file)
    return files
