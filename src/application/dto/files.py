"""Uploaded file payloads handed from routers to services."""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class UploadedFile:
    """A file received in a multipart request, already read into memory."""
    filename: str
    content_type: str
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)

    @property
    def extension(self) -> Optional[str]:
        if "." not in self.filename:
            return None
        return self.filename.rsplit(".", 1)[1].lower()
