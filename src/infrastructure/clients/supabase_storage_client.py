"""HTTP implementation of StorageClient against Supabase Storage."""

from typing import Dict, List

from src.core.config import settings
from src.domain.exceptions import DocumentNotFoundException
from src.domain.interfaces import StorageClient

from .base import ProviderHttpClient


class SupabaseStorageClient(ProviderHttpClient, StorageClient):
    """
    HTTP client for Supabase Storage.

    Uses the service role key so uploads and signed URLs work on private
    buckets regardless of row-level policies.
    """

    provider = "supabase_storage"

    def __init__(
        self,
        base_url: str | None = None,
        service_key: str | None = None,
        timeout: float | None = None,
        max_retries: int = 2,
    ):
        self._public_base = f"{(base_url or settings.supabase_url).rstrip('/')}/storage/v1"
        super().__init__(
            base_url=self._public_base,
            timeout=timeout or settings.supabase_timeout,
            max_retries=max_retries,
        )
        self._service_key = service_key or settings.supabase_service_role_key

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self._service_key,
            "Authorization": f"Bearer {self._service_key}",
        }

    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
        upsert: bool = True,
    ) -> str:
        response = await self._request(
            "POST",
            f"/object/{bucket}/{path}",
            headers={
                "Content-Type": content_type,
                "x-upsert": "true" if upsert else "false",
            },
            content=content,
        )
        self._raise_for_status(response, f"Upload to {bucket} failed")
        return path

    async def download(self, bucket: str, path: str) -> bytes:
        response = await self._request("GET", f"/object/{bucket}/{path}")
        if response.status_code in (400, 404):
            raise DocumentNotFoundException(path)
        self._raise_for_status(response, f"Download from {bucket} failed")
        return response.content

    async def remove(self, bucket: str, paths: List[str]) -> None:
        if not paths:
            return
        response = await self._request(
            "DELETE",
            f"/object/{bucket}",
            json={"prefixes": paths},
        )
        self._raise_for_status(response, f"Delete from {bucket} failed")

    def public_url(self, bucket: str, path: str) -> str:
        return f"{self._public_base}/object/public/{bucket}/{path}"

    async def create_signed_url(self, bucket: str, path: str, expires_in: int) -> str:
        response = await self._request(
            "POST",
            f"/object/sign/{bucket}/{path}",
            json={"expiresIn": expires_in},
        )
        if response.status_code in (400, 404):
            raise DocumentNotFoundException(path)
        self._raise_for_status(response, f"Signing {bucket} object failed")

        signed = response.json().get("signedURL", "")
        return f"{self._public_base}{signed}" if signed.startswith("/") else signed
