"""Shared HTTP plumbing for provider clients."""

import asyncio
from typing import Any, Dict, Optional

import httpx
import structlog

from src.core.metrics import (
    record_provider_failure,
    record_provider_success,
    track_provider_latency,
)
from src.domain.exceptions import (
    ExternalServiceException,
    ExternalServiceTimeoutException,
)

logger = structlog.get_logger(__name__)


class ProviderHttpClient:
    """
    Base for HTTP clients of external providers.

    Retries timeouts and transport errors with exponential backoff. HTTP
    error responses are returned to the caller, which decides how to map
    them onto domain exceptions.
    """

    provider = "provider"

    def __init__(self, base_url: str, timeout: float, max_retries: int = 2):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries

    def _headers(self) -> Dict[str, str]:
        return {}

    async def _request(
        self,
        method: str,
        path: str,
        headers: Optional[Dict[str, str]] = None,
        **kwargs: Any,
    ) -> httpx.Response:
        url = path if path.startswith("http") else f"{self._base_url}{path}"
        merged_headers = {**self._headers(), **(headers or {})}

        last_exception: Exception | None = None

        for attempt in range(self._max_retries):
            try:
                with track_provider_latency(self.provider):
                    async with httpx.AsyncClient(timeout=self._timeout) as client:
                        response = await client.request(
                            method, url, headers=merged_headers, **kwargs
                        )

                if response.status_code >= 400:
                    record_provider_failure(self.provider, f"http_{response.status_code}")
                else:
                    record_provider_success(self.provider)
                return response

            except httpx.TimeoutException:
                record_provider_failure(self.provider, "timeout")
                last_exception = ExternalServiceTimeoutException(self.provider)
                logger.warning(
                    "provider_timeout",
                    provider=self.provider,
                    path=path,
                    attempt=attempt + 1,
                    max_retries=self._max_retries,
                )
            except httpx.TransportError as e:
                record_provider_failure(self.provider, "transport")
                last_exception = ExternalServiceException(
                    provider=self.provider,
                    message=f"{self.provider} unavailable: {e}",
                )
                logger.error(
                    "provider_transport_error",
                    provider=self.provider,
                    path=path,
                    attempt=attempt + 1,
                    error=str(e),
                )

            # Exponential backoff
            if attempt < self._max_retries - 1:
                await asyncio.sleep(2**attempt * 0.1)

        raise last_exception or ExternalServiceException(
            provider=self.provider,
            message=f"{self.provider} request failed",
        )

    def _raise_for_status(self, response: httpx.Response, context: str) -> None:
        if response.status_code < 400:
            return
        message = self._error_message(response)
        logger.error(
            "provider_error_response",
            provider=self.provider,
            context=context,
            status_code=response.status_code,
            message=message,
        )
        raise ExternalServiceException(
            provider=self.provider,
            message=f"{context}: {message}",
            status_code=response.status_code,
        )

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or f"HTTP {response.status_code}"
        if isinstance(body, dict):
            for key in ("error_message", "msg", "message", "error_description", "error"):
                value = body.get(key)
                if isinstance(value, str) and value:
                    return value
        return response.text or f"HTTP {response.status_code}"
