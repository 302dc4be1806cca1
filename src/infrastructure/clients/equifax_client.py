"""HTTP implementation of CreditBureauClient against Equifax."""

import time
from datetime import date
from typing import Optional

import structlog

from src.core.config import settings
from src.domain.exceptions import ExternalServiceException
from src.domain.interfaces import CreditBureauClient

from .base import ProviderHttpClient

logger = structlog.get_logger(__name__)

MOCK_BASE_SCORE = 500
MOCK_SCORE_SPREAD = 350


def mock_credit_score(ssn: str) -> int:
    """Deterministic score in 500-849 derived from the SSN's last four digits."""
    digits = "".join(ch for ch in ssn if ch.isdigit())
    last4 = int(digits[-4:]) if digits else 0
    return MOCK_BASE_SCORE + last4 % MOCK_SCORE_SPREAD


class EquifaxClient(ProviderHttpClient, CreditBureauClient):
    """
    HTTP client for Equifax consumer credit reports.

    Uses an OAuth client-credentials token, cached until shortly before
    it expires. With ``use_mock`` the bureau is never called.
    """

    provider = "equifax"

    def __init__(
        self,
        base_url: str | None = None,
        token_url: str | None = None,
        client_id: str | None = None,
        client_secret: str | None = None,
        timeout: float | None = None,
        use_mock: bool | None = None,
        max_retries: int = 2,
    ):
        super().__init__(
            base_url=base_url or settings.equifax_api_url,
            timeout=timeout or settings.equifax_timeout,
            max_retries=max_retries,
        )
        self._token_url = token_url or settings.equifax_token_url
        self._client_id = client_id or settings.equifax_client_id
        self._client_secret = client_secret or settings.equifax_client_secret
        self._use_mock = settings.use_mock_credit_score if use_mock is None else use_mock
        self._token: Optional[str] = None
        self._token_expires_at = 0.0

    async def get_credit_score(
        self,
        ssn: str,
        date_of_birth: date,
        address: str,
        first_name: str,
        last_name: str,
    ) -> int:
        if self._use_mock:
            score = mock_credit_score(ssn)
            logger.info("credit_score_mocked", score=score)
            return score

        token = await self._get_token()
        response = await self._request(
            "POST",
            "/reports/credit-report",
            headers={"Authorization": f"Bearer {token}"},
            json={
                "consumers": {
                    "name": [{"identifier": "current", "firstName": first_name, "lastName": last_name}],
                    "socialNum": [{"identifier": "current", "number": ssn}],
                    "dateOfBirth": date_of_birth.isoformat(),
                    "addresses": [{"identifier": "current", "unparsedStreetAddress": address}],
                },
                "models": [{"identifier": "02778"}],
            },
        )
        self._raise_for_status(response, "Credit report failed")

        data = response.json()
        try:
            return int(data["consumers"]["equifaxUSConsumerCreditReport"][0]["models"][0]["score"])
        except (KeyError, IndexError, TypeError, ValueError):
            raise ExternalServiceException(
                provider=self.provider,
                message="Credit report did not include a score",
            )

    async def _get_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        response = await self._request(
            "POST",
            self._token_url,
            auth=(self._client_id, self._client_secret),
            data={"grant_type": "client_credentials"},
        )
        self._raise_for_status(response, "Credit bureau authentication failed")

        data = response.json()
        self._token = data["access_token"]
        # Refresh a minute early.
        self._token_expires_at = time.monotonic() + int(data.get("expires_in", 3600)) - 60
        return self._token
