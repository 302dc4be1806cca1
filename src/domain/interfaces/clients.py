"""External client interfaces."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from src.domain.entities import (
    AuthSession,
    AuthSnapshot,
    AuthUser,
    BankAccount,
    BankTransaction,
    IdentitySnapshot,
    ItemAccess,
)


class AuthProviderClient(ABC):
    """
    Abstract client for the hosted auth provider.

    The provider owns credentials; this service only stores profile rows
    keyed by the provider's user id.
    """

    @abstractmethod
    async def sign_up(self, email: str, password: str, metadata: dict) -> AuthUser:
        """
        Register a password user.

        Raises:
            AuthenticationException: If the provider rejects the signup
            ExternalServiceException: If the provider is unavailable
        """
        ...

    @abstractmethod
    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        """
        Exchange credentials for a session.

        Raises:
            AuthenticationException: If the credentials are invalid
        """
        ...

    @abstractmethod
    async def get_user(self, access_token: str) -> AuthUser:
        """
        Resolve a bearer token to its user.

        Raises:
            AuthenticationException: If the token is invalid or expired
        """
        ...

    @abstractmethod
    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        """Email a password reset link."""
        ...

    @abstractmethod
    async def sign_out(self, access_token: str) -> None:
        """Revoke the session behind a token."""
        ...


class StorageClient(ABC):
    """
    Abstract client for bucket object storage.
    """

    @abstractmethod
    async def upload(
        self,
        bucket: str,
        path: str,
        content: bytes,
        content_type: str,
        upsert: bool = True,
    ) -> str:
        """
        Store an object.

        Returns:
            The object path within the bucket
        """
        ...

    @abstractmethod
    async def download(self, bucket: str, path: str) -> bytes:
        """
        Fetch an object's bytes.

        Raises:
            DocumentNotFoundException: If the object does not exist
        """
        ...

    @abstractmethod
    async def remove(self, bucket: str, paths: List[str]) -> None:
        """Delete objects. Missing objects are ignored."""
        ...

    @abstractmethod
    def public_url(self, bucket: str, path: str) -> str:
        """Public URL of an object in a public bucket."""
        ...

    @abstractmethod
    async def create_signed_url(self, bucket: str, path: str, expires_in: int) -> str:
        """Time-limited URL for an object in a private bucket."""
        ...

    def object_path(self, bucket: str, url_or_path: str) -> str:
        """
        Recover the object path from a stored public URL.

        Values that are already bare paths are returned unchanged.
        """
        marker = f"/{bucket}/"
        if marker in url_or_path:
            return url_or_path.split(marker, 1)[1].split("?", 1)[0]
        return url_or_path


class FinancialDataClient(ABC):
    """
    Abstract client for the bank-data aggregator.

    Every data call takes the per-tenant access token obtained from
    ``exchange_public_token``.
    """

    @abstractmethod
    async def create_link_token(self, user_id: str) -> str:
        """Create a token that starts the bank-link flow for a user."""
        ...

    @abstractmethod
    async def exchange_public_token(self, public_token: str) -> ItemAccess:
        """Trade the link flow's public token for a long-lived access token."""
        ...

    @abstractmethod
    async def create_sandbox_public_token(self) -> str:
        """Create a public token against a sandbox institution."""
        ...

    @abstractmethod
    async def get_identity(self, access_token: str) -> IdentitySnapshot:
        """Accounts with owner names, emails, phones and addresses."""
        ...

    @abstractmethod
    async def get_auth(self, access_token: str) -> AuthSnapshot:
        """Accounts with ACH routing and account numbers."""
        ...

    @abstractmethod
    async def get_balances(self, access_token: str) -> List[BankAccount]:
        """Accounts with real-time balances."""
        ...

    @abstractmethod
    async def get_transactions(
        self,
        access_token: str,
        start_date: date,
        end_date: date,
    ) -> List[BankTransaction]:
        """
        Posted transactions between two dates (inclusive).

        Raises:
            ExternalServiceException: If the provider returns an error
            ExternalServiceTimeoutException: If the request times out
        """
        ...


@dataclass(frozen=True)
class EmailResult:
    success: bool
    message: str
    message_id: Optional[str] = None


class EmailClient(ABC):
    """Abstract client for transactional email."""

    @abstractmethod
    async def send_newsletter_welcome(
        self,
        name: str,
        email: str,
        download_url: str,
    ) -> EmailResult:
        """
        Send the welcome email with the guide download link.

        Returns:
            The delivery result. Implementations report failures in the
            result instead of raising.
        """
        ...


class CreditBureauClient(ABC):
    """Abstract client for credit score lookups."""

    @abstractmethod
    async def get_credit_score(
        self,
        ssn: str,
        date_of_birth: date,
        address: str,
        first_name: str,
        last_name: str,
    ) -> int:
        """
        Fetch a consumer credit score.

        Raises:
            ExternalServiceException: If the bureau returns an error
        """
        ...
