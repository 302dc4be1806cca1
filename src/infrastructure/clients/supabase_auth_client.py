"""HTTP implementation of AuthProviderClient against Supabase GoTrue."""

from typing import Any, Dict

import structlog

from src.core.config import settings
from src.domain.entities import AuthSession, AuthUser
from src.domain.exceptions import AuthenticationException, ConflictException
from src.domain.interfaces import AuthProviderClient

from .base import ProviderHttpClient

logger = structlog.get_logger(__name__)


class SupabaseAuthClient(ProviderHttpClient, AuthProviderClient):
    """HTTP client for the Supabase auth endpoints."""

    provider = "supabase_auth"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int = 2,
    ):
        super().__init__(
            base_url=f"{(base_url or settings.supabase_url).rstrip('/')}/auth/v1",
            timeout=timeout or settings.supabase_timeout,
            max_retries=max_retries,
        )
        self._api_key = api_key or settings.supabase_anon_key

    def _headers(self) -> Dict[str, str]:
        return {"apikey": self._api_key}

    async def sign_up(self, email: str, password: str, metadata: dict) -> AuthUser:
        response = await self._request(
            "POST",
            "/signup",
            json={"email": email, "password": password, "data": metadata},
        )
        if response.status_code in (400, 422):
            message = self._error_message(response)
            if "registered" in message.lower() or "exists" in message.lower():
                raise ConflictException("User already registered", code="USER_EXISTS")
            raise AuthenticationException(message)
        self._raise_for_status(response, "Sign up failed")

        data = response.json()
        # Sign up returns the user directly, or nested when a session is issued.
        user = data.get("user") or data
        return self._parse_user(user)

    async def sign_in_with_password(self, email: str, password: str) -> AuthSession:
        response = await self._request(
            "POST",
            "/token",
            params={"grant_type": "password"},
            json={"email": email, "password": password},
        )
        if response.status_code in (400, 401):
            raise AuthenticationException("Invalid email or password")
        self._raise_for_status(response, "Sign in failed")

        data = response.json()
        return AuthSession(
            access_token=data["access_token"],
            user=self._parse_user(data.get("user") or {}),
        )

    async def get_user(self, access_token: str) -> AuthUser:
        response = await self._request(
            "GET",
            "/user",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.status_code in (401, 403):
            raise AuthenticationException("Invalid or expired token")
        self._raise_for_status(response, "Token validation failed")
        return self._parse_user(response.json())

    async def send_password_reset(self, email: str, redirect_to: str) -> None:
        response = await self._request(
            "POST",
            "/recover",
            params={"redirect_to": redirect_to},
            json={"email": email},
        )
        self._raise_for_status(response, "Password reset failed")

    async def sign_out(self, access_token: str) -> None:
        response = await self._request(
            "POST",
            "/logout",
            headers={"Authorization": f"Bearer {access_token}"},
        )
        if response.status_code in (401, 403):
            raise AuthenticationException("Invalid or expired token")
        self._raise_for_status(response, "Sign out failed")

    @staticmethod
    def _parse_user(data: Dict[str, Any]) -> AuthUser:
        if not data.get("id"):
            raise AuthenticationException("Auth provider returned no user")
        return AuthUser(id=data["id"], email=data.get("email"))
