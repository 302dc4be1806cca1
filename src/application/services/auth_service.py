"""Auth service - signup, login and password reset for both roles."""

from typing import Optional

import structlog

from src.application.dto import LoginRequest, Role, SignupRequest, SignupResult
from src.core.config import settings
from src.core.validation import validate_email, validate_password
from src.domain.entities import Landlord, Tenant
from src.domain.exceptions import AuthenticationException, ValidationException
from src.domain.interfaces import (
    AuthProviderClient,
    LandlordRepository,
    TenantRepository,
)

logger = structlog.get_logger(__name__)


class AuthService:
    """
    Application service for account use cases.

    Credentials live with the auth provider. This service creates the
    matching tenant or landlord row keyed by the provider's user id.
    """

    def __init__(
        self,
        auth_client: AuthProviderClient,
        tenant_repository: TenantRepository,
        landlord_repository: LandlordRepository,
    ):
        self._auth = auth_client
        self._tenants = tenant_repository
        self._landlords = landlord_repository

    async def signup(
        self,
        role: Role,
        request: SignupRequest,
        access_token: Optional[str] = None,
    ) -> SignupResult:
        """
        Register a tenant or landlord.

        Password signups create the provider user first. OAuth signups
        resolve the already-created provider user from the bearer token.

        Returns:
            The profile id and whether a new record was created

        Raises:
            ValidationException: If required fields are missing
            AuthenticationException: If an OAuth signup has no valid token
        """
        missing = request.missing_fields()
        if missing:
            raise ValidationException(
                f"Missing required fields: {', '.join(missing)}",
                missing_fields=missing,
            )
        email = validate_email(request.email).lower()
        if not request.is_oauth:
            validate_password(request.password)

        if request.is_oauth:
            if not access_token:
                raise AuthenticationException("OAuth signup requires a bearer token")
            user = await self._auth.get_user(access_token)
        else:
            user = await self._auth.sign_up(
                email,
                request.password,
                {
                    "first_name": request.first_name,
                    "last_name": request.last_name,
                    "role": role.value,
                },
            )

        log = logger.bind(role=role.value, supabase_id=user.id)

        existing = await self._get_profile(role, user.id)
        if existing is not None:
            log.info("signup_existing_profile")
            return SignupResult(user_id=user.id, created=False)

        if role == Role.TENANT:
            await self._tenants.add(
                Tenant(
                    supabase_id=user.id,
                    first_name=request.first_name.strip(),
                    last_name=request.last_name.strip(),
                    email=email,
                )
            )
        else:
            await self._landlords.add(
                Landlord(
                    supabase_id=user.id,
                    first_name=request.first_name.strip(),
                    last_name=request.last_name.strip(),
                    email=email,
                )
            )

        log.info("signup_completed", oauth=request.is_oauth)
        return SignupResult(user_id=user.id, created=True)

    async def login(self, role: Role, request: LoginRequest) -> str:
        """
        Sign in and return a bearer token.

        Raises:
            AuthenticationException: If credentials are wrong or the caller
                has no profile for this role
        """
        email = validate_email(request.email).lower()
        session = await self._auth.sign_in_with_password(email, request.password)

        if await self._get_profile(role, session.user.id) is None:
            logger.info("login_rejected_missing_profile", role=role.value)
            raise AuthenticationException(
                f"Account not found. Please sign up as a {role.value} first."
            )

        logger.info("login_succeeded", role=role.value, supabase_id=session.user.id)
        return session.access_token

    async def forgot_password(self, email: str) -> None:
        email = validate_email(email).lower()
        await self._auth.send_password_reset(
            email,
            redirect_to=f"{settings.client_url.rstrip('/')}/reset-password",
        )
        logger.info("password_reset_requested")

    async def logout(self, access_token: str) -> None:
        await self._auth.sign_out(access_token)

    async def _get_profile(self, role: Role, supabase_id: str):
        if role == Role.TENANT:
            return await self._tenants.get(supabase_id)
        return await self._landlords.get(supabase_id)
