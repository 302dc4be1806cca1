"""Dependency injection for FastAPI."""

from functools import lru_cache
from typing import Annotated, Optional

import structlog
from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import CurrentUser
from src.domain.exceptions import AuthenticationException, AuthorizationException
from src.domain.interfaces import (
    ApplicationRepository,
    AuthProviderClient,
    CreditBureauClient,
    EmailClient,
    FavoriteRepository,
    FinancialDataClient,
    LandlordRepository,
    NewsletterRepository,
    PropertyRepository,
    StorageClient,
    TenantRepository,
)
from src.infrastructure.database import get_db_session
from src.infrastructure.repositories import (
    PostgresApplicationRepository,
    PostgresFavoriteRepository,
    PostgresLandlordRepository,
    PostgresNewsletterRepository,
    PostgresPropertyRepository,
    PostgresTenantRepository,
)
from src.infrastructure.clients import (
    BrevoEmailClient,
    EquifaxClient,
    PlaidClient,
    SupabaseAuthClient,
    SupabaseStorageClient,
)
from src.application.services import (
    ApplicationService,
    AuthService,
    LandlordService,
    MediaService,
    NewsletterService,
    PropertyService,
    ScoringService,
    TenantService,
    VerificationService,
)

logger = structlog.get_logger(__name__)

Session = Annotated[AsyncSession, Depends(get_db_session)]


# Repository dependencies
async def get_tenant_repository(session: Session) -> TenantRepository:
    return PostgresTenantRepository(session)


async def get_landlord_repository(session: Session) -> LandlordRepository:
    return PostgresLandlordRepository(session)


async def get_property_repository(session: Session) -> PropertyRepository:
    return PostgresPropertyRepository(session)


async def get_application_repository(session: Session) -> ApplicationRepository:
    return PostgresApplicationRepository(session)


async def get_favorite_repository(session: Session) -> FavoriteRepository:
    return PostgresFavoriteRepository(session)


async def get_newsletter_repository(session: Session) -> NewsletterRepository:
    return PostgresNewsletterRepository(session)


# External client dependencies (one instance per process)
@lru_cache
def get_auth_client() -> AuthProviderClient:
    """Get the auth provider client."""
    return SupabaseAuthClient()


@lru_cache
def get_storage_client() -> StorageClient:
    """Get the object storage client."""
    return SupabaseStorageClient()


@lru_cache
def get_financial_client() -> FinancialDataClient:
    """Get the bank-data aggregator client."""
    return PlaidClient()


@lru_cache
def get_email_client() -> EmailClient:
    """Get the transactional email client."""
    return BrevoEmailClient()


@lru_cache
def get_credit_client() -> CreditBureauClient:
    """Get the credit bureau client."""
    return EquifaxClient()


# Authentication
def _bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def get_optional_bearer_token(
    authorization: Annotated[Optional[str], Header()] = None,
) -> Optional[str]:
    """The bearer token if one was sent. Used by OAuth signup."""
    return _bearer_token(authorization)


async def get_current_user(
    auth_client: Annotated[AuthProviderClient, Depends(get_auth_client)],
    authorization: Annotated[Optional[str], Header()] = None,
    x_supabase_id: Annotated[Optional[str], Header()] = None,
) -> CurrentUser:
    """
    Authenticate the caller.

    Requires a bearer token accepted by the auth provider and an
    ``x-supabase-id`` header naming the same user.

    Raises:
        AuthenticationException: Missing or invalid token, or missing header
        AuthorizationException: The header names a different user
    """
    token = _bearer_token(authorization)
    if token is None:
        raise AuthenticationException("Missing or invalid authorization header")
    if not x_supabase_id:
        raise AuthenticationException("Missing x-supabase-id header")

    user = await auth_client.get_user(token)
    if user.id != x_supabase_id:
        logger.warning("caller_id_mismatch")
        raise AuthorizationException("User ID mismatch")

    structlog.contextvars.bind_contextvars(user_id=user.id)
    return CurrentUser(supabase_id=user.id, access_token=token, email=user.email)


# Service dependencies
async def get_media_service(
    storage_client: Annotated[StorageClient, Depends(get_storage_client)],
) -> MediaService:
    return MediaService(storage_client)


async def get_auth_service(
    auth_client: Annotated[AuthProviderClient, Depends(get_auth_client)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    landlord_repo: Annotated[LandlordRepository, Depends(get_landlord_repository)],
) -> AuthService:
    """Get an AuthService instance with all dependencies."""
    return AuthService(
        auth_client=auth_client,
        tenant_repository=tenant_repo,
        landlord_repository=landlord_repo,
    )


async def get_tenant_service(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    landlord_repo: Annotated[LandlordRepository, Depends(get_landlord_repository)],
    property_repo: Annotated[PropertyRepository, Depends(get_property_repository)],
    application_repo: Annotated[ApplicationRepository, Depends(get_application_repository)],
    favorite_repo: Annotated[FavoriteRepository, Depends(get_favorite_repository)],
    media_service: Annotated[MediaService, Depends(get_media_service)],
) -> TenantService:
    return TenantService(
        tenant_repository=tenant_repo,
        landlord_repository=landlord_repo,
        property_repository=property_repo,
        application_repository=application_repo,
        favorite_repository=favorite_repo,
        media_service=media_service,
    )


async def get_landlord_service(
    landlord_repo: Annotated[LandlordRepository, Depends(get_landlord_repository)],
    property_repo: Annotated[PropertyRepository, Depends(get_property_repository)],
    application_repo: Annotated[ApplicationRepository, Depends(get_application_repository)],
    media_service: Annotated[MediaService, Depends(get_media_service)],
) -> LandlordService:
    return LandlordService(
        landlord_repository=landlord_repo,
        property_repository=property_repo,
        application_repository=application_repo,
        media_service=media_service,
    )


async def get_property_service(
    property_repo: Annotated[PropertyRepository, Depends(get_property_repository)],
    landlord_repo: Annotated[LandlordRepository, Depends(get_landlord_repository)],
    media_service: Annotated[MediaService, Depends(get_media_service)],
) -> PropertyService:
    return PropertyService(
        property_repository=property_repo,
        landlord_repository=landlord_repo,
        media_service=media_service,
    )


async def get_application_service(
    application_repo: Annotated[ApplicationRepository, Depends(get_application_repository)],
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    property_repo: Annotated[PropertyRepository, Depends(get_property_repository)],
    media_service: Annotated[MediaService, Depends(get_media_service)],
) -> ApplicationService:
    """Get an ApplicationService instance with all dependencies."""
    return ApplicationService(
        application_repository=application_repo,
        tenant_repository=tenant_repo,
        property_repository=property_repo,
        media_service=media_service,
    )


async def get_verification_service(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    financial_client: Annotated[FinancialDataClient, Depends(get_financial_client)],
) -> VerificationService:
    return VerificationService(
        tenant_repository=tenant_repo,
        financial_client=financial_client,
    )


async def get_scoring_service(
    tenant_repo: Annotated[TenantRepository, Depends(get_tenant_repository)],
    property_repo: Annotated[PropertyRepository, Depends(get_property_repository)],
    verification_service: Annotated[VerificationService, Depends(get_verification_service)],
    credit_client: Annotated[CreditBureauClient, Depends(get_credit_client)],
) -> ScoringService:
    return ScoringService(
        tenant_repository=tenant_repo,
        property_repository=property_repo,
        verification_service=verification_service,
        credit_client=credit_client,
    )


async def get_newsletter_service(
    newsletter_repo: Annotated[NewsletterRepository, Depends(get_newsletter_repository)],
    email_client: Annotated[EmailClient, Depends(get_email_client)],
) -> NewsletterService:
    """Get a NewsletterService instance."""
    return NewsletterService(
        newsletter_repository=newsletter_repo,
        email_client=email_client,
    )


AuthenticatedUser = Annotated[CurrentUser, Depends(get_current_user)]
