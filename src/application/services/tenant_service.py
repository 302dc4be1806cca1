"""Tenant service - profile, payment info, profile image and favorites."""

from typing import List

import structlog

from src.application.dto import (
    ApplicationCounts,
    PaymentInfoUpdate,
    TenantProfileUpdate,
    TenantProfileView,
    UploadedFile,
)
from src.core.validation import sanitize_text, validate_phone, validate_url
from src.domain.entities import ApplicationStatus, Favorite, Tenant
from src.domain.exceptions import (
    AuthorizationException,
    ConflictException,
    PropertyNotFoundException,
    TenantNotFoundException,
    ValidationException,
)
from src.domain.interfaces import (
    ApplicationRepository,
    FavoriteRepository,
    LandlordRepository,
    PropertyRepository,
    TenantRepository,
)

from .media_service import (
    IMAGE_TYPES,
    PROFILE_IMAGE_MAX_BYTES,
    PROFILE_IMAGES_BUCKET,
    MediaService,
    check_file,
    extension_for,
    timestamp,
)

logger = structlog.get_logger(__name__)

SOCIAL_FIELDS = ("linkedin_url", "facebook_url", "instagram_url", "website_url")
TEXT_FIELDS = (
    "first_name",
    "last_name",
    "occupation",
    "bio",
    "current_address",
    "company_name",
    "business_address",
)


def clean_profile_changes(changes: dict) -> dict:
    """Sanitize free text and validate phone and URL fields of a profile update."""
    cleaned = dict(changes)
    for name in TEXT_FIELDS:
        if name in cleaned:
            cleaned[name] = sanitize_text(cleaned[name])
    if cleaned.get("phone"):
        cleaned["phone"] = validate_phone(cleaned["phone"])
    for name in SOCIAL_FIELDS:
        if cleaned.get(name):
            cleaned[name] = validate_url(cleaned[name])
    for name in ("first_name", "last_name"):
        if name in cleaned and not cleaned[name]:
            raise ValidationException(f"{name} cannot be empty")
    return cleaned


class TenantService:
    """Application service for tenant profile use cases."""

    def __init__(
        self,
        tenant_repository: TenantRepository,
        landlord_repository: LandlordRepository,
        property_repository: PropertyRepository,
        application_repository: ApplicationRepository,
        favorite_repository: FavoriteRepository,
        media_service: MediaService,
    ):
        self._tenants = tenant_repository
        self._landlords = landlord_repository
        self._properties = property_repository
        self._applications = application_repository
        self._favorites = favorite_repository
        self._media = media_service

    async def get_tenant(self, tenant_id: str) -> Tenant:
        """
        Raises:
            TenantNotFoundException: If no tenant has this id
        """
        tenant = await self._tenants.get(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id)
        return tenant

    async def get_profile(self, tenant_id: str) -> TenantProfileView:
        tenant = await self.get_tenant(tenant_id)
        counts = ApplicationCounts(
            ongoing=await self._applications.count_by_tenant(tenant_id, ApplicationStatus.PENDING),
            rejected=await self._applications.count_by_tenant(tenant_id, ApplicationStatus.REJECTED),
            completed=await self._applications.count_by_tenant(tenant_id, ApplicationStatus.APPROVED),
        )
        return TenantProfileView(tenant=tenant, application_counts=counts)

    async def update_profile(self, tenant_id: str, update: TenantProfileUpdate) -> TenantProfileView:
        tenant = await self.get_tenant(tenant_id)

        changes = clean_profile_changes(update.changes())
        for name, value in changes.items():
            setattr(tenant, name, value)

        await self._tenants.save(tenant)
        logger.info("tenant_profile_updated", tenant_id=tenant_id, fields=sorted(changes))
        return await self.get_profile(tenant_id)

    async def update_payment_info(self, tenant_id: str, update: PaymentInfoUpdate) -> Tenant:
        errors = update.validate()
        if errors:
            raise ValidationException("; ".join(errors))

        tenant = await self.get_tenant(tenant_id)
        tenant.credit_card_last4 = update.credit_card_last4
        tenant.credit_card_brand = update.credit_card_brand.strip()
        tenant.credit_card_expiry = update.credit_card_expiry

        await self._tenants.save(tenant)
        logger.info("tenant_payment_info_updated", tenant_id=tenant_id)
        return tenant

    async def upload_profile_image(self, tenant_id: str, file: UploadedFile) -> str:
        check_file(file, IMAGE_TYPES, PROFILE_IMAGE_MAX_BYTES, label="Profile image")
        tenant = await self.get_tenant(tenant_id)

        path = f"tenant/{tenant_id}/profile-{timestamp()}.{extension_for(file)}"
        url = await self._media.store(PROFILE_IMAGES_BUCKET, path, file)

        if tenant.profile_image:
            await self._media.delete_urls(PROFILE_IMAGES_BUCKET, [tenant.profile_image])
        tenant.profile_image = url
        await self._tenants.save(tenant)
        return url

    async def delete_profile_image(self, tenant_id: str) -> None:
        tenant = await self.get_tenant(tenant_id)
        if tenant.profile_image:
            await self._media.delete_urls(PROFILE_IMAGES_BUCKET, [tenant.profile_image])
        tenant.profile_image = None
        await self._tenants.save(tenant)

    async def view_as_landlord(self, landlord_id: str, tenant_id: str) -> TenantProfileView:
        """
        A landlord's read-only view of a tenant.

        Raises:
            AuthorizationException: If the caller is not a landlord
        """
        if await self._landlords.get(landlord_id) is None:
            raise AuthorizationException("Only landlords can view tenant profiles")
        return await self.get_profile(tenant_id)

    # =========================================================================
    # Favorites
    # =========================================================================

    async def add_favorite(self, tenant_id: str, property_id: str) -> Favorite:
        await self.get_tenant(tenant_id)
        property = await self._properties.get(property_id)
        if property is None:
            raise PropertyNotFoundException(property_id)

        if await self._favorites.get(tenant_id, property_id) is not None:
            raise ConflictException("Property is already in favorites", code="DUPLICATE_FAVORITE")

        favorite = Favorite(tenant_id=tenant_id, property_id=property_id, property=property)
        await self._favorites.add(favorite)
        logger.info("favorite_added", tenant_id=tenant_id, property_id=property_id)
        return favorite

    async def list_favorites(self, tenant_id: str) -> List[Favorite]:
        await self.get_tenant(tenant_id)
        return await self._favorites.list_by_tenant(tenant_id)

    async def remove_favorite(self, tenant_id: str, property_id: str) -> bool:
        removed = await self._favorites.remove(tenant_id, property_id)
        return removed > 0
