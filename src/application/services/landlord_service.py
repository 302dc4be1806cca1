"""Landlord service - profile, payout details and profile image."""

import structlog

from src.application.dto import (
    BankInfoUpdate,
    DIRECT_DEPOSIT,
    E_TRANSFER,
    LandlordProfileUpdate,
    LandlordProfileView,
    PropertyApplications,
    UploadedFile,
)
from src.core.validation import sanitize_text, validate_email, validate_phone
from src.domain.entities import Landlord
from src.domain.exceptions import LandlordNotFoundException, ValidationException
from src.domain.interfaces import (
    ApplicationRepository,
    LandlordRepository,
    PropertyRepository,
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
from .tenant_service import clean_profile_changes

logger = structlog.get_logger(__name__)


class LandlordService:
    """Application service for landlord profile use cases."""

    def __init__(
        self,
        landlord_repository: LandlordRepository,
        property_repository: PropertyRepository,
        application_repository: ApplicationRepository,
        media_service: MediaService,
    ):
        self._landlords = landlord_repository
        self._properties = property_repository
        self._applications = application_repository
        self._media = media_service

    async def get_landlord(self, landlord_id: str) -> Landlord:
        landlord = await self._landlords.get(landlord_id)
        if landlord is None:
            raise LandlordNotFoundException(landlord_id)
        return landlord

    async def get_profile(self, landlord_id: str) -> LandlordProfileView:
        landlord = await self.get_landlord(landlord_id)
        properties = await self._properties.list_by_landlord(landlord_id)
        return LandlordProfileView(
            landlord=landlord,
            properties=[
                PropertyApplications(
                    property=property,
                    applications=await self._applications.list_by_property(property.id),
                )
                for property in properties
            ],
        )

    async def update_profile(
        self,
        landlord_id: str,
        update: LandlordProfileUpdate,
    ) -> LandlordProfileView:
        landlord = await self.get_landlord(landlord_id)

        changes = clean_profile_changes(update.changes())
        if changes.get("years_of_experience") is not None and changes["years_of_experience"] < 0:
            raise ValidationException("years_of_experience cannot be negative")
        for name, value in changes.items():
            setattr(landlord, name, value)

        await self._landlords.save(landlord)
        logger.info("landlord_profile_updated", landlord_id=landlord_id, fields=sorted(changes))
        return await self.get_profile(landlord_id)

    async def update_bank_info(self, landlord_id: str, update: BankInfoUpdate) -> Landlord:
        """
        Store payout details for the chosen method.

        Raises:
            ValidationException: If the method is unknown, required fields
                are missing, or an e-transfer contact is malformed
        """
        method = update.preferred_payment_method
        if method not in (DIRECT_DEPOSIT, E_TRANSFER):
            raise ValidationException(
                f"preferred_payment_method must be one of: {DIRECT_DEPOSIT}, {E_TRANSFER}"
            )

        missing = update.missing_fields()
        if missing:
            raise ValidationException(
                f"Missing required fields: {', '.join(missing)}",
                missing_fields=missing,
            )

        landlord = await self.get_landlord(landlord_id)
        landlord.preferred_payment_method = method

        if method == DIRECT_DEPOSIT:
            landlord.bank_name = sanitize_text(update.bank_name)
            landlord.account_name = sanitize_text(update.account_name)
            landlord.account_number = update.account_number.strip()
            landlord.routing_number = update.routing_number.strip()
        else:
            landlord.e_transfer_email = (
                validate_email(update.e_transfer_email).lower() if update.e_transfer_email else None
            )
            landlord.e_transfer_phone = (
                validate_phone(update.e_transfer_phone) if update.e_transfer_phone else None
            )

        await self._landlords.save(landlord)
        logger.info("landlord_bank_info_updated", landlord_id=landlord_id, method=method)
        return landlord

    async def upload_profile_image(self, landlord_id: str, file: UploadedFile) -> str:
        check_file(file, IMAGE_TYPES, PROFILE_IMAGE_MAX_BYTES, label="Profile image")
        landlord = await self.get_landlord(landlord_id)

        path = f"landlord/{landlord_id}/profile-{timestamp()}.{extension_for(file)}"
        url = await self._media.store(PROFILE_IMAGES_BUCKET, path, file)

        if landlord.profile_image:
            await self._media.delete_urls(PROFILE_IMAGES_BUCKET, [landlord.profile_image])
        landlord.profile_image = url
        await self._landlords.save(landlord)
        return url

    async def delete_profile_image(self, landlord_id: str) -> None:
        landlord = await self.get_landlord(landlord_id)
        if landlord.profile_image:
            await self._media.delete_urls(PROFILE_IMAGES_BUCKET, [landlord.profile_image])
        landlord.profile_image = None
        await self._landlords.save(landlord)
