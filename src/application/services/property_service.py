"""Property service - listing CRUD, lease flag, photos and public search."""

from dataclasses import asdict
from typing import Any, Dict, List, Optional, Tuple

import structlog

from src.application.dto import (
    PROTECTED_PROPERTY_FIELDS,
    PropertyInput,
    UploadedFile,
    property_errors,
)
from src.core.validation import sanitize_text
from src.domain.entities import Landlord, Property
from src.domain.exceptions import (
    LandlordNotFoundException,
    PropertyNotFoundException,
    ValidationException,
)
from src.domain.interfaces import LandlordRepository, PropertyRepository

from .media_service import (
    MAX_PHOTOS_PER_PROPERTY,
    MAX_PHOTOS_PER_REQUEST,
    PHOTO_TYPES,
    PROPERTY_PHOTO_MAX_BYTES,
    PROPERTY_PHOTOS_BUCKET,
    MediaService,
    check_file,
    extension_for,
    timestamp,
)

logger = structlog.get_logger(__name__)


class PropertyService:
    """
    Application service for listing use cases.

    A property owned by another landlord is reported as not found so
    that listing ids cannot be probed.
    """

    def __init__(
        self,
        property_repository: PropertyRepository,
        landlord_repository: LandlordRepository,
        media_service: MediaService,
    ):
        self._properties = property_repository
        self._landlords = landlord_repository
        self._media = media_service

    async def create(self, landlord_id: str, data: PropertyInput) -> Property:
        """
        Create a listing for a landlord.

        Raises:
            LandlordNotFoundException: If the caller is not a landlord
            ValidationException: If the listing attributes are invalid
        """
        if await self._landlords.get(landlord_id) is None:
            raise LandlordNotFoundException(landlord_id)

        errors = data.validate()
        if errors:
            raise ValidationException("; ".join(errors))

        values = asdict(data)
        values["description"] = sanitize_text(values.get("description"))
        property = Property(landlord_id=landlord_id, **values)

        await self._properties.add(property)
        logger.info("property_created", landlord_id=landlord_id, property_id=property.id)
        return property

    async def list_for_landlord(self, landlord_id: str) -> List[Property]:
        if await self._landlords.get(landlord_id) is None:
            raise LandlordNotFoundException(landlord_id)
        return await self._properties.list_by_landlord(landlord_id)

    async def get_owned(self, landlord_id: str, property_id: str) -> Property:
        """
        Raises:
            PropertyNotFoundException: If the property does not exist or
                belongs to another landlord
        """
        property = await self._properties.get(property_id)
        if property is None or property.landlord_id != landlord_id:
            raise PropertyNotFoundException(property_id)
        return property

    async def update(
        self,
        landlord_id: str,
        property_id: str,
        changes: Dict[str, Any],
    ) -> Property:
        """Apply a partial update. ``is_leased`` and ownership fields are ignored."""
        property = await self.get_owned(landlord_id, property_id)

        allowed = {k: v for k, v in changes.items() if k not in PROTECTED_PROPERTY_FIELDS}
        if "description" in allowed:
            allowed["description"] = sanitize_text(allowed["description"])

        merged = {**asdict(property), **allowed}
        errors = property_errors(merged)
        if errors:
            raise ValidationException("; ".join(errors))

        for name, value in allowed.items():
            setattr(property, name, value)

        await self._properties.save(property)
        logger.info("property_updated", property_id=property_id, fields=sorted(allowed))
        return property

    async def delete(self, landlord_id: str, property_id: str) -> None:
        property = await self.get_owned(landlord_id, property_id)
        await self._properties.delete(property_id)
        await self._media.delete_urls(PROPERTY_PHOTOS_BUCKET, property.photos)
        logger.info("property_deleted", landlord_id=landlord_id, property_id=property_id)

    async def set_lease(self, landlord_id: str, property_id: str, is_leased: bool) -> Property:
        property = await self.get_owned(landlord_id, property_id)
        property.is_leased = is_leased
        await self._properties.save(property)
        logger.info("property_lease_toggled", property_id=property_id, is_leased=is_leased)
        return property

    async def upload_photos(
        self,
        landlord_id: str,
        property_id: str,
        files: List[UploadedFile],
    ) -> Property:
        """
        Store listing photos and append their public URLs.

        Raises:
            ValidationException: If no file was sent, too many were sent,
                the property would exceed its photo limit, or a file breaks
                the type or size rules
        """
        if not files:
            raise ValidationException("No photos uploaded")
        if len(files) > MAX_PHOTOS_PER_REQUEST:
            raise ValidationException(f"At most {MAX_PHOTOS_PER_REQUEST} photos per upload")

        property = await self.get_owned(landlord_id, property_id)
        if len(property.photos) + len(files) > MAX_PHOTOS_PER_PROPERTY:
            raise ValidationException(
                f"A property can have at most {MAX_PHOTOS_PER_PROPERTY} photos"
            )

        for file in files:
            check_file(file, PHOTO_TYPES, PROPERTY_PHOTO_MAX_BYTES, label=file.filename or "photo")

        stamp = timestamp()
        urls = []
        for i, file in enumerate(files):
            path = f"{landlord_id}/{property_id}/photo-{stamp}-{i}.{extension_for(file)}"
            urls.append(await self._media.store(PROPERTY_PHOTOS_BUCKET, path, file))

        property.photos = [*property.photos, *urls]
        await self._properties.save(property)
        logger.info("property_photos_uploaded", property_id=property_id, count=len(urls))
        return property

    # =========================================================================
    # Public listings
    # =========================================================================

    async def list_public(self) -> List[Tuple[Property, Optional[Landlord]]]:
        return await self._with_landlords(await self._properties.list_all())

    async def search(
        self,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        location: Optional[str] = None,
        bedrooms: Optional[int] = None,
        property_type: Optional[str] = None,
    ) -> List[Tuple[Property, Optional[Landlord]]]:
        properties = await self._properties.search(
            min_price=min_price,
            max_price=max_price,
            location=location.strip() if location else None,
            bedrooms=bedrooms,
            property_type=property_type,
        )
        return await self._with_landlords(properties)

    async def get_public(self, property_id: str) -> Tuple[Property, Optional[Landlord]]:
        property = await self._properties.get(property_id)
        if property is None:
            raise PropertyNotFoundException(property_id)
        return property, await self._landlords.get(property.landlord_id)

    async def _with_landlords(
        self,
        properties: List[Property],
    ) -> List[Tuple[Property, Optional[Landlord]]]:
        landlords: Dict[str, Optional[Landlord]] = {}
        for property in properties:
            if property.landlord_id not in landlords:
                landlords[property.landlord_id] = await self._landlords.get(property.landlord_id)
        return [(property, landlords[property.landlord_id]) for property in properties]
