"""PostgreSQL implementation of PropertyRepository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Property
from src.domain.exceptions import PropertyNotFoundException
from src.domain.interfaces import PropertyRepository
from src.infrastructure.database.models import (
    ApplicationModel,
    FavoriteModel,
    PropertyModel,
)

from .mapping import copy_onto, to_entity


class PostgresPropertyRepository(PropertyRepository):
    """PostgreSQL-backed property repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, property_id: str) -> Optional[Property]:
        model = await self._session.get(PropertyModel, property_id)
        if model is None:
            return None
        return self._to_entity(model)

    async def list_all(self) -> List[Property]:
        stmt = select(PropertyModel).order_by(PropertyModel.created_at.desc())
        return await self._fetch(stmt)

    async def list_by_landlord(self, landlord_id: str) -> List[Property]:
        stmt = (
            select(PropertyModel)
            .where(PropertyModel.landlord_id == landlord_id)
            .order_by(PropertyModel.created_at.desc())
        )
        return await self._fetch(stmt)

    async def search(
        self,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        location: Optional[str] = None,
        bedrooms: Optional[int] = None,
        property_type: Optional[str] = None,
    ) -> List[Property]:
        stmt = select(PropertyModel)

        if min_price is not None:
            stmt = stmt.where(PropertyModel.price >= min_price)
        if max_price is not None:
            stmt = stmt.where(PropertyModel.price <= max_price)
        if location:
            pattern = f"%{location.lower()}%"
            stmt = stmt.where(
                or_(
                    func.lower(PropertyModel.address).like(pattern),
                    func.lower(PropertyModel.city).like(pattern),
                )
            )
        if bedrooms is not None:
            stmt = stmt.where(PropertyModel.bedrooms == bedrooms)
        if property_type:
            stmt = stmt.where(PropertyModel.property_type == property_type)

        return await self._fetch(stmt.order_by(PropertyModel.created_at.desc()))

    async def add(self, property: Property) -> Property:
        model = PropertyModel(
            id=property.id,
            created_at=property.created_at,
            updated_at=property.updated_at,
        )
        copy_onto(model, property)

        self._session.add(model)
        await self._session.flush()

        return property

    async def save(self, property: Property) -> Property:
        model = await self._session.get(PropertyModel, property.id)
        if model is None:
            raise PropertyNotFoundException(property.id)

        property.updated_at = datetime.utcnow()
        copy_onto(model, property, exclude=("id", "landlord_id", "created_at"))
        model.photos = list(property.photos)
        model.room_details = dict(property.room_details) if property.room_details else None
        await self._session.flush()

        return property

    async def delete(self, property_id: str) -> None:
        # Explicit child deletes so SQLite without FK enforcement behaves the same.
        await self._session.execute(
            delete(ApplicationModel).where(ApplicationModel.property_id == property_id)
        )
        await self._session.execute(
            delete(FavoriteModel).where(FavoriteModel.property_id == property_id)
        )
        await self._session.execute(
            delete(PropertyModel).where(PropertyModel.id == property_id)
        )
        await self._session.flush()

    async def adjust_applicants(self, property_id: str, delta: int) -> None:
        model = await self._session.get(PropertyModel, property_id)
        if model is None:
            raise PropertyNotFoundException(property_id)

        model.num_applicants = max(0, (model.num_applicants or 0) + delta)
        await self._session.flush()

    async def _fetch(self, stmt) -> List[Property]:
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: PropertyModel) -> Property:
        return to_entity(Property, model, photos=list(model.photos or []))
