"""PostgreSQL implementation of FavoriteRepository."""

from typing import List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domain.entities import Favorite, Property
from src.domain.interfaces import FavoriteRepository
from src.infrastructure.database.models import FavoriteModel

from .mapping import to_entity


class PostgresFavoriteRepository(FavoriteRepository):
    """PostgreSQL-backed favorites repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, tenant_id: str, property_id: str) -> Optional[Favorite]:
        stmt = select(FavoriteModel).where(
            FavoriteModel.tenant_id == tenant_id,
            FavoriteModel.property_id == property_id,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def add(self, favorite: Favorite) -> Favorite:
        model = FavoriteModel(
            id=favorite.id,
            tenant_id=favorite.tenant_id,
            property_id=favorite.property_id,
            created_at=favorite.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return favorite

    async def remove(self, tenant_id: str, property_id: str) -> int:
        result = await self._session.execute(
            delete(FavoriteModel).where(
                FavoriteModel.tenant_id == tenant_id,
                FavoriteModel.property_id == property_id,
            )
        )
        await self._session.flush()
        return result.rowcount or 0

    async def list_by_tenant(self, tenant_id: str) -> List[Favorite]:
        stmt = (
            select(FavoriteModel)
            .options(selectinload(FavoriteModel.property))
            .where(FavoriteModel.tenant_id == tenant_id)
            .order_by(FavoriteModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model, with_property=True) for model in result.scalars().all()]

    def _to_entity(self, model: FavoriteModel, with_property: bool = False) -> Favorite:
        property = None
        if with_property and model.property is not None:
            property = to_entity(Property, model.property, photos=list(model.property.photos or []))
        return Favorite(
            id=model.id,
            tenant_id=model.tenant_id,
            property_id=model.property_id,
            created_at=model.created_at,
            property=property,
        )
