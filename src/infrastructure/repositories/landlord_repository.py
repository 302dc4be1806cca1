"""PostgreSQL implementation of LandlordRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Landlord
from src.domain.exceptions import LandlordNotFoundException
from src.domain.interfaces import LandlordRepository
from src.infrastructure.database.models import LandlordModel

from .mapping import copy_onto, to_entity


class PostgresLandlordRepository(LandlordRepository):
    """PostgreSQL-backed landlord repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, supabase_id: str) -> Optional[Landlord]:
        model = await self._get_model(supabase_id)
        if model is None:
            return None
        return to_entity(Landlord, model)

    async def add(self, landlord: Landlord) -> Landlord:
        model = LandlordModel(
            supabase_id=landlord.supabase_id,
            created_at=landlord.created_at,
            updated_at=landlord.updated_at,
        )
        copy_onto(model, landlord)

        self._session.add(model)
        await self._session.flush()

        return landlord

    async def save(self, landlord: Landlord) -> Landlord:
        model = await self._get_model(landlord.supabase_id)
        if model is None:
            raise LandlordNotFoundException(landlord.supabase_id)

        landlord.updated_at = datetime.utcnow()
        copy_onto(model, landlord, exclude=("supabase_id", "created_at"))
        await self._session.flush()

        return landlord

    async def _get_model(self, supabase_id: str) -> Optional[LandlordModel]:
        stmt = select(LandlordModel).where(LandlordModel.supabase_id == supabase_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()
