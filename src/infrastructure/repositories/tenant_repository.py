"""PostgreSQL implementation of TenantRepository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import Tenant
from src.domain.exceptions import TenantNotFoundException
from src.domain.interfaces import TenantRepository
from src.infrastructure.database.models import TenantModel

from .mapping import copy_onto, to_entity


class PostgresTenantRepository(TenantRepository):
    """
    PostgreSQL implementation of the Tenant repository.

    Uses SQLAlchemy async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, supabase_id: str) -> Optional[Tenant]:
        model = await self._get_model(supabase_id)
        if model is None:
            return None
        return self._to_entity(model)

    async def add(self, tenant: Tenant) -> Tenant:
        model = TenantModel(
            supabase_id=tenant.supabase_id,
            created_at=tenant.created_at,
            updated_at=tenant.updated_at,
        )
        copy_onto(model, tenant)

        self._session.add(model)
        await self._session.flush()

        return tenant

    async def save(self, tenant: Tenant) -> Tenant:
        model = await self._get_model(tenant.supabase_id)
        if model is None:
            raise TenantNotFoundException(tenant.supabase_id)

        tenant.updated_at = datetime.utcnow()
        copy_onto(model, tenant, exclude=("supabase_id", "created_at"))
        # JSON columns need a fresh list to register as changed.
        model.bank_accounts = [dict(account) for account in tenant.bank_accounts]
        await self._session.flush()

        return tenant

    async def _get_model(self, supabase_id: str) -> Optional[TenantModel]:
        stmt = select(TenantModel).where(TenantModel.supabase_id == supabase_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _to_entity(self, model: TenantModel) -> Tenant:
        return to_entity(Tenant, model, bank_accounts=list(model.bank_accounts or []))
