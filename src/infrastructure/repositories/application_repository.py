"""PostgreSQL implementation of ApplicationRepository."""

from datetime import datetime
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from src.domain.entities import (
    Application,
    ApplicationNote,
    ApplicationStatus,
    ApplicationView,
    CreatorType,
    Property,
)
from src.domain.exceptions import ApplicationNotFoundException, PropertyNotFoundException
from src.domain.interfaces import ApplicationRepository
from src.infrastructure.database.models import (
    ApplicationModel,
    ApplicationNoteModel,
    PropertyModel,
)

from .mapping import to_entity


class PostgresApplicationRepository(ApplicationRepository):
    """
    PostgreSQL implementation of the Application repository.

    Writes flush into the request-scoped session; the session manager
    commits once the request succeeds and rolls back otherwise.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, application_id: str) -> Optional[Application]:
        model = await self._session.get(ApplicationModel, application_id)
        if model is None:
            return None
        return self._to_entity(model)

    async def get_many(self, application_ids: List[str]) -> List[Application]:
        if not application_ids:
            return []
        stmt = select(ApplicationModel).where(ApplicationModel.id.in_(application_ids))
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def add(self, application: Application) -> Application:
        model = ApplicationModel(
            id=application.id,
            tenant_id=application.tenant_id,
            property_id=application.property_id,
            landlord_id=application.landlord_id,
            status=application.status.value,
            documents=dict(application.documents),
            has_id=application.has_id,
            has_bank_statement=application.has_bank_statement,
            has_form_410=application.has_form_410,
            created_at=application.created_at,
            updated_at=application.updated_at,
        )

        self._session.add(model)
        await self._session.flush()

        return application

    async def save(self, application: Application) -> Application:
        model = await self._require_model(application.id)

        application.updated_at = datetime.utcnow()
        model.documents = dict(application.documents)
        model.has_id = application.has_id
        model.has_bank_statement = application.has_bank_statement
        model.has_form_410 = application.has_form_410
        model.updated_at = application.updated_at
        await self._session.flush()

        return application

    async def delete_many(self, application_ids: List[str]) -> int:
        if not application_ids:
            return 0
        result = await self._session.execute(
            delete(ApplicationModel).where(ApplicationModel.id.in_(application_ids))
        )
        await self._session.flush()
        return result.rowcount or 0

    async def find_since(
        self,
        tenant_id: str,
        property_id: str,
        since: datetime,
    ) -> Optional[Application]:
        stmt = (
            select(ApplicationModel)
            .where(
                ApplicationModel.tenant_id == tenant_id,
                ApplicationModel.property_id == property_id,
                ApplicationModel.created_at >= since,
            )
            .order_by(ApplicationModel.created_at.desc())
            .limit(1)
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def list_by_tenant(
        self,
        tenant_id: str,
        status: Optional[ApplicationStatus] = None,
    ) -> List[ApplicationView]:
        stmt = (
            select(ApplicationModel)
            .options(selectinload(ApplicationModel.property))
            .where(ApplicationModel.tenant_id == tenant_id)
            .order_by(ApplicationModel.created_at.desc())
        )
        if status is not None:
            stmt = stmt.where(ApplicationModel.status == status.value)

        result = await self._session.execute(stmt)
        return [
            ApplicationView(
                application=self._to_entity(model),
                property=self._property_entity(model.property),
            )
            for model in result.scalars().all()
        ]

    async def list_by_property(
        self,
        property_id: str,
        status: Optional[ApplicationStatus] = None,
    ) -> List[Application]:
        stmt = (
            select(ApplicationModel)
            .where(ApplicationModel.property_id == property_id)
            .order_by(ApplicationModel.created_at.desc())
        )
        if status is not None:
            stmt = stmt.where(ApplicationModel.status == status.value)

        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    async def count_by_tenant(self, tenant_id: str, status: ApplicationStatus) -> int:
        stmt = select(func.count(ApplicationModel.id)).where(
            ApplicationModel.tenant_id == tenant_id,
            ApplicationModel.status == status.value,
        )
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def set_status(
        self,
        application: Application,
        status: ApplicationStatus,
        lease_property: bool = False,
    ) -> Application:
        model = await self._require_model(application.id)
        now = datetime.utcnow()

        if lease_property:
            property_model = await self._session.get(PropertyModel, application.property_id)
            if property_model is None:
                raise PropertyNotFoundException(application.property_id)
            property_model.is_leased = True
            property_model.updated_at = now

        model.status = status.value
        model.updated_at = now
        await self._session.flush()

        application.status = status
        application.updated_at = now
        return application

    async def add_note(self, note: ApplicationNote) -> ApplicationNote:
        model = ApplicationNoteModel(
            id=note.id,
            application_id=note.application_id,
            content=note.content,
            creator_type=note.creator_type.value,
            creator_id=note.creator_id,
            created_at=note.created_at,
        )

        self._session.add(model)
        await self._session.flush()

        return note

    async def list_notes(self, application_id: str) -> List[ApplicationNote]:
        stmt = (
            select(ApplicationNoteModel)
            .where(ApplicationNoteModel.application_id == application_id)
            .order_by(ApplicationNoteModel.created_at.desc())
        )
        result = await self._session.execute(stmt)
        return [
            ApplicationNote(
                id=model.id,
                application_id=model.application_id,
                content=model.content,
                creator_type=CreatorType(model.creator_type),
                creator_id=model.creator_id,
                created_at=model.created_at,
            )
            for model in result.scalars().all()
        ]

    async def _require_model(self, application_id: str) -> ApplicationModel:
        model = await self._session.get(ApplicationModel, application_id)
        if model is None:
            raise ApplicationNotFoundException(application_id)
        return model

    def _property_entity(self, model: Optional[PropertyModel]) -> Optional[Property]:
        if model is None:
            return None
        return to_entity(Property, model, photos=list(model.photos or []))

    def _to_entity(self, model: ApplicationModel) -> Application:
        return Application(
            id=model.id,
            tenant_id=model.tenant_id,
            property_id=model.property_id,
            landlord_id=model.landlord_id,
            status=ApplicationStatus(model.status),
            documents=dict(model.documents or {}),
            has_id=model.has_id,
            has_bank_statement=model.has_bank_statement,
            has_form_410=model.has_form_410,
            created_at=model.created_at,
            updated_at=model.updated_at,
        )
