"""PostgreSQL implementation of NewsletterRepository."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities import NewsletterSubscriber
from src.domain.interfaces import NewsletterRepository
from src.infrastructure.database.models import NewsletterSubscriberModel


class PostgresNewsletterRepository(NewsletterRepository):
    """PostgreSQL-backed newsletter subscriber repository."""

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get(self, subscriber_id: str) -> Optional[NewsletterSubscriber]:
        model = await self._session.get(NewsletterSubscriberModel, subscriber_id)
        return self._to_entity(model) if model else None

    async def get_by_email(self, email: str) -> Optional[NewsletterSubscriber]:
        stmt = select(NewsletterSubscriberModel).where(
            func.lower(NewsletterSubscriberModel.email) == email.lower()
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()
        return self._to_entity(model) if model else None

    async def add(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        model = NewsletterSubscriberModel(
            id=subscriber.id,
            name=subscriber.name,
            email=subscriber.email,
            subscribed_at=subscriber.subscribed_at,
        )

        self._session.add(model)
        await self._session.flush()

        return subscriber

    async def list_all(self) -> List[NewsletterSubscriber]:
        stmt = select(NewsletterSubscriberModel).order_by(
            NewsletterSubscriberModel.subscribed_at.desc()
        )
        result = await self._session.execute(stmt)
        return [self._to_entity(model) for model in result.scalars().all()]

    def _to_entity(self, model: NewsletterSubscriberModel) -> NewsletterSubscriber:
        return NewsletterSubscriber(
            id=model.id,
            name=model.name,
            email=model.email,
            subscribed_at=model.subscribed_at,
        )
