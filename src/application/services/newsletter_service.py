"""Newsletter service - subscriptions and the downloadable guide."""

from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import structlog

from src.core.config import settings
from src.core.metrics import record_newsletter_subscription
from src.core.validation import sanitize_text, validate_email
from src.domain.entities import NewsletterSubscriber
from src.domain.exceptions import (
    DocumentNotFoundException,
    SubscriberNotFoundException,
    ValidationException,
)
from src.domain.interfaces import EmailClient, NewsletterRepository

logger = structlog.get_logger(__name__)

DOWNLOAD_FILENAME = "RentCasaYa.pdf"


@dataclass(frozen=True)
class SubscriptionResult:
    success: bool
    message: str
    subscriber: Optional[NewsletterSubscriber] = None

    @property
    def download_url(self) -> Optional[str]:
        if self.subscriber is None:
            return None
        return f"/api/newsletter/download/{self.subscriber.id}"


class NewsletterService:
    """
    Application service for newsletter use cases.

    The welcome email is best effort: a delivery failure is logged and
    the subscription still succeeds.
    """

    def __init__(
        self,
        newsletter_repository: NewsletterRepository,
        email_client: EmailClient,
        pdf_path: Optional[str] = None,
    ):
        self._subscribers = newsletter_repository
        self._email = email_client
        self._pdf_path = Path(pdf_path or settings.newsletter_pdf_path)

    async def subscribe(self, name: Optional[str], email: Optional[str]) -> SubscriptionResult:
        """
        Subscribe an email address.

        Returns:
            success=False with an explanatory message when the email is
            already subscribed; no new row is written in that case

        Raises:
            ValidationException: If name or email is missing or malformed
        """
        missing = [label for label, value in (("name", name), ("email", email)) if not (value or "").strip()]
        if missing:
            raise ValidationException(
                "Name and email are required",
                missing_fields=missing,
            )

        clean_name = sanitize_text(name)
        clean_email = validate_email(email).lower()

        if await self._subscribers.get_by_email(clean_email) is not None:
            record_newsletter_subscription("duplicate")
            return SubscriptionResult(
                success=False,
                message="This email is already subscribed to our newsletter",
            )

        subscriber = NewsletterSubscriber(name=clean_name, email=clean_email)
        await self._subscribers.add(subscriber)
        record_newsletter_subscription("subscribed")

        result = SubscriptionResult(
            success=True,
            message="Successfully subscribed to newsletter!",
            subscriber=subscriber,
        )

        email_result = await self._email.send_newsletter_welcome(
            clean_name,
            clean_email,
            f"{settings.client_url.rstrip('/')}{result.download_url}",
        )
        if not email_result.success:
            logger.warning(
                "welcome_email_not_sent",
                subscriber_id=subscriber.id,
                reason=email_result.message,
            )

        logger.info("newsletter_subscribed", subscriber_id=subscriber.id)
        return result

    async def get_subscriber(self, subscriber_id: str) -> NewsletterSubscriber:
        subscriber = await self._subscribers.get(subscriber_id)
        if subscriber is None:
            raise SubscriberNotFoundException(subscriber_id)
        return subscriber

    async def list_subscribers(self) -> List[NewsletterSubscriber]:
        return await self._subscribers.list_all()

    async def guide_path(self, subscriber_id: str) -> Path:
        """
        Path of the guide PDF for a known subscriber.

        Raises:
            SubscriberNotFoundException: If the subscriber does not exist
            DocumentNotFoundException: If the guide file is missing
        """
        await self.get_subscriber(subscriber_id)
        if not self._pdf_path.is_file():
            logger.error("newsletter_pdf_missing", path=str(self._pdf_path))
            raise DocumentNotFoundException(str(self._pdf_path), message="Newsletter guide not found")
        return self._pdf_path
