"""HTTP implementation of EmailClient against Brevo."""

import structlog

from src.core.config import settings
from src.domain.exceptions import ExternalServiceException
from src.domain.interfaces import EmailClient, EmailResult

from .base import ProviderHttpClient

logger = structlog.get_logger(__name__)

WELCOME_SUBJECT = "Your RentCasaYa rental guide"


class BrevoEmailClient(ProviderHttpClient, EmailClient):
    """HTTP client for Brevo transactional email."""

    provider = "brevo"

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        max_retries: int = 2,
    ):
        super().__init__(
            base_url=base_url or settings.brevo_api_url,
            timeout=timeout or settings.brevo_timeout,
            max_retries=max_retries,
        )
        self._api_key = api_key or settings.brevo_api_key

    def _headers(self):
        return {"api-key": self._api_key, "accept": "application/json"}

    async def send_newsletter_welcome(
        self,
        name: str,
        email: str,
        download_url: str,
    ) -> EmailResult:
        if not self._api_key:
            logger.warning("email_not_configured", recipient=email)
            return EmailResult(success=False, message="Email service not configured")

        payload = {
            "sender": {
                "name": settings.brevo_sender_name,
                "email": settings.brevo_sender_email,
            },
            "to": [{"email": email, "name": name}],
            "subject": WELCOME_SUBJECT,
            "htmlContent": self._render_welcome(name, download_url),
        }

        try:
            response = await self._request("POST", "/smtp/email", json=payload)
            self._raise_for_status(response, "Welcome email failed")
        except ExternalServiceException as e:
            logger.error("welcome_email_failed", recipient=email, error=e.message)
            return EmailResult(success=False, message=e.message)

        message_id = response.json().get("messageId")
        logger.info("welcome_email_sent", recipient=email, message_id=message_id)
        return EmailResult(success=True, message="Email sent", message_id=message_id)

    @staticmethod
    def _render_welcome(name: str, download_url: str) -> str:
        return (
            f"<p>Hi {name},</p>"
            "<p>Thanks for subscribing to the RentCasaYa newsletter. "
            "Your renter's guide is ready.</p>"
            f'<p><a href="{download_url}">Download the guide</a></p>'
            "<p>The RentCasaYa team</p>"
        )
