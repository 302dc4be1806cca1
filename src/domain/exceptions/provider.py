"""External provider exceptions."""

from .base import DomainException


class ExternalServiceException(DomainException):
    """Raised when an external provider returns an error."""

    def __init__(self, provider: str, message: str, status_code: int | None = None):
        super().__init__(
            message=message,
            code=f"{provider.upper()}_ERROR",
        )
        self.provider = provider
        self.status_code = status_code


class ExternalServiceTimeoutException(ExternalServiceException):
    """Raised when an external provider times out."""

    def __init__(self, provider: str):
        super().__init__(
            provider=provider,
            message=f"{provider} request timed out",
        )
        self.code = f"{provider.upper()}_TIMEOUT"
