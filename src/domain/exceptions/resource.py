"""Not-found exceptions for persisted resources."""

from .base import DomainException


class NotFoundException(DomainException):
    """Raised when a resource cannot be found."""

    resource = "Resource"

    def __init__(self, identifier: str | None = None, message: str | None = None):
        super().__init__(
            message=message or f"{self.resource} not found",
            code=f"{self.resource.upper()}_NOT_FOUND",
        )
        self.identifier = identifier


class TenantNotFoundException(NotFoundException):
    resource = "Tenant"


class LandlordNotFoundException(NotFoundException):
    resource = "Landlord"


class PropertyNotFoundException(NotFoundException):
    resource = "Property"


class ApplicationNotFoundException(NotFoundException):
    resource = "Application"


class SubscriberNotFoundException(NotFoundException):
    resource = "Subscriber"


class DocumentNotFoundException(NotFoundException):
    resource = "Document"
