"""Domain Exceptions - Business rule violations and domain errors."""

from .base import DomainException, ValidationException, ConflictException
from .auth import (
    AuthenticationException,
    AuthorizationException,
    ApplicationOwnershipException,
)
from .resource import (
    NotFoundException,
    TenantNotFoundException,
    LandlordNotFoundException,
    PropertyNotFoundException,
    ApplicationNotFoundException,
    SubscriberNotFoundException,
    DocumentNotFoundException,
)
from .application import (
    TenantNotVerifiedException,
    PropertyLeasedException,
    DuplicateApplicationException,
    InvalidApplicationStateException,
)
from .provider import ExternalServiceException, ExternalServiceTimeoutException

__all__ = [
    "DomainException",
    "ValidationException",
    "ConflictException",
    "AuthenticationException",
    "AuthorizationException",
    "ApplicationOwnershipException",
    "NotFoundException",
    "TenantNotFoundException",
    "LandlordNotFoundException",
    "PropertyNotFoundException",
    "ApplicationNotFoundException",
    "SubscriberNotFoundException",
    "DocumentNotFoundException",
    "TenantNotVerifiedException",
    "PropertyLeasedException",
    "DuplicateApplicationException",
    "InvalidApplicationStateException",
    "ExternalServiceException",
    "ExternalServiceTimeoutException",
]
