"""Application workflow exceptions."""

from .base import ConflictException


class TenantNotVerifiedException(ConflictException):
    """Raised when an unverified tenant tries to apply."""

    def __init__(self):
        super().__init__(
            message="Tenant must be verified before applying to properties",
            code="TENANT_NOT_VERIFIED",
        )


class PropertyLeasedException(ConflictException):
    """Raised when applying to a property that is already leased."""

    def __init__(self, property_id: str):
        super().__init__(
            message="Property is already leased",
            code="PROPERTY_LEASED",
        )
        self.property_id = property_id


class DuplicateApplicationException(ConflictException):
    """Raised when the tenant already applied to the property this month."""

    def __init__(self, property_id: str):
        super().__init__(
            message="You have already applied to this property",
            code="DUPLICATE_APPLICATION",
        )
        self.property_id = property_id


class InvalidApplicationStateException(ConflictException):
    """Raised when an application is not in a state that allows the action."""

    def __init__(self, message: str):
        super().__init__(message=message, code="INVALID_APPLICATION_STATE")
