"""Authentication and authorization exceptions."""

from .base import DomainException


class AuthenticationException(DomainException):
    """Raised when the caller cannot be authenticated."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(
            message=message,
            code="AUTHENTICATION_FAILED",
        )


class AuthorizationException(DomainException):
    """Raised when an authenticated caller may not act on a resource."""

    def __init__(self, message: str = "Forbidden", code: str = "FORBIDDEN"):
        super().__init__(message=message, code=code)


class ApplicationOwnershipException(AuthorizationException):
    """Raised when an application does not belong to the acting tenant."""

    def __init__(self, message: str = "Application does not belong to this tenant"):
        super().__init__(message=message, code="APPLICATION_OWNERSHIP")
