"""Base domain exception."""


class DomainException(Exception):
    """
    Base exception for all domain-level errors.

    Domain exceptions represent business rule violations or
    domain-specific error conditions.
    """

    def __init__(self, message: str, code: str = "DOMAIN_ERROR"):
        self.message = message
        self.code = code
        super().__init__(self.message)


class ValidationException(DomainException):
    """Raised when a request is missing fields or carries invalid values."""

    def __init__(self, message: str, missing_fields: list[str] | None = None):
        super().__init__(
            message=message,
            code="VALIDATION_ERROR",
        )
        self.missing_fields = missing_fields or []


class ConflictException(DomainException):
    """Raised when a request conflicts with the current state of a resource."""

    def __init__(self, message: str, code: str = "CONFLICT"):
        super().__init__(message=message, code=code)
