"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    DomainException,
    ValidationException,
    AuthenticationException,
    AuthorizationException,
    NotFoundException,
    ConflictException,
    ExternalServiceException,
    ExternalServiceTimeoutException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)


def _error_response(status_code: int, code: str, message: str, **extra) -> JSONResponse:
    content = {
        "error": code,
        "message": message,
        "request_id": get_request_id(),
    }
    content.update(extra)
    return JSONResponse(status_code=status_code, content=content)


def _field_name(location: tuple) -> str:
    parts = [str(part) for part in location if part not in ("body", "query", "path", "header")]
    return ".".join(parts) or "request"


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    @app.exception_handler(ValidationException)
    async def validation_handler(
        request: Request,
        exc: ValidationException,
    ) -> JSONResponse:
        """Handle missing or invalid input."""
        extra = {"missing_fields": exc.missing_fields} if exc.missing_fields else {}
        return _error_response(400, exc.code, exc.message, **extra)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Handle request bodies and parameters rejected by pydantic."""
        errors = exc.errors()
        missing = [_field_name(e.get("loc", ())) for e in errors if e.get("type") == "missing"]
        if missing:
            message = f"Missing required fields: {', '.join(missing)}"
        elif errors:
            first = errors[0]
            message = f"{_field_name(first.get('loc', ()))}: {first.get('msg', 'invalid value')}"
        else:
            message = "Invalid request"
        extra = {"missing_fields": missing} if missing else {}
        return _error_response(400, "VALIDATION_ERROR", message, **extra)

    @app.exception_handler(AuthenticationException)
    async def authentication_handler(
        request: Request,
        exc: AuthenticationException,
    ) -> JSONResponse:
        return _error_response(401, exc.code, exc.message)

    @app.exception_handler(AuthorizationException)
    async def authorization_handler(
        request: Request,
        exc: AuthorizationException,
    ) -> JSONResponse:
        logger.warning(
            "access_denied",
            request_id=get_request_id(),
            code=exc.code,
            path=request.url.path,
        )
        return _error_response(403, exc.code, exc.message)

    @app.exception_handler(NotFoundException)
    async def not_found_handler(
        request: Request,
        exc: NotFoundException,
    ) -> JSONResponse:
        """Handle missing resources."""
        return _error_response(404, exc.code, exc.message)

    @app.exception_handler(ConflictException)
    async def conflict_handler(
        request: Request,
        exc: ConflictException,
    ) -> JSONResponse:
        """Handle requests that conflict with the current resource state."""
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(ExternalServiceTimeoutException)
    async def provider_timeout_handler(
        request: Request,
        exc: ExternalServiceTimeoutException,
    ) -> JSONResponse:
        """Handle provider timeouts."""
        logger.error(
            "provider_timeout",
            request_id=get_request_id(),
            provider=exc.provider,
        )
        return _error_response(
            503,
            exc.code,
            "Service temporarily unavailable. Please try again.",
        )

    @app.exception_handler(ExternalServiceException)
    async def provider_error_handler(
        request: Request,
        exc: ExternalServiceException,
    ) -> JSONResponse:
        """Handle provider errors."""
        logger.error(
            "provider_error",
            request_id=get_request_id(),
            provider=exc.provider,
            message=exc.message,
            status_code=exc.status_code,
        )
        return _error_response(502, exc.code, exc.message)

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
