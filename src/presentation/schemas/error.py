"""Pydantic schema for API error responses."""

from typing import List, Optional

from pydantic import BaseModel, Field


class ErrorResponseSchema(BaseModel):
    """Standard error response format for all API errors."""
    error: str = Field(
        ...,
        description="Error code",
        examples=["PROPERTY_NOT_FOUND"],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
        examples=["Property not found"],
    )
    request_id: str | None = Field(
        None,
        description="Request ID for tracing",
    )
    missing_fields: Optional[List[str]] = Field(
        None,
        description="Required fields that were absent, for validation errors",
    )

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "error": "VALIDATION_ERROR",
                    "message": "Missing required fields: email",
                    "request_id": "abc123",
                    "missing_fields": ["email"],
                }
            ]
        }
    }


class MessageResponseSchema(BaseModel):
    message: str
