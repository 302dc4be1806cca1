"""Signup and login schemas, shared by the tenant and landlord routes."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class SignupRequestSchema(BaseModel):
    """
    Schema for POST /{role}/signup.

    Fields are optional here so that the service can report every missing
    field at once.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "first_name": "Ana",
                    "last_name": "Silva",
                    "email": "ana@example.com",
                    "password": "Str0ngPass",
                    "is_oauth": False,
                }
            ]
        }
    )
    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    email: Optional[str] = Field(None, max_length=255)
    password: Optional[str] = Field(
        None,
        description="Required unless is_oauth is true",
    )
    is_oauth: bool = Field(
        False,
        description="The provider user already exists; the bearer token identifies it",
    )


class SignupResponseSchema(BaseModel):
    tenant_id: Optional[str] = None
    landlord_id: Optional[str] = None
    message: str = "Signup successful"


class LoginRequestSchema(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class LoginResponseSchema(BaseModel):
    token: str = Field(..., description="Bearer token for subsequent requests")
    message: str = "Login successful"


class ForgotPasswordRequestSchema(BaseModel):
    email: str = Field(..., min_length=1, max_length=255)
