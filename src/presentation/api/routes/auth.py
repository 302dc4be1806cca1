"""Signup, login and password reset endpoints for tenants and landlords."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends

from src.application.dto import LoginRequest, Role, SignupRequest
from src.application.services import AuthService
from src.core.dependencies import (
    AuthenticatedUser,
    get_auth_service,
    get_optional_bearer_token,
)
from src.presentation.schemas import (
    ErrorResponseSchema,
    ForgotPasswordRequestSchema,
    LoginRequestSchema,
    LoginResponseSchema,
    MessageResponseSchema,
    SignupRequestSchema,
    SignupResponseSchema,
)


def build_auth_router(role: Role) -> APIRouter:
    """
    Build the account endpoints for one role.

    Tenants and landlords share the same flows; only the profile table
    the signup writes to differs.
    """
    router = APIRouter(
        prefix=f"/{role.value}",
        responses={
            400: {"model": ErrorResponseSchema, "description": "Invalid request"},
            401: {"model": ErrorResponseSchema, "description": "Authentication failed"},
            502: {"model": ErrorResponseSchema, "description": "Auth provider error"},
        },
    )

    @router.post(
        "/signup",
        response_model=SignupResponseSchema,
        response_model_exclude_none=True,
        status_code=201,
        summary=f"{role.label} Signup",
        description=f"""Create a {role.value} account.

        Password signups create the auth provider user. OAuth signups
        (`is_oauth: true`) send the provider's bearer token instead of a
        password. Signing up again with the same provider user returns the
        existing profile.""",
    )
    async def signup(
        request: SignupRequestSchema,
        auth_service: Annotated[AuthService, Depends(get_auth_service)],
        access_token: Annotated[Optional[str], Depends(get_optional_bearer_token)],
    ) -> SignupResponseSchema:
        result = await auth_service.signup(
            role,
            SignupRequest(
                first_name=request.first_name,
                last_name=request.last_name,
                email=request.email,
                password=request.password,
                is_oauth=request.is_oauth,
            ),
            access_token=access_token,
        )
        return SignupResponseSchema(**{f"{role.value}_id": result.user_id})

    @router.post(
        "/login",
        response_model=LoginResponseSchema,
        summary=f"{role.label} Login",
    )
    async def login(
        request: LoginRequestSchema,
        auth_service: Annotated[AuthService, Depends(get_auth_service)],
    ) -> LoginResponseSchema:
        token = await auth_service.login(
            role,
            LoginRequest(email=request.email, password=request.password),
        )
        return LoginResponseSchema(token=token)

    @router.post(
        "/forgot-password",
        response_model=MessageResponseSchema,
        summary="Request Password Reset",
    )
    async def forgot_password(
        request: ForgotPasswordRequestSchema,
        auth_service: Annotated[AuthService, Depends(get_auth_service)],
    ) -> MessageResponseSchema:
        await auth_service.forgot_password(request.email)
        return MessageResponseSchema(message="Password reset email sent")

    @router.post(
        "/auth/logout",
        response_model=MessageResponseSchema,
        summary="Logout",
    )
    async def logout(
        user: AuthenticatedUser,
        auth_service: Annotated[AuthService, Depends(get_auth_service)],
    ) -> MessageResponseSchema:
        await auth_service.logout(user.access_token)
        return MessageResponseSchema(message="Logged out successfully")

    return router


tenant_auth_router = build_auth_router(Role.TENANT)
landlord_auth_router = build_auth_router(Role.LANDLORD)
