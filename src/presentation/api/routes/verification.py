"""Tenant bank verification endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.services import VerificationService
from src.core.dependencies import AuthenticatedUser, get_verification_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    LinkTokenResponseSchema,
    PublicTokenRequestSchema,
    SandboxTokenResponseSchema,
    VerificationCompleteSchema,
    VerificationStatusSchema,
)

verification_router = APIRouter(
    prefix="/tenant/verify",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Authentication required"},
        404: {"model": ErrorResponseSchema, "description": "Tenant not found"},
        502: {"model": ErrorResponseSchema, "description": "Bank data provider error"},
        503: {"model": ErrorResponseSchema, "description": "Bank data provider unavailable"},
    },
)


@verification_router.post(
    "/plaid/init",
    response_model=LinkTokenResponseSchema,
    summary="Start Bank Link",
    description="Create a link token for the bank-link widget.",
)
async def init_bank_link(
    user: AuthenticatedUser,
    verification_service: Annotated[VerificationService, Depends(get_verification_service)],
) -> LinkTokenResponseSchema:
    token = await verification_service.create_link_token(user.supabase_id)
    return LinkTokenResponseSchema(link_token=token)


@verification_router.post(
    "/plaid/sandbox-token",
    response_model=SandboxTokenResponseSchema,
    summary="Create Sandbox Public Token",
    description="Sandbox environments only. Skips the widget for testing.",
)
async def create_sandbox_token(
    user: AuthenticatedUser,
    verification_service: Annotated[VerificationService, Depends(get_verification_service)],
) -> SandboxTokenResponseSchema:
    token = await verification_service.create_sandbox_token()
    return SandboxTokenResponseSchema(public_token=token)


@verification_router.post(
    "/plaid/complete",
    response_model=VerificationCompleteSchema,
    summary="Complete Bank Verification",
    description="""Exchange the widget's public token and run the identity,
    bank account and income checks.

    The checks run independently: one failing does not fail the others.
    The tenant is marked verified when at least one check succeeds.""",
)
async def complete_verification(
    request: PublicTokenRequestSchema,
    user: AuthenticatedUser,
    verification_service: Annotated[VerificationService, Depends(get_verification_service)],
) -> VerificationCompleteSchema:
    result = await verification_service.complete(user.supabase_id, request.public_token)
    return VerificationCompleteSchema(
        success=result.success,
        message=result.message,
        verifications={name: outcome.to_dict() for name, outcome in result.checks.items()},
    )


@verification_router.get(
    "/status",
    response_model=VerificationStatusSchema,
    summary="Get Verification Status",
)
async def get_verification_status(
    user: AuthenticatedUser,
    verification_service: Annotated[VerificationService, Depends(get_verification_service)],
) -> VerificationStatusSchema:
    tenant = await verification_service.get_status(user.supabase_id)
    return VerificationStatusSchema.from_entity(tenant)
