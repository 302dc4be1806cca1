"""Tenant scoring, credit check and property compatibility endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.services import ScoringService
from src.core.dependencies import AuthenticatedUser, get_scoring_service
from src.presentation.schemas import (
    CalculateScoreRequestSchema,
    CompatibilityRequestSchema,
    CompatibilitySchema,
    CreditCheckSchema,
    ErrorResponseSchema,
    TenantScoreSchema,
)

scoring_router = APIRouter(
    prefix="/scoring",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request or missing verification"},
        401: {"model": ErrorResponseSchema, "description": "Authentication required"},
        404: {"model": ErrorResponseSchema, "description": "Tenant or property not found"},
        503: {"model": ErrorResponseSchema, "description": "Provider unavailable"},
    },
)


@scoring_router.post(
    "/calculate-score",
    response_model=TenantScoreSchema,
    summary="Calculate Tenant Score",
    description="""Score the calling tenant against a property's rent.

    Requires a completed bank verification. The income estimate is
    refreshed from recent transactions before scoring.""",
)
async def calculate_score(
    request: CalculateScoreRequestSchema,
    user: AuthenticatedUser,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> TenantScoreSchema:
    result = await scoring_service.calculate_score(user.supabase_id, request.property_id)
    return TenantScoreSchema(**result.to_dict())


@scoring_router.get(
    "/check-credit",
    response_model=CreditCheckSchema,
    summary="Check Credit Score",
    description="Requires ssn, date_of_birth and current_address on the tenant profile.",
)
@scoring_router.post(
    "/check-credit-score",
    response_model=CreditCheckSchema,
    include_in_schema=False,
)
async def check_credit(
    user: AuthenticatedUser,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> CreditCheckSchema:
    tenant = await scoring_service.check_credit(user.supabase_id)
    return CreditCheckSchema(
        credit_score=tenant.credit_score,
        last_credit_check=tenant.last_credit_check,
    )


@scoring_router.post(
    "/check-compatibility",
    response_model=CompatibilitySchema,
    summary="Check Property Compatibility",
    description="Affordability of a property for a stated monthly income.",
)
async def check_compatibility(
    request: CompatibilityRequestSchema,
    user: AuthenticatedUser,
    scoring_service: Annotated[ScoringService, Depends(get_scoring_service)],
) -> CompatibilitySchema:
    result = await scoring_service.check_compatibility(request.monthly_income, request.property_id)
    return CompatibilitySchema(**result.to_dict())
