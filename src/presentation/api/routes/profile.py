"""Profile endpoints addressed by role, mirroring /tenant/profile and /landlord/profile."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.application.dto import LandlordProfileUpdate, TenantProfileUpdate
from src.application.services import LandlordService, TenantService
from src.core.dependencies import (
    AuthenticatedUser,
    get_landlord_service,
    get_tenant_service,
)
from src.presentation.schemas import (
    ErrorResponseSchema,
    LandlordProfileSchema,
    LandlordProfileUpdateSchema,
    TenantProfileSchema,
    TenantProfileUpdateSchema,
)

profile_router = APIRouter(
    prefix="/profile",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Authentication required"},
        404: {"model": ErrorResponseSchema, "description": "Profile not found"},
    },
)


@profile_router.get("/tenant", response_model=TenantProfileSchema, summary="Get Tenant Profile")
async def get_tenant_profile(
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantProfileSchema:
    return TenantProfileSchema.from_view(await tenant_service.get_profile(user.supabase_id))


@profile_router.put("/tenant", response_model=TenantProfileSchema, summary="Update Tenant Profile")
async def update_tenant_profile(
    request: TenantProfileUpdateSchema,
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantProfileSchema:
    view = await tenant_service.update_profile(
        user.supabase_id,
        TenantProfileUpdate(**request.model_dump(exclude_unset=True)),
    )
    return TenantProfileSchema.from_view(view)


@profile_router.get("/landlord", response_model=LandlordProfileSchema, summary="Get Landlord Profile")
async def get_landlord_profile(
    user: AuthenticatedUser,
    landlord_service: Annotated[LandlordService, Depends(get_landlord_service)],
) -> LandlordProfileSchema:
    return LandlordProfileSchema.from_view(await landlord_service.get_profile(user.supabase_id))


@profile_router.put("/landlord", response_model=LandlordProfileSchema, summary="Update Landlord Profile")
async def update_landlord_profile(
    request: LandlordProfileUpdateSchema,
    user: AuthenticatedUser,
    landlord_service: Annotated[LandlordService, Depends(get_landlord_service)],
) -> LandlordProfileSchema:
    view = await landlord_service.update_profile(
        user.supabase_id,
        LandlordProfileUpdate(**request.model_dump(exclude_unset=True)),
    )
    return LandlordProfileSchema.from_view(view)
