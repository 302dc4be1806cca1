"""Tenant profile, payment info, profile image and favorites endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from src.application.dto import PaymentInfoUpdate, TenantProfileUpdate
from src.application.services import TenantService
from src.core.dependencies import AuthenticatedUser, get_tenant_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    FavoriteCreateSchema,
    FavoriteListSchema,
    FavoriteSchema,
    MessageResponseSchema,
    PaymentInfoResponseSchema,
    PaymentInfoSchema,
    ProfileImageResponseSchema,
    TenantProfileSchema,
    TenantProfileUpdateSchema,
)

from .uploads import read_upload

tenant_router = APIRouter(
    prefix="/tenant",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Authentication required"},
        404: {"model": ErrorResponseSchema, "description": "Tenant or property not found"},
    },
)


@tenant_router.get(
    "/profile",
    response_model=TenantProfileSchema,
    summary="Get Tenant Profile",
)
async def get_profile(
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantProfileSchema:
    view = await tenant_service.get_profile(user.supabase_id)
    return TenantProfileSchema.from_view(view)


@tenant_router.put(
    "/profile",
    response_model=TenantProfileSchema,
    summary="Update Tenant Profile",
    description="Update profile fields. Fields that are not sent are left unchanged.",
)
async def update_profile(
    request: TenantProfileUpdateSchema,
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantProfileSchema:
    view = await tenant_service.update_profile(
        user.supabase_id,
        TenantProfileUpdate(**request.model_dump(exclude_unset=True)),
    )
    return TenantProfileSchema.from_view(view)


@tenant_router.put(
    "/payment-info",
    response_model=PaymentInfoResponseSchema,
    summary="Update Payment Info",
)
async def update_payment_info(
    request: PaymentInfoSchema,
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> PaymentInfoResponseSchema:
    tenant = await tenant_service.update_payment_info(
        user.supabase_id,
        PaymentInfoUpdate(
            credit_card_last4=request.credit_card_last4,
            credit_card_brand=request.credit_card_brand,
            credit_card_expiry=request.credit_card_expiry,
        ),
    )
    return PaymentInfoResponseSchema(
        payment_info=PaymentInfoSchema(
            credit_card_last4=tenant.credit_card_last4,
            credit_card_brand=tenant.credit_card_brand,
            credit_card_expiry=tenant.credit_card_expiry,
        )
    )


@tenant_router.post(
    "/profile-image",
    response_model=ProfileImageResponseSchema,
    summary="Upload Profile Image",
    description="JPEG, PNG, GIF or WebP, at most 5 MB. Replaces any existing image.",
)
async def upload_profile_image(
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
    file: UploadFile = File(...),
) -> ProfileImageResponseSchema:
    url = await tenant_service.upload_profile_image(user.supabase_id, await read_upload(file))
    return ProfileImageResponseSchema(message="Profile image uploaded successfully", profile_image=url)


@tenant_router.delete(
    "/profile-image",
    response_model=ProfileImageResponseSchema,
    summary="Delete Profile Image",
)
async def delete_profile_image(
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> ProfileImageResponseSchema:
    await tenant_service.delete_profile_image(user.supabase_id)
    return ProfileImageResponseSchema(message="Profile image deleted successfully")


# Favorites

@tenant_router.post(
    "/favorites",
    response_model=FavoriteSchema,
    status_code=201,
    summary="Add Favorite",
)
async def add_favorite(
    request: FavoriteCreateSchema,
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> FavoriteSchema:
    favorite = await tenant_service.add_favorite(user.supabase_id, request.property_id)
    return FavoriteSchema.from_entity(favorite)


@tenant_router.get(
    "/favorites",
    response_model=FavoriteListSchema,
    summary="List Favorites",
    description="Favorites ordered newest first, each with a property summary.",
)
async def list_favorites(
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> FavoriteListSchema:
    favorites = await tenant_service.list_favorites(user.supabase_id)
    return FavoriteListSchema(
        count=len(favorites),
        favorites=[FavoriteSchema.from_entity(f) for f in favorites],
    )


@tenant_router.delete(
    "/favorites/{property_id}",
    response_model=MessageResponseSchema,
    summary="Remove Favorite",
)
async def remove_favorite(
    property_id: str,
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> MessageResponseSchema:
    await tenant_service.remove_favorite(user.supabase_id, property_id)
    return MessageResponseSchema(message="Property removed from favorites")


# Registered last: the path parameter would otherwise shadow the routes above.
@tenant_router.get(
    "/{tenant_id}",
    response_model=TenantProfileSchema,
    summary="View Tenant Profile",
    description="A landlord's read-only view of a tenant's profile.",
    responses={
        403: {"model": ErrorResponseSchema, "description": "Caller is not a landlord"},
    },
)
async def view_tenant(
    tenant_id: str,
    user: AuthenticatedUser,
    tenant_service: Annotated[TenantService, Depends(get_tenant_service)],
) -> TenantProfileSchema:
    view = await tenant_service.view_as_landlord(user.supabase_id, tenant_id)
    return TenantProfileSchema.from_view(view)
