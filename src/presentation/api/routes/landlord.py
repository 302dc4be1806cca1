"""Landlord profile, payout details and profile image endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, File, UploadFile

from src.application.dto import BankInfoUpdate, LandlordProfileUpdate
from src.application.services import LandlordService
from src.core.dependencies import AuthenticatedUser, get_landlord_service
from src.presentation.schemas import (
    BankInfoRequestSchema,
    BankInfoResponseSchema,
    BankInfoSchema,
    ErrorResponseSchema,
    LandlordProfileSchema,
    LandlordProfileUpdateSchema,
    ProfileImageResponseSchema,
)

from .uploads import read_upload

landlord_router = APIRouter(
    prefix="/landlord",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Authentication required"},
        404: {"model": ErrorResponseSchema, "description": "Landlord not found"},
    },
)


@landlord_router.get(
    "/profile",
    response_model=LandlordProfileSchema,
    summary="Get Landlord Profile",
    description="Profile details plus every owned property with its applications.",
)
async def get_profile(
    user: AuthenticatedUser,
    landlord_service: Annotated[LandlordService, Depends(get_landlord_service)],
) -> LandlordProfileSchema:
    view = await landlord_service.get_profile(user.supabase_id)
    return LandlordProfileSchema.from_view(view)


@landlord_router.put(
    "/profile",
    response_model=LandlordProfileSchema,
    summary="Update Landlord Profile",
)
async def update_profile(
    request: LandlordProfileUpdateSchema,
    user: AuthenticatedUser,
    landlord_service: Annotated[LandlordService, Depends(get_landlord_service)],
) -> LandlordProfileSchema:
    view = await landlord_service.update_profile(
        user.supabase_id,
        LandlordProfileUpdate(**request.model_dump(exclude_unset=True)),
    )
    return LandlordProfileSchema.from_view(view)


@landlord_router.put(
    "/bank-info",
    response_model=BankInfoResponseSchema,
    summary="Update Payout Details",
    description="""Set how the landlord receives rent.

    `directDeposit` requires bank_name, account_name, account_number and
    routing_number. `eTransfer` requires an email or a phone.""",
)
async def update_bank_info(
    request: BankInfoRequestSchema,
    user: AuthenticatedUser,
    landlord_service: Annotated[LandlordService, Depends(get_landlord_service)],
) -> BankInfoResponseSchema:
    landlord = await landlord_service.update_bank_info(
        user.supabase_id,
        BankInfoUpdate(**request.model_dump()),
    )
    return BankInfoResponseSchema(bank_info=BankInfoSchema.from_entity(landlord))


@landlord_router.post(
    "/profile-image",
    response_model=ProfileImageResponseSchema,
    summary="Upload Profile Image",
)
async def upload_profile_image(
    user: AuthenticatedUser,
    landlord_service: Annotated[LandlordService, Depends(get_landlord_service)],
    file: UploadFile = File(...),
) -> ProfileImageResponseSchema:
    url = await landlord_service.upload_profile_image(user.supabase_id, await read_upload(file))
    return ProfileImageResponseSchema(message="Profile image uploaded successfully", profile_image=url)


@landlord_router.delete(
    "/profile-image",
    response_model=ProfileImageResponseSchema,
    summary="Delete Profile Image",
)
async def delete_profile_image(
    user: AuthenticatedUser,
    landlord_service: Annotated[LandlordService, Depends(get_landlord_service)],
) -> ProfileImageResponseSchema:
    await landlord_service.delete_profile_image(user.supabase_id)
    return ProfileImageResponseSchema(message="Profile image deleted successfully")
