"""Landlord listing management and application review endpoints."""

from typing import Annotated, List, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile

from src.application.dto import PropertyInput
from src.application.services import ApplicationService, PropertyService
from src.core.dependencies import (
    AuthenticatedUser,
    get_application_service,
    get_property_service,
)
from src.presentation.schemas import (
    ApplicationSchema,
    ErrorResponseSchema,
    LeaseUpdateSchema,
    MessageResponseSchema,
    PropertyApplicationListSchema,
    PropertyCreateSchema,
    PropertySchema,
    PropertyUpdateSchema,
    StatusUpdateRequestSchema,
    StatusUpdateResponseSchema,
)

from .uploads import read_uploads

landlord_properties_router = APIRouter(
    prefix="/landlord/properties",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        401: {"model": ErrorResponseSchema, "description": "Authentication required"},
        404: {"model": ErrorResponseSchema, "description": "Property not found or not owned"},
    },
)


@landlord_properties_router.post(
    "",
    response_model=PropertySchema,
    status_code=201,
    summary="Create Property",
)
async def create_property(
    request: PropertyCreateSchema,
    user: AuthenticatedUser,
    property_service: Annotated[PropertyService, Depends(get_property_service)],
) -> PropertySchema:
    property = await property_service.create(
        user.supabase_id,
        PropertyInput(**request.model_dump()),
    )
    return PropertySchema.model_validate(property)


@landlord_properties_router.get(
    "",
    response_model=List[PropertySchema],
    summary="List My Properties",
)
async def list_properties(
    user: AuthenticatedUser,
    property_service: Annotated[PropertyService, Depends(get_property_service)],
) -> List[PropertySchema]:
    properties = await property_service.list_for_landlord(user.supabase_id)
    return [PropertySchema.model_validate(p) for p in properties]


@landlord_properties_router.get(
    "/{property_id}",
    response_model=PropertySchema,
    summary="Get My Property",
)
async def get_property(
    property_id: str,
    user: AuthenticatedUser,
    property_service: Annotated[PropertyService, Depends(get_property_service)],
) -> PropertySchema:
    property = await property_service.get_owned(user.supabase_id, property_id)
    return PropertySchema.model_validate(property)


@landlord_properties_router.put(
    "/{property_id}",
    response_model=PropertySchema,
    summary="Update Property",
    description="Partial update. The lease flag is changed through the lease endpoint.",
)
async def update_property(
    property_id: str,
    request: PropertyUpdateSchema,
    user: AuthenticatedUser,
    property_service: Annotated[PropertyService, Depends(get_property_service)],
) -> PropertySchema:
    property = await property_service.update(
        user.supabase_id,
        property_id,
        request.model_dump(exclude_unset=True),
    )
    return PropertySchema.model_validate(property)


@landlord_properties_router.delete(
    "/{property_id}",
    response_model=MessageResponseSchema,
    summary="Delete Property",
    description="Deletes the listing together with its applications and favorites.",
)
async def delete_property(
    property_id: str,
    user: AuthenticatedUser,
    property_service: Annotated[PropertyService, Depends(get_property_service)],
) -> MessageResponseSchema:
    await property_service.delete(user.supabase_id, property_id)
    return MessageResponseSchema(message="Property deleted successfully")


@landlord_properties_router.put(
    "/{property_id}/lease",
    response_model=PropertySchema,
    summary="Set Lease Status",
)
async def set_lease(
    property_id: str,
    request: LeaseUpdateSchema,
    user: AuthenticatedUser,
    property_service: Annotated[PropertyService, Depends(get_property_service)],
) -> PropertySchema:
    property = await property_service.set_lease(user.supabase_id, property_id, request.is_leased)
    return PropertySchema.model_validate(property)


@landlord_properties_router.post(
    "/{property_id}/photos",
    response_model=PropertySchema,
    summary="Upload Property Photos",
    description="""Append photos to a listing.

    At most 10 files per request and 20 per property. JPEG, PNG, GIF or
    PDF, each at most 50 MB.""",
)
async def upload_photos(
    property_id: str,
    user: AuthenticatedUser,
    property_service: Annotated[PropertyService, Depends(get_property_service)],
    photos: List[UploadFile] = File(...),
) -> PropertySchema:
    property = await property_service.upload_photos(
        user.supabase_id,
        property_id,
        await read_uploads(photos),
    )
    return PropertySchema.model_validate(property)


# Applications on a listing

@landlord_properties_router.get(
    "/{property_id}/applications",
    response_model=PropertyApplicationListSchema,
    summary="List Property Applications",
)
async def list_property_applications(
    property_id: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
    status: Annotated[
        Optional[str],
        Query(description="Pending, Approved or Rejected"),
    ] = None,
) -> PropertyApplicationListSchema:
    applications = await application_service.list_for_property(user.supabase_id, property_id, status)
    return PropertyApplicationListSchema(
        count=len(applications),
        applications=[ApplicationSchema.model_validate(a) for a in applications],
    )


@landlord_properties_router.put(
    "/{property_id}/applications/{application_id}/status",
    response_model=StatusUpdateResponseSchema,
    summary="Approve Or Reject Application",
    description="""Decide a pending application.

    Approving also marks the property as leased, in the same transaction.""",
)
async def update_application_status(
    property_id: str,
    application_id: str,
    request: StatusUpdateRequestSchema,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> StatusUpdateResponseSchema:
    application = await application_service.update_status(
        user.supabase_id,
        property_id,
        application_id,
        request.status,
    )
    return StatusUpdateResponseSchema(
        message=f"Application {application.status.value.lower()} successfully",
        application=ApplicationSchema.model_validate(application),
    )
