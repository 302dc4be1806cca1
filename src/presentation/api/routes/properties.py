"""Public listing endpoints. No authentication required."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from src.application.services import PropertyService
from src.core.dependencies import get_property_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    PropertyListResponseSchema,
    PublicPropertySchema,
)

properties_router = APIRouter(prefix="/properties")


@properties_router.get(
    "",
    response_model=PropertyListResponseSchema,
    summary="List Properties",
    description="All listings, newest first, with the landlord's public contact details.",
)
async def list_properties(
    property_service: Annotated[PropertyService, Depends(get_property_service)],
) -> PropertyListResponseSchema:
    results = await property_service.list_public()
    return PropertyListResponseSchema(
        count=len(results),
        properties=[PublicPropertySchema.build(p, landlord) for p, landlord in results],
    )


@properties_router.get(
    "/search",
    response_model=PropertyListResponseSchema,
    summary="Search Properties",
)
async def search_properties(
    property_service: Annotated[PropertyService, Depends(get_property_service)],
    min_price: Annotated[Optional[float], Query(ge=0)] = None,
    max_price: Annotated[Optional[float], Query(ge=0)] = None,
    location: Annotated[
        Optional[str],
        Query(max_length=200, description="Matches address or city, case-insensitive"),
    ] = None,
    bedrooms: Annotated[Optional[int], Query(ge=0)] = None,
    property_type: Annotated[Optional[str], Query()] = None,
) -> PropertyListResponseSchema:
    results = await property_service.search(
        min_price=min_price,
        max_price=max_price,
        location=location,
        bedrooms=bedrooms,
        property_type=property_type,
    )
    return PropertyListResponseSchema(
        count=len(results),
        properties=[PublicPropertySchema.build(p, landlord) for p, landlord in results],
    )


@properties_router.get(
    "/{property_id}/public",
    response_model=PublicPropertySchema,
    summary="Get Property",
    responses={
        404: {"model": ErrorResponseSchema, "description": "Property not found"},
    },
)
async def get_property(
    property_id: str,
    property_service: Annotated[PropertyService, Depends(get_property_service)],
) -> PublicPropertySchema:
    property, landlord = await property_service.get_public(property_id)
    return PublicPropertySchema.build(property, landlord)
