"""Property listing schemas."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import Landlord, Property


class PropertyCreateSchema(BaseModel):
    """
    Schema for POST /landlord/properties.

    Enumerated attributes are checked by the service so that all problems
    are reported together.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "address": "123 King St W",
                    "city": "Toronto",
                    "state": "ON",
                    "postal_code": "M5H 1A1",
                    "country": "Canada",
                    "price": 2400,
                    "property_type": "Apartment",
                    "style": "Detached",
                    "available_date": "2026-11-01",
                    "bedrooms": 2,
                    "bathrooms": 1,
                    "heating_and_ac": "Both",
                    "laundry_type": "In-Unit",
                    "floor_number": 12,
                    "unit_number": "1204",
                }
            ]
        }
    )
    address: str = Field(..., min_length=1, max_length=255)
    city: str = Field(..., min_length=1, max_length=100)
    state: str = Field(..., min_length=1, max_length=100)
    postal_code: str = Field(..., min_length=1, max_length=20)
    country: str = Field(..., min_length=1, max_length=100)
    price: float = Field(..., description="Monthly rent")
    property_type: str = Field(..., description="House, Apartment, Condo or Villa")
    style: str = Field(..., description="Detached, Bungalow, 2 Storey or 3+ Storey")
    available_date: date
    bedrooms: int = Field(..., ge=0)
    bathrooms: float = Field(..., ge=0)
    heating_and_ac: str = Field(..., description="Heating Only, AC Only, Both or None")
    laundry_type: str = Field(..., description="In-Unit, Shared or None")
    has_parking: bool = False
    parking_spaces: Optional[int] = Field(None, ge=0)
    floor_number: Optional[int] = None
    unit_number: Optional[str] = None
    total_square_feet: Optional[int] = Field(None, ge=0)
    room_details: Optional[Dict[str, Any]] = None
    has_microwave: bool = False
    has_refrigerator: bool = False
    is_pet_friendly: bool = False
    has_basement: bool = False
    description: Optional[str] = None


class PropertyUpdateSchema(BaseModel):
    """Schema for PUT /landlord/properties/{property_id}. Only sent fields change."""

    address: Optional[str] = Field(None, min_length=1, max_length=255)
    city: Optional[str] = Field(None, min_length=1, max_length=100)
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    price: Optional[float] = None
    property_type: Optional[str] = None
    style: Optional[str] = None
    available_date: Optional[date] = None
    bedrooms: Optional[int] = Field(None, ge=0)
    bathrooms: Optional[float] = Field(None, ge=0)
    heating_and_ac: Optional[str] = None
    laundry_type: Optional[str] = None
    has_parking: Optional[bool] = None
    parking_spaces: Optional[int] = Field(None, ge=0)
    floor_number: Optional[int] = None
    unit_number: Optional[str] = None
    total_square_feet: Optional[int] = Field(None, ge=0)
    room_details: Optional[Dict[str, Any]] = None
    has_microwave: Optional[bool] = None
    has_refrigerator: Optional[bool] = None
    is_pet_friendly: Optional[bool] = None
    has_basement: Optional[bool] = None
    description: Optional[str] = None


class LeaseUpdateSchema(BaseModel):
    is_leased: bool


class PropertySchema(BaseModel):
    """A listing as its landlord sees it."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    landlord_id: str
    address: str
    city: str
    state: str
    postal_code: str
    country: str
    price: float
    property_type: str
    style: str
    available_date: date
    bedrooms: int
    bathrooms: float
    heating_and_ac: str
    laundry_type: str
    has_parking: bool
    parking_spaces: Optional[int] = None
    floor_number: Optional[int] = None
    unit_number: Optional[str] = None
    total_square_feet: Optional[int] = None
    room_details: Optional[Dict[str, Any]] = None
    has_microwave: bool
    has_refrigerator: bool
    is_pet_friendly: bool
    has_basement: bool
    description: Optional[str] = None
    photos: List[str]
    is_leased: bool
    num_applicants: int
    created_at: datetime
    updated_at: datetime


class PropertySummarySchema(BaseModel):
    """Short listing summary embedded in application and favorite responses."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    address: str
    city: str
    state: str
    price: float
    property_type: str
    bedrooms: int
    bathrooms: float
    photos: List[str]
    is_leased: bool


class LandlordContactSchema(BaseModel):
    """Public contact block shown with a listing."""

    model_config = ConfigDict(from_attributes=True)

    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    company_name: Optional[str] = None


class PublicPropertySchema(PropertySchema):
    landlord: Optional[LandlordContactSchema] = None

    @classmethod
    def build(cls, property: Property, landlord: Optional[Landlord]) -> "PublicPropertySchema":
        return cls.model_validate(
            {
                **PropertySchema.model_validate(property).model_dump(),
                "landlord": LandlordContactSchema.model_validate(landlord) if landlord else None,
            }
        )


class PropertyListResponseSchema(BaseModel):
    count: int
    properties: List[PublicPropertySchema]
