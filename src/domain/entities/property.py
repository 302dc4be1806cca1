"""Property listing entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4


class PropertyType(str, Enum):
    HOUSE = "House"
    APARTMENT = "Apartment"
    CONDO = "Condo"
    VILLA = "Villa"


class PropertyStyle(str, Enum):
    DETACHED = "Detached"
    BUNGALOW = "Bungalow"
    TWO_STOREY = "2 Storey"
    THREE_PLUS_STOREY = "3+ Storey"


class HeatingAndAC(str, Enum):
    HEATING_ONLY = "Heating Only"
    AC_ONLY = "AC Only"
    BOTH = "Both"
    NONE = "None"


class LaundryType(str, Enum):
    IN_UNIT = "In-Unit"
    SHARED = "Shared"
    NONE = "None"


# Unit-level listings need a floor and unit number.
UNIT_PROPERTY_TYPES = {PropertyType.APARTMENT.value, PropertyType.CONDO.value}


@dataclass
class Property:
    """
    A rental listing owned by a landlord.

    ``price`` is the monthly rent. ``is_leased`` flips to True when an
    application on the property is approved.
    """

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
    has_parking: bool = False
    parking_spaces: Optional[int] = None
    floor_number: Optional[int] = None
    unit_number: Optional[str] = None
    total_square_feet: Optional[int] = None
    room_details: Optional[Dict[str, Any]] = None
    has_microwave: bool = False
    has_refrigerator: bool = False
    is_pet_friendly: bool = False
    has_basement: bool = False
    description: Optional[str] = None
    photos: List[str] = field(default_factory=list)
    is_leased: bool = False
    num_applicants: int = 0
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)
