"""Data transfer objects for property listings."""

from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from src.domain.entities import (
    HeatingAndAC,
    LaundryType,
    PropertyStyle,
    PropertyType,
    UNIT_PROPERTY_TYPES,
)

# Fields a landlord may not change through a generic update.
PROTECTED_PROPERTY_FIELDS = {"id", "landlord_id", "is_leased", "num_applicants", "photos", "created_at", "updated_at"}


def _allowed(values: List[str], label: str, value: Any) -> Optional[str]:
    if value not in values:
        return f"{label} must be one of: {', '.join(values)}"
    return None


def property_errors(values: Dict[str, Any]) -> List[str]:
    """
    Validate listing attributes.

    Args:
        values: Property attributes keyed by field name

    Returns:
        Human-readable problems; empty when the listing is valid
    """
    errors = []

    checks = (
        ([t.value for t in PropertyType], "property_type"),
        ([s.value for s in PropertyStyle], "style"),
        ([h.value for h in HeatingAndAC], "heating_and_ac"),
        ([l.value for l in LaundryType], "laundry_type"),
    )
    for allowed, name in checks:
        problem = _allowed(allowed, name, values.get(name))
        if problem:
            errors.append(problem)

    price = values.get("price")
    if price is not None and price <= 0:
        errors.append("price must be positive")

    if values.get("has_parking") and values.get("parking_spaces") is None:
        errors.append("parking_spaces is required when has_parking is true")

    if values.get("property_type") in UNIT_PROPERTY_TYPES:
        if values.get("floor_number") is None:
            errors.append("floor_number is required for apartments and condos")
        if not values.get("unit_number"):
            errors.append("unit_number is required for apartments and condos")

    return errors


@dataclass(frozen=True)
class PropertyInput:
    """Input data for creating a listing."""
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

    def validate(self) -> List[str]:
        return property_errors(asdict(self))
