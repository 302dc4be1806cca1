"""Data transfer objects for tenant and landlord profile updates."""

import re
from dataclasses import dataclass, fields
from datetime import date
from typing import Any, Dict, List, Optional

from src.domain.entities import Application, Landlord, Property, Tenant


class _PartialUpdate:
    """Mixin for update DTOs whose unset fields are left untouched."""

    def changes(self) -> Dict[str, Any]:
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not None
        }


@dataclass(frozen=True)
class TenantProfileUpdate(_PartialUpdate):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    occupation: Optional[str] = None
    income: Optional[float] = None
    preferred_move_in_date: Optional[date] = None
    bio: Optional[str] = None
    date_of_birth: Optional[date] = None
    current_address: Optional[str] = None
    ssn: Optional[str] = None


@dataclass(frozen=True)
class LandlordProfileUpdate(_PartialUpdate):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    phone: Optional[str] = None
    company_name: Optional[str] = None
    business_address: Optional[str] = None
    bio: Optional[str] = None
    years_of_experience: Optional[int] = None
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    website_url: Optional[str] = None


@dataclass(frozen=True)
class PaymentInfoUpdate:
    """Card details kept for display. Only the last four digits are stored."""
    credit_card_last4: str
    credit_card_brand: str
    credit_card_expiry: str

    def validate(self) -> List[str]:
        errors = []

        if not re.fullmatch(r"\d{4}", self.credit_card_last4 or ""):
            errors.append("credit_card_last4 must be exactly 4 digits")

        if not (self.credit_card_brand or "").strip():
            errors.append("credit_card_brand is required")

        if not re.fullmatch(r"(0[1-9]|1[0-2])/\d{2}", self.credit_card_expiry or ""):
            errors.append("credit_card_expiry must be in MM/YY format")

        return errors


DIRECT_DEPOSIT = "directDeposit"
E_TRANSFER = "eTransfer"


@dataclass(frozen=True)
class BankInfoUpdate:
    preferred_payment_method: str
    bank_name: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    routing_number: Optional[str] = None
    e_transfer_email: Optional[str] = None
    e_transfer_phone: Optional[str] = None

    def missing_fields(self) -> List[str]:
        if self.preferred_payment_method == DIRECT_DEPOSIT:
            return [
                name
                for name in ("bank_name", "account_name", "account_number", "routing_number")
                if not getattr(self, name)
            ]
        if self.preferred_payment_method == E_TRANSFER:
            if not self.e_transfer_email and not self.e_transfer_phone:
                return ["e_transfer_email", "e_transfer_phone"]
        return []


@dataclass(frozen=True)
class ApplicationCounts:
    """A tenant's applications by status: Pending, Rejected, Approved."""
    ongoing: int = 0
    rejected: int = 0
    completed: int = 0


@dataclass(frozen=True)
class TenantProfileView:
    tenant: Tenant
    application_counts: ApplicationCounts


@dataclass(frozen=True)
class PropertyApplications:
    property: Property
    applications: List[Application]


@dataclass(frozen=True)
class LandlordProfileView:
    landlord: Landlord
    properties: List[PropertyApplications]
