"""Landlord entity."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass
class Landlord:
    """A property owner, keyed by the auth provider's user id."""

    supabase_id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    verified: bool = False
    profile_image: Optional[str] = None

    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    website_url: Optional[str] = None

    company_name: Optional[str] = None
    business_address: Optional[str] = None
    tax_id: Optional[str] = None
    bio: Optional[str] = None
    years_of_experience: Optional[int] = None

    preferred_payment_method: Optional[str] = None
    bank_name: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    routing_number: Optional[str] = None
    e_transfer_email: Optional[str] = None
    e_transfer_phone: Optional[str] = None

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def account_number_mask(self) -> Optional[str]:
        if not self.account_number:
            return None
        return f"****{self.account_number[-4:]}"
