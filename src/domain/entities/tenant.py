"""Tenant entity."""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional


@dataclass
class Tenant:
    """
    A prospective renter.

    Keyed by the auth provider's user id. Verification fields are written
    by the verification checks; everything else comes from profile updates.
    """

    supabase_id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    date_of_birth: Optional[date] = None
    current_address: Optional[str] = None
    ssn: Optional[str] = None
    credit_score: Optional[int] = None
    last_credit_check: Optional[datetime] = None
    background_check_status: Optional[str] = None
    is_renting: bool = False

    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    occupation: Optional[str] = None
    income: Optional[float] = None
    preferred_move_in_date: Optional[date] = None
    bio: Optional[str] = None

    credit_card_last4: Optional[str] = None
    credit_card_brand: Optional[str] = None
    credit_card_expiry: Optional[str] = None

    verified: bool = False
    identity_verified: bool = False
    identity_verified_at: Optional[datetime] = None
    bank_account_verified: bool = False
    bank_account_verified_at: Optional[datetime] = None
    plaid_verified: bool = False
    plaid_verified_at: Optional[datetime] = None
    verified_income: Optional[float] = None
    income_verified_at: Optional[datetime] = None
    verified_first_name: Optional[str] = None
    verified_last_name: Optional[str] = None
    verified_email: Optional[str] = None
    verified_phone: Optional[str] = None
    verified_address: Optional[str] = None

    plaid_access_token: Optional[str] = None
    plaid_item_id: Optional[str] = None
    plaid_institution_id: Optional[str] = None
    plaid_institution_name: Optional[str] = None
    bank_accounts: List[Dict[str, Any]] = field(default_factory=list)

    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def primary_bank_account(self) -> Optional[Dict[str, Any]]:
        """The checking account if one is linked, else the first account."""
        for account in self.bank_accounts:
            if account.get("subtype") == "checking":
                return account
        return self.bank_accounts[0] if self.bank_accounts else None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
