"""Bank verification schemas."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.entities import Tenant


class LinkTokenResponseSchema(BaseModel):
    link_token: str


class SandboxTokenResponseSchema(BaseModel):
    public_token: str


class PublicTokenRequestSchema(BaseModel):
    public_token: str = Field(..., min_length=1, description="Public token from the bank-link widget")


class CheckResultSchema(BaseModel):
    success: bool
    message: str
    data: Optional[Dict[str, Any]] = None


class VerificationCompleteSchema(BaseModel):
    success: bool
    message: str
    verifications: Dict[str, CheckResultSchema] = Field(
        ...,
        description="One entry each for identity, income and bank_account",
    )


class VerifiedIdentitySchema(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class LinkedItemSchema(BaseModel):
    item_id: Optional[str] = None
    institution_id: Optional[str] = None
    institution_name: Optional[str] = None


class VerificationStatusSchema(BaseModel):
    """Result of GET /tenant/verify/status. The provider access token is never exposed."""

    verified: bool
    plaid_verified: bool
    plaid_verified_at: Optional[datetime] = None
    identity_verified: bool
    identity_verified_at: Optional[datetime] = None
    bank_account_verified: bool
    bank_account_verified_at: Optional[datetime] = None
    income_verified: bool
    income_verified_at: Optional[datetime] = None
    verified_income: Optional[float] = None
    verified_identity: VerifiedIdentitySchema
    primary_bank_account: Optional[Dict[str, Any]] = None
    plaid_item: LinkedItemSchema
    bank_accounts: List[Dict[str, Any]]

    @classmethod
    def from_entity(cls, tenant: Tenant) -> "VerificationStatusSchema":
        return cls(
            verified=tenant.verified,
            plaid_verified=tenant.plaid_verified,
            plaid_verified_at=tenant.plaid_verified_at,
            identity_verified=tenant.identity_verified,
            identity_verified_at=tenant.identity_verified_at,
            bank_account_verified=tenant.bank_account_verified,
            bank_account_verified_at=tenant.bank_account_verified_at,
            income_verified=tenant.verified_income is not None,
            income_verified_at=tenant.income_verified_at,
            verified_income=tenant.verified_income,
            verified_identity=VerifiedIdentitySchema(
                first_name=tenant.verified_first_name,
                last_name=tenant.verified_last_name,
                email=tenant.verified_email,
                phone=tenant.verified_phone,
                address=tenant.verified_address,
            ),
            primary_bank_account=tenant.primary_bank_account,
            plaid_item=LinkedItemSchema(
                item_id=tenant.plaid_item_id,
                institution_id=tenant.plaid_institution_id,
                institution_name=tenant.plaid_institution_name,
            ),
            bank_accounts=tenant.bank_accounts,
        )
