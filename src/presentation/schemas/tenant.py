"""Tenant profile and favorites schemas."""

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.application.dto import TenantProfileView
from src.domain.entities import Favorite

from .property import PropertySummarySchema


class TenantProfileUpdateSchema(BaseModel):
    """Schema for PUT /tenant/profile. Unsent fields are left unchanged."""

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = None
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    occupation: Optional[str] = Field(None, max_length=255)
    income: Optional[float] = Field(None, ge=0)
    preferred_move_in_date: Optional[date] = None
    bio: Optional[str] = Field(None, max_length=5000)
    date_of_birth: Optional[date] = None
    current_address: Optional[str] = Field(None, max_length=500)
    ssn: Optional[str] = Field(None, max_length=20)


class PaymentInfoSchema(BaseModel):
    credit_card_last4: str = Field(..., examples=["4242"])
    credit_card_brand: str = Field(..., examples=["Visa"])
    credit_card_expiry: str = Field(..., description="MM/YY", examples=["08/28"])


class PaymentInfoResponseSchema(BaseModel):
    message: str = "Payment information updated successfully"
    payment_info: PaymentInfoSchema


class ApplicationCountsSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    ongoing: int
    rejected: int
    completed: int


class VerificationSummarySchema(BaseModel):
    identity: bool
    income: bool
    bank_account: bool
    last_verified: Optional[datetime] = None


class TenantProfileSchema(BaseModel):
    """A tenant's full profile as returned by GET /tenant/profile."""

    tenant_id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    verified: bool
    credit_score: Optional[int] = None
    last_credit_check: Optional[datetime] = None
    payment_info: Optional[PaymentInfoSchema] = None
    profile: Dict[str, Any]
    bank_account: Optional[Dict[str, Any]] = None
    verifications: VerificationSummarySchema
    application_counts: ApplicationCountsSchema
    created_at: datetime

    @classmethod
    def from_view(cls, view: TenantProfileView) -> "TenantProfileSchema":
        tenant = view.tenant
        payment_info = None
        if tenant.credit_card_last4:
            payment_info = PaymentInfoSchema(
                credit_card_last4=tenant.credit_card_last4,
                credit_card_brand=tenant.credit_card_brand or "",
                credit_card_expiry=tenant.credit_card_expiry or "",
            )
        last_verified = max(
            (
                ts
                for ts in (
                    tenant.identity_verified_at,
                    tenant.bank_account_verified_at,
                    tenant.income_verified_at,
                    tenant.plaid_verified_at,
                )
                if ts is not None
            ),
            default=None,
        )
        return cls(
            tenant_id=tenant.supabase_id,
            first_name=tenant.first_name,
            last_name=tenant.last_name,
            email=tenant.email,
            phone=tenant.phone,
            profile_image=tenant.profile_image,
            linkedin_url=tenant.linkedin_url,
            facebook_url=tenant.facebook_url,
            instagram_url=tenant.instagram_url,
            verified=tenant.verified,
            credit_score=tenant.credit_score,
            last_credit_check=tenant.last_credit_check,
            payment_info=payment_info,
            profile={
                "occupation": tenant.occupation,
                "income": tenant.income,
                "preferred_move_in_date": tenant.preferred_move_in_date,
                "bio": tenant.bio,
                "date_of_birth": tenant.date_of_birth,
                "current_address": tenant.current_address,
                "is_renting": tenant.is_renting,
            },
            bank_account=tenant.primary_bank_account,
            verifications=VerificationSummarySchema(
                identity=tenant.identity_verified,
                income=tenant.verified_income is not None,
                bank_account=tenant.bank_account_verified,
                last_verified=last_verified,
            ),
            application_counts=ApplicationCountsSchema.model_validate(view.application_counts),
            created_at=tenant.created_at,
        )


class ProfileImageResponseSchema(BaseModel):
    message: str
    profile_image: Optional[str] = None


class FavoriteCreateSchema(BaseModel):
    property_id: str = Field(..., min_length=1)


class FavoriteSchema(BaseModel):
    id: str
    property_id: str
    created_at: datetime
    property: Optional[PropertySummarySchema] = None

    @classmethod
    def from_entity(cls, favorite: Favorite) -> "FavoriteSchema":
        return cls(
            id=favorite.id,
            property_id=favorite.property_id,
            created_at=favorite.created_at,
            property=(
                PropertySummarySchema.model_validate(favorite.property)
                if favorite.property is not None
                else None
            ),
        )


class FavoriteListSchema(BaseModel):
    count: int
    favorites: List[FavoriteSchema]
