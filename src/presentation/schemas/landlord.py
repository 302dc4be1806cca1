"""Landlord profile and payout schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from src.application.dto import LandlordProfileView
from src.domain.entities import Landlord

from .application import ApplicationSchema
from .property import PropertySchema


class LandlordProfileUpdateSchema(BaseModel):
    """Schema for PUT /landlord/profile. Unsent fields are left unchanged."""

    first_name: Optional[str] = Field(None, max_length=100)
    last_name: Optional[str] = Field(None, max_length=100)
    phone: Optional[str] = None
    company_name: Optional[str] = Field(None, max_length=255)
    business_address: Optional[str] = Field(None, max_length=500)
    bio: Optional[str] = Field(None, max_length=5000)
    years_of_experience: Optional[int] = None
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    website_url: Optional[str] = None


class BankInfoRequestSchema(BaseModel):
    preferred_payment_method: str = Field(
        ...,
        description="directDeposit or eTransfer",
        examples=["directDeposit"],
    )
    bank_name: Optional[str] = None
    account_name: Optional[str] = None
    account_number: Optional[str] = None
    routing_number: Optional[str] = None
    e_transfer_email: Optional[str] = None
    e_transfer_phone: Optional[str] = None


class BankInfoSchema(BaseModel):
    """Payout details with the account number masked."""

    preferred_payment_method: Optional[str] = None
    bank_name: Optional[str] = None
    account_name: Optional[str] = None
    account_number_mask: Optional[str] = None
    routing_number: Optional[str] = None
    e_transfer_email: Optional[str] = None
    e_transfer_phone: Optional[str] = None

    @classmethod
    def from_entity(cls, landlord: Landlord) -> "BankInfoSchema":
        return cls(
            preferred_payment_method=landlord.preferred_payment_method,
            bank_name=landlord.bank_name,
            account_name=landlord.account_name,
            account_number_mask=landlord.account_number_mask,
            routing_number=landlord.routing_number,
            e_transfer_email=landlord.e_transfer_email,
            e_transfer_phone=landlord.e_transfer_phone,
        )


class BankInfoResponseSchema(BaseModel):
    message: str = "Bank information updated successfully"
    bank_info: BankInfoSchema


class SocialLinksSchema(BaseModel):
    linkedin_url: Optional[str] = None
    facebook_url: Optional[str] = None
    instagram_url: Optional[str] = None
    website_url: Optional[str] = None


class BusinessInfoSchema(BaseModel):
    company_name: Optional[str] = None
    business_address: Optional[str] = None
    tax_id: Optional[str] = None


class PropertyWithApplicationsSchema(PropertySchema):
    applications: List[ApplicationSchema]


class LandlordProfileSchema(BaseModel):
    landlord_id: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    profile_image: Optional[str] = None
    verified: bool
    bio: Optional[str] = None
    years_of_experience: Optional[int] = None
    social_links: SocialLinksSchema
    business_info: BusinessInfoSchema
    bank_info: BankInfoSchema
    properties: List[PropertyWithApplicationsSchema]
    created_at: datetime

    @classmethod
    def from_view(cls, view: LandlordProfileView) -> "LandlordProfileSchema":
        landlord = view.landlord
        return cls(
            landlord_id=landlord.supabase_id,
            first_name=landlord.first_name,
            last_name=landlord.last_name,
            email=landlord.email,
            phone=landlord.phone,
            profile_image=landlord.profile_image,
            verified=landlord.verified,
            bio=landlord.bio,
            years_of_experience=landlord.years_of_experience,
            social_links=SocialLinksSchema(
                linkedin_url=landlord.linkedin_url,
                facebook_url=landlord.facebook_url,
                instagram_url=landlord.instagram_url,
                website_url=landlord.website_url,
            ),
            business_info=BusinessInfoSchema(
                company_name=landlord.company_name,
                business_address=landlord.business_address,
                tax_id=landlord.tax_id,
            ),
            bank_info=BankInfoSchema.from_entity(landlord),
            properties=[
                PropertyWithApplicationsSchema(
                    **PropertySchema.model_validate(entry.property).model_dump(),
                    applications=[ApplicationSchema.model_validate(a) for a in entry.applications],
                )
                for entry in view.properties
            ],
            created_at=landlord.created_at,
        )
