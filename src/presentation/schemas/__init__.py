"""Pydantic schemas for API request/response validation."""

from .error import ErrorResponseSchema, MessageResponseSchema
from .auth import (
    SignupRequestSchema,
    SignupResponseSchema,
    LoginRequestSchema,
    LoginResponseSchema,
    ForgotPasswordRequestSchema,
)
from .property import (
    PropertyCreateSchema,
    PropertyUpdateSchema,
    LeaseUpdateSchema,
    PropertySchema,
    PropertySummarySchema,
    PublicPropertySchema,
    PropertyListResponseSchema,
)
from .application import (
    ApplicationCreateSchema,
    ApplicationSchema,
    ApplicationWithPropertySchema,
    ApplicationCreatedSchema,
    ApplicationListSchema,
    PropertyApplicationListSchema,
    ApplicationCheckSchema,
    DocumentUploadResponseSchema,
    BulkRevokeRequestSchema,
    RevokeResponseSchema,
    StatusUpdateRequestSchema,
    StatusUpdateResponseSchema,
    NoteCreateSchema,
    NoteSchema,
    NoteListSchema,
    DocumentLinkSchema,
    DocumentListSchema,
)
from .tenant import (
    TenantProfileUpdateSchema,
    TenantProfileSchema,
    PaymentInfoSchema,
    PaymentInfoResponseSchema,
    ProfileImageResponseSchema,
    FavoriteCreateSchema,
    FavoriteSchema,
    FavoriteListSchema,
)
from .landlord import (
    LandlordProfileUpdateSchema,
    LandlordProfileSchema,
    BankInfoRequestSchema,
    BankInfoSchema,
    BankInfoResponseSchema,
)
from .verification import (
    LinkTokenResponseSchema,
    SandboxTokenResponseSchema,
    PublicTokenRequestSchema,
    VerificationCompleteSchema,
    VerificationStatusSchema,
)
from .scoring import (
    CalculateScoreRequestSchema,
    TenantScoreSchema,
    CreditCheckSchema,
    CompatibilityRequestSchema,
    CompatibilitySchema,
)
from .newsletter import (
    SubscribeRequestSchema,
    SubscribeResponseSchema,
    SubscriberSchema,
    SubscriberListSchema,
    SubscriberResponseSchema,
)

__all__ = [
    "ErrorResponseSchema",
    "MessageResponseSchema",
    "SignupRequestSchema",
    "SignupResponseSchema",
    "LoginRequestSchema",
    "LoginResponseSchema",
    "ForgotPasswordRequestSchema",
    "PropertyCreateSchema",
    "PropertyUpdateSchema",
    "LeaseUpdateSchema",
    "PropertySchema",
    "PropertySummarySchema",
    "PublicPropertySchema",
    "PropertyListResponseSchema",
    "ApplicationCreateSchema",
    "ApplicationSchema",
    "ApplicationWithPropertySchema",
    "ApplicationCreatedSchema",
    "ApplicationListSchema",
    "PropertyApplicationListSchema",
    "ApplicationCheckSchema",
    "DocumentUploadResponseSchema",
    "BulkRevokeRequestSchema",
    "RevokeResponseSchema",
    "StatusUpdateRequestSchema",
    "StatusUpdateResponseSchema",
    "NoteCreateSchema",
    "NoteSchema",
    "NoteListSchema",
    "DocumentLinkSchema",
    "DocumentListSchema",
    "TenantProfileUpdateSchema",
    "TenantProfileSchema",
    "PaymentInfoSchema",
    "PaymentInfoResponseSchema",
    "ProfileImageResponseSchema",
    "FavoriteCreateSchema",
    "FavoriteSchema",
    "FavoriteListSchema",
    "LandlordProfileUpdateSchema",
    "LandlordProfileSchema",
    "BankInfoRequestSchema",
    "BankInfoSchema",
    "BankInfoResponseSchema",
    "LinkTokenResponseSchema",
    "SandboxTokenResponseSchema",
    "PublicTokenRequestSchema",
    "VerificationCompleteSchema",
    "VerificationStatusSchema",
    "CalculateScoreRequestSchema",
    "TenantScoreSchema",
    "CreditCheckSchema",
    "CompatibilityRequestSchema",
    "CompatibilitySchema",
    "SubscribeRequestSchema",
    "SubscribeResponseSchema",
    "SubscriberSchema",
    "SubscriberListSchema",
    "SubscriberResponseSchema",
]
