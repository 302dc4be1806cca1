"""Data Transfer Objects for application layer."""

from .auth import LoginRequest, Role, SignupRequest, SignupResult
from .files import UploadedFile
from .profile import (
    ApplicationCounts,
    LandlordProfileView,
    PropertyApplications,
    TenantProfileView,
    BankInfoUpdate,
    DIRECT_DEPOSIT,
    E_TRANSFER,
    LandlordProfileUpdate,
    PaymentInfoUpdate,
    TenantProfileUpdate,
)
from .property import (
    PROTECTED_PROPERTY_FIELDS,
    PropertyInput,
    property_errors,
)

__all__ = [
    "ApplicationCounts",
    "LandlordProfileView",
    "PropertyApplications",
    "TenantProfileView",
    "LoginRequest",
    "Role",
    "SignupRequest",
    "SignupResult",
    "UploadedFile",
    "BankInfoUpdate",
    "DIRECT_DEPOSIT",
    "E_TRANSFER",
    "LandlordProfileUpdate",
    "PaymentInfoUpdate",
    "TenantProfileUpdate",
    "PROTECTED_PROPERTY_FIELDS",
    "PropertyInput",
    "property_errors",
]
