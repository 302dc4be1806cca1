"""Domain Entities - Core business objects."""

from .auth import AuthSession, AuthUser, CurrentUser
from .banking import (
    AccountOwner,
    AchNumbers,
    AuthSnapshot,
    BankAccount,
    BankTransaction,
    ContactEntry,
    IdentitySnapshot,
    ItemAccess,
    PostalAddress,
)
from .tenant import Tenant
from .landlord import Landlord
from .property import (
    Property,
    PropertyType,
    PropertyStyle,
    HeatingAndAC,
    LaundryType,
    UNIT_PROPERTY_TYPES,
)
from .application import (
    Application,
    ApplicationNote,
    ApplicationStatus,
    ApplicationView,
    CreatorType,
    DocumentType,
    REQUIRED_DOCUMENTS,
)
from .favorite import Favorite
from .newsletter import NewsletterSubscriber

__all__ = [
    "AuthSession",
    "AuthUser",
    "CurrentUser",
    "AccountOwner",
    "AchNumbers",
    "AuthSnapshot",
    "BankAccount",
    "BankTransaction",
    "ContactEntry",
    "IdentitySnapshot",
    "ItemAccess",
    "PostalAddress",
    "Tenant",
    "Landlord",
    "Property",
    "PropertyType",
    "PropertyStyle",
    "HeatingAndAC",
    "LaundryType",
    "UNIT_PROPERTY_TYPES",
    "Application",
    "ApplicationNote",
    "ApplicationStatus",
    "ApplicationView",
    "CreatorType",
    "DocumentType",
    "REQUIRED_DOCUMENTS",
    "Favorite",
    "NewsletterSubscriber",
]
