"""Domain Interfaces - Abstract contracts for infrastructure."""

from .repositories import (
    TenantRepository,
    LandlordRepository,
    PropertyRepository,
    ApplicationRepository,
    FavoriteRepository,
    NewsletterRepository,
)
from .clients import (
    AuthProviderClient,
    StorageClient,
    FinancialDataClient,
    EmailClient,
    EmailResult,
    CreditBureauClient,
)

__all__ = [
    "TenantRepository",
    "LandlordRepository",
    "PropertyRepository",
    "ApplicationRepository",
    "FavoriteRepository",
    "NewsletterRepository",
    "AuthProviderClient",
    "StorageClient",
    "FinancialDataClient",
    "EmailClient",
    "EmailResult",
    "CreditBureauClient",
]
