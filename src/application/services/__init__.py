"""Application services (use cases)."""

from .auth_service import AuthService
from .media_service import MediaService
from .tenant_service import TenantService
from .landlord_service import LandlordService
from .property_service import PropertyService
from .application_service import ApplicationService
from .verification_service import VerificationService
from .scoring_service import ScoringService
from .newsletter_service import NewsletterService

__all__ = [
    "AuthService",
    "MediaService",
    "TenantService",
    "LandlordService",
    "PropertyService",
    "ApplicationService",
    "VerificationService",
    "ScoringService",
    "NewsletterService",
]
