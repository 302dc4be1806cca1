"""Repository implementations."""

from .tenant_repository import PostgresTenantRepository
from .landlord_repository import PostgresLandlordRepository
from .property_repository import PostgresPropertyRepository
from .application_repository import PostgresApplicationRepository
from .favorite_repository import PostgresFavoriteRepository
from .newsletter_repository import PostgresNewsletterRepository

__all__ = [
    "PostgresTenantRepository",
    "PostgresLandlordRepository",
    "PostgresPropertyRepository",
    "PostgresApplicationRepository",
    "PostgresFavoriteRepository",
    "PostgresNewsletterRepository",
]
