"""Database infrastructure."""

from .connection import get_db_session, DatabaseSessionManager, db_manager
from .models import (
    Base,
    TenantModel,
    LandlordModel,
    PropertyModel,
    ApplicationModel,
    ApplicationNoteModel,
    FavoriteModel,
    NewsletterSubscriberModel,
)

__all__ = [
    "get_db_session",
    "DatabaseSessionManager",
    "db_manager",
    "Base",
    "TenantModel",
    "LandlordModel",
    "PropertyModel",
    "ApplicationModel",
    "ApplicationNoteModel",
    "FavoriteModel",
    "NewsletterSubscriberModel",
]
