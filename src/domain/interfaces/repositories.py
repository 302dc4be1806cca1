"""Repository interfaces for data persistence."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from src.domain.entities import (
    Application,
    ApplicationNote,
    ApplicationStatus,
    ApplicationView,
    Favorite,
    Landlord,
    NewsletterSubscriber,
    Property,
    Tenant,
)


class TenantRepository(ABC):
    """
    Abstract repository for Tenant persistence.

    Tenants are keyed by the auth provider's user id.
    """

    @abstractmethod
    async def get(self, supabase_id: str) -> Optional[Tenant]:
        """
        Retrieve a tenant by auth provider id.

        Args:
            supabase_id: The auth provider's user id

        Returns:
            The tenant if found, None otherwise
        """
        ...

    @abstractmethod
    async def add(self, tenant: Tenant) -> Tenant:
        """Persist a new tenant."""
        ...

    @abstractmethod
    async def save(self, tenant: Tenant) -> Tenant:
        """
        Write every mutable field of an existing tenant.

        Args:
            tenant: The tenant with updated fields

        Returns:
            The saved tenant with ``updated_at`` refreshed
        """
        ...


class LandlordRepository(ABC):
    """Abstract repository for Landlord persistence."""

    @abstractmethod
    async def get(self, supabase_id: str) -> Optional[Landlord]:
        """Retrieve a landlord by auth provider id."""
        ...

    @abstractmethod
    async def add(self, landlord: Landlord) -> Landlord:
        """Persist a new landlord."""
        ...

    @abstractmethod
    async def save(self, landlord: Landlord) -> Landlord:
        """Write every mutable field of an existing landlord."""
        ...


class PropertyRepository(ABC):
    """Abstract repository for Property persistence."""

    @abstractmethod
    async def get(self, property_id: str) -> Optional[Property]:
        """Retrieve a property by id."""
        ...

    @abstractmethod
    async def list_all(self) -> List[Property]:
        """All properties, newest first."""
        ...

    @abstractmethod
    async def list_by_landlord(self, landlord_id: str) -> List[Property]:
        """Properties owned by a landlord, newest first."""
        ...

    @abstractmethod
    async def search(
        self,
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        location: Optional[str] = None,
        bedrooms: Optional[int] = None,
        property_type: Optional[str] = None,
    ) -> List[Property]:
        """
        Filter listings.

        Args:
            min_price: Lower bound on monthly rent (inclusive)
            max_price: Upper bound on monthly rent (inclusive)
            location: Case-insensitive substring of address or city
            bedrooms: Exact bedroom count
            property_type: Exact property type

        Returns:
            Matching properties, newest first
        """
        ...

    @abstractmethod
    async def add(self, property: Property) -> Property:
        """Persist a new property."""
        ...

    @abstractmethod
    async def save(self, property: Property) -> Property:
        """Write every mutable field of an existing property."""
        ...

    @abstractmethod
    async def delete(self, property_id: str) -> None:
        """Delete a property together with its applications and favorites."""
        ...

    @abstractmethod
    async def adjust_applicants(self, property_id: str, delta: int) -> None:
        """
        Change the applicant counter of a property.

        The counter never drops below zero.
        """
        ...


class ApplicationRepository(ABC):
    """
    Abstract repository for Application and ApplicationNote persistence.
    """

    @abstractmethod
    async def get(self, application_id: str) -> Optional[Application]:
        """Retrieve an application by id."""
        ...

    @abstractmethod
    async def get_many(self, application_ids: List[str]) -> List[Application]:
        """Retrieve the applications that exist among the given ids."""
        ...

    @abstractmethod
    async def add(self, application: Application) -> Application:
        """Persist a new application."""
        ...

    @abstractmethod
    async def save(self, application: Application) -> Application:
        """Write documents and flags of an existing application."""
        ...

    @abstractmethod
    async def delete_many(self, application_ids: List[str]) -> int:
        """
        Delete applications.

        Returns:
            Number of rows deleted
        """
        ...

    @abstractmethod
    async def find_since(
        self,
        tenant_id: str,
        property_id: str,
        since: datetime,
    ) -> Optional[Application]:
        """The tenant's application for a property created at or after ``since``."""
        ...

    @abstractmethod
    async def list_by_tenant(
        self,
        tenant_id: str,
        status: Optional[ApplicationStatus] = None,
    ) -> List[ApplicationView]:
        """A tenant's applications joined with their property, newest first."""
        ...

    @abstractmethod
    async def list_by_property(
        self,
        property_id: str,
        status: Optional[ApplicationStatus] = None,
    ) -> List[Application]:
        """Applications on a property, newest first."""
        ...

    @abstractmethod
    async def count_by_tenant(self, tenant_id: str, status: ApplicationStatus) -> int:
        """Number of a tenant's applications in a given status."""
        ...

    @abstractmethod
    async def set_status(
        self,
        application: Application,
        status: ApplicationStatus,
        lease_property: bool = False,
    ) -> Application:
        """
        Transition an application and optionally lease its property.

        Both writes belong to the same transaction: either the status
        change and the lease flag are persisted together or neither is.

        Args:
            application: The application to update
            status: The new status
            lease_property: Also set ``is_leased`` on the application's property

        Returns:
            The updated application
        """
        ...

    @abstractmethod
    async def add_note(self, note: ApplicationNote) -> ApplicationNote:
        """Append a note to an application."""
        ...

    @abstractmethod
    async def list_notes(self, application_id: str) -> List[ApplicationNote]:
        """Notes on an application, newest first."""
        ...


class FavoriteRepository(ABC):
    """Abstract repository for tenant favorites."""

    @abstractmethod
    async def get(self, tenant_id: str, property_id: str) -> Optional[Favorite]:
        ...

    @abstractmethod
    async def add(self, favorite: Favorite) -> Favorite:
        ...

    @abstractmethod
    async def remove(self, tenant_id: str, property_id: str) -> int:
        """Delete the pairing if present and return the number of rows removed."""
        ...

    @abstractmethod
    async def list_by_tenant(self, tenant_id: str) -> List[Favorite]:
        """Favorites with their property loaded, newest first."""
        ...


class NewsletterRepository(ABC):
    """Abstract repository for newsletter subscribers."""

    @abstractmethod
    async def get(self, subscriber_id: str) -> Optional[NewsletterSubscriber]:
        ...

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[NewsletterSubscriber]:
        ...

    @abstractmethod
    async def add(self, subscriber: NewsletterSubscriber) -> NewsletterSubscriber:
        ...

    @abstractmethod
    async def list_all(self) -> List[NewsletterSubscriber]:
        """All subscribers, newest first."""
        ...
