"""Rental application entities."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional
from uuid import uuid4

from .property import Property


class ApplicationStatus(str, Enum):
    """Pending is the only non-terminal state."""

    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"


class CreatorType(str, Enum):
    TENANT = "Tenant"
    LANDLORD = "Landlord"


class DocumentType(str, Enum):
    ID = "id"
    BANK_STATEMENT = "bank_statement"
    FORM_410 = "form410"


REQUIRED_DOCUMENTS = [doc.value for doc in DocumentType]


@dataclass
class Application:
    """
    A tenant's application to lease a property.

    ``landlord_id`` is copied from the property when the application is
    created and is not re-derived if the property later changes hands.
    """

    tenant_id: str
    property_id: str
    landlord_id: str
    status: ApplicationStatus = ApplicationStatus.PENDING
    documents: Dict[str, str] = field(default_factory=dict)
    has_id: bool = False
    has_bank_statement: bool = False
    has_form_410: bool = False
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.utcnow)
    updated_at: datetime = field(default_factory=datetime.utcnow)

    @property
    def is_pending(self) -> bool:
        return self.status == ApplicationStatus.PENDING

    def set_documents(self, documents: Dict[str, str]) -> None:
        """Replace document links and keep the presence flags in sync."""
        self.documents = {k: v for k, v in documents.items() if v}
        self.has_id = bool(self.documents.get(DocumentType.ID.value))
        self.has_bank_statement = bool(self.documents.get(DocumentType.BANK_STATEMENT.value))
        self.has_form_410 = bool(self.documents.get(DocumentType.FORM_410.value))


@dataclass
class ApplicationNote:
    """Free-text annotation on an application. Notes are never edited."""

    application_id: str
    content: str
    creator_type: CreatorType
    creator_id: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.utcnow)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "application_id": self.application_id,
            "content": self.content,
            "creator_type": self.creator_type.value,
            "creator_id": self.creator_id,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class ApplicationView:
    """An application joined with the property it targets."""

    application: Application
    property: Optional[Property] = None

