"""Rental application schemas."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from src.domain.entities import ApplicationStatus, ApplicationView, CreatorType

from .property import PropertySummarySchema


class ApplicationCreateSchema(BaseModel):
    """Schema for POST /tenant/applications."""

    model_config = ConfigDict(
        json_schema_extra={
            "examples": [
                {
                    "property_id": "0b6c1f8e-6f1d-4a34-9d53-1c2f1f6f2c11",
                    "documents": {
                        "id": "https://storage.example/application-documents/t1/id-1.pdf",
                        "bank_statement": "https://storage.example/application-documents/t1/bank_statement-1.pdf",
                        "form410": "https://storage.example/application-documents/t1/form410-1.pdf",
                    },
                }
            ]
        }
    )
    property_id: str = Field(..., min_length=1)
    documents: Dict[str, str] = Field(
        default_factory=dict,
        description="Document URLs keyed by id, bank_statement and form410",
    )


class ApplicationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    tenant_id: str
    property_id: str
    landlord_id: str
    status: ApplicationStatus
    documents: Dict[str, str]
    has_id: bool
    has_bank_statement: bool
    has_form_410: bool
    created_at: datetime
    updated_at: datetime


class ApplicationWithPropertySchema(ApplicationSchema):
    property: Optional[PropertySummarySchema] = None

    @classmethod
    def from_view(cls, view: ApplicationView) -> "ApplicationWithPropertySchema":
        return cls.model_validate(
            {
                **ApplicationSchema.model_validate(view.application).model_dump(),
                "property": (
                    PropertySummarySchema.model_validate(view.property)
                    if view.property is not None
                    else None
                ),
            }
        )


class ApplicationCreatedSchema(BaseModel):
    message: str = "Application submitted successfully"
    application: ApplicationSchema


class ApplicationListSchema(BaseModel):
    count: int
    applications: List[ApplicationWithPropertySchema]


class PropertyApplicationListSchema(BaseModel):
    count: int
    applications: List[ApplicationSchema]


class ApplicationCheckSchema(BaseModel):
    exists: bool
    application: Optional[ApplicationSchema] = None


class DocumentUploadResponseSchema(BaseModel):
    documents: Dict[str, str] = Field(..., description="Public URLs keyed by document type")


class BulkRevokeRequestSchema(BaseModel):
    application_ids: List[str]


class RevokeResponseSchema(BaseModel):
    message: str
    revoked_count: int


class StatusUpdateRequestSchema(BaseModel):
    status: str = Field(..., description="Approved or Rejected", examples=["Approved"])


class StatusUpdateResponseSchema(BaseModel):
    message: str
    application: ApplicationSchema


class NoteCreateSchema(BaseModel):
    content: str = Field(..., max_length=5000)


class NoteSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    application_id: str
    content: str
    creator_type: CreatorType
    creator_id: str
    created_at: datetime


class NoteListSchema(BaseModel):
    notes: List[NoteSchema]


class DocumentLinkSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    type: str
    name: str
    url: str = Field(..., description="Signed URL, valid for a limited time")


class DocumentListSchema(BaseModel):
    documents: List[DocumentLinkSchema]
