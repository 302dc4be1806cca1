"""Application service - the rental application workflow."""

import mimetypes
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional

import structlog

from src.application.dto import UploadedFile
from src.core.config import settings
from src.core.metrics import record_application_event
from src.domain.entities import (
    Application,
    ApplicationNote,
    ApplicationStatus,
    ApplicationView,
    CreatorType,
    DocumentType,
    Property,
    REQUIRED_DOCUMENTS,
)
from src.domain.exceptions import (
    ApplicationNotFoundException,
    ApplicationOwnershipException,
    AuthorizationException,
    DocumentNotFoundException,
    DuplicateApplicationException,
    InvalidApplicationStateException,
    PropertyLeasedException,
    PropertyNotFoundException,
    TenantNotFoundException,
    TenantNotVerifiedException,
    ValidationException,
)
from src.domain.interfaces import (
    ApplicationRepository,
    PropertyRepository,
    TenantRepository,
)

from .media_service import (
    APPLICATION_DOCUMENTS_BUCKET,
    DOCUMENT_MAX_BYTES,
    DOCUMENT_TYPES,
    MediaService,
    check_file,
    extension_for,
    timestamp,
)

logger = structlog.get_logger(__name__)

DOCUMENT_NAMES = {
    DocumentType.ID.value: "Government ID",
    DocumentType.BANK_STATEMENT.value: "Bank Statement",
    DocumentType.FORM_410.value: "Form 410",
}

DECISION_STATUSES = (ApplicationStatus.APPROVED, ApplicationStatus.REJECTED)


@dataclass(frozen=True)
class DocumentLink:
    type: str
    name: str
    url: str


@dataclass(frozen=True)
class DocumentFile:
    filename: str
    content_type: str
    content: bytes


def month_start(now: Optional[datetime] = None) -> datetime:
    """Midnight on the first day of the current calendar month (UTC)."""
    now = now or datetime.utcnow()
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


class ApplicationService:
    """
    Application service for the rental application workflow.

    Status flow:
        Pending -> Approved (also leases the property)
        Pending -> Rejected
    Approved and Rejected are terminal. Tenants may revoke (delete) an
    application only while it is Pending.
    """

    def __init__(
        self,
        application_repository: ApplicationRepository,
        tenant_repository: TenantRepository,
        property_repository: PropertyRepository,
        media_service: MediaService,
    ):
        self._applications = application_repository
        self._tenants = tenant_repository
        self._properties = property_repository
        self._media = media_service

    # =========================================================================
    # Tenant side
    # =========================================================================

    async def upload_documents(
        self,
        tenant_id: str,
        files: Dict[str, Optional[UploadedFile]],
        require_all: bool = True,
    ) -> Dict[str, str]:
        """
        Store application documents and return their public URLs by type.

        Raises:
            ValidationException: If a required document is missing or a
                file breaks the type or size rules
        """
        if require_all:
            missing = [doc for doc in REQUIRED_DOCUMENTS if files.get(doc) is None]
            if missing:
                raise ValidationException(
                    f"Missing required documents: {', '.join(missing)}",
                    missing_fields=missing,
                )

        provided = {doc: f for doc, f in files.items() if f is not None and doc in REQUIRED_DOCUMENTS}
        for doc_type, file in provided.items():
            check_file(file, DOCUMENT_TYPES, DOCUMENT_MAX_BYTES, label=DOCUMENT_NAMES[doc_type])

        stamp = timestamp()
        urls = {}
        for doc_type, file in provided.items():
            path = f"{tenant_id}/{doc_type}-{stamp}.{extension_for(file)}"
            urls[doc_type] = await self._media.store(APPLICATION_DOCUMENTS_BUCKET, path, file)

        logger.info("application_documents_uploaded", tenant_id=tenant_id, documents=sorted(urls))
        return urls

    async def apply(
        self,
        tenant_id: str,
        property_id: str,
        documents: Dict[str, str],
    ) -> Application:
        """
        Submit an application to a property.

        Raises:
            ValidationException: If a required document link is missing
            TenantNotFoundException: If the tenant does not exist
            TenantNotVerifiedException: If the tenant is not verified
            PropertyNotFoundException: If the property does not exist
            PropertyLeasedException: If the property is already leased
            DuplicateApplicationException: If the tenant applied to this
                property earlier in the calendar month
        """
        missing = [doc for doc in REQUIRED_DOCUMENTS if not documents.get(doc)]
        if missing:
            raise ValidationException(
                f"Missing required documents: {', '.join(missing)}",
                missing_fields=missing,
            )

        log = logger.bind(tenant_id=tenant_id, property_id=property_id)

        tenant = await self._tenants.get(tenant_id)
        if tenant is None:
            raise TenantNotFoundException(tenant_id)
        if not tenant.verified:
            raise TenantNotVerifiedException()

        property = await self._properties.get(property_id)
        if property is None:
            raise PropertyNotFoundException(property_id)
        if property.is_leased:
            raise PropertyLeasedException(property_id)

        # Application-level check; concurrent submissions can still race.
        if await self._applications.find_since(tenant_id, property_id, month_start()):
            raise DuplicateApplicationException(property_id)

        application = Application(
            tenant_id=tenant_id,
            property_id=property_id,
            landlord_id=property.landlord_id,
        )
        application.set_documents({doc: documents[doc] for doc in REQUIRED_DOCUMENTS})

        await self._applications.add(application)
        await self._properties.adjust_applicants(property_id, 1)

        record_application_event("submitted")
        log.info("application_submitted", application_id=application.id)
        return application

    async def find_current(self, tenant_id: str, property_id: str) -> Optional[Application]:
        """The tenant's application to a property this calendar month, if any."""
        return await self._applications.find_since(tenant_id, property_id, month_start())

    async def update_documents(
        self,
        tenant_id: str,
        application_id: str,
        files: Dict[str, Optional[UploadedFile]],
    ) -> Application:
        application = await self._owned_application(tenant_id, application_id)
        if not application.is_pending:
            raise InvalidApplicationStateException(
                "Documents can only be updated on pending applications"
            )

        urls = await self.upload_documents(tenant_id, files, require_all=False)
        if not urls:
            raise ValidationException("No documents uploaded")

        replaced = [application.documents.get(doc) for doc in urls]
        application.set_documents({**application.documents, **urls})
        await self._applications.save(application)
        await self._media.delete_urls(APPLICATION_DOCUMENTS_BUCKET, replaced)

        logger.info("application_documents_updated", application_id=application_id, documents=sorted(urls))
        return application

    async def list_for_tenant(
        self,
        tenant_id: str,
        status: Optional[str] = None,
    ) -> List[ApplicationView]:
        parsed = self._parse_status(status) if status is not None else None
        return await self._applications.list_by_tenant(tenant_id, parsed)

    async def get_for_tenant(self, tenant_id: str, application_id: str) -> ApplicationView:
        application = await self._owned_application(tenant_id, application_id)
        property = await self._properties.get(application.property_id)
        return ApplicationView(application=application, property=property)

    async def revoke(self, tenant_id: str, application_id: str) -> None:
        """
        Delete a pending application.

        Ownership is checked before status, so a foreign application is
        always reported as an ownership error whatever its status.
        """
        application = await self._owned_application(tenant_id, application_id)
        if not application.is_pending:
            raise InvalidApplicationStateException("Only pending applications can be revoked")

        await self._applications.delete_many([application.id])
        await self._properties.adjust_applicants(application.property_id, -1)

        record_application_event("revoked")
        logger.info("application_revoked", tenant_id=tenant_id, application_id=application_id)

    async def bulk_revoke(self, tenant_id: str, application_ids: List[str]) -> int:
        """
        Delete several pending applications, all or nothing.

        Raises:
            ValidationException: If no ids were given
            ApplicationOwnershipException: If any id is unknown or belongs
                to another tenant
            InvalidApplicationStateException: If any application is not pending
        """
        ids = list(dict.fromkeys(application_ids))
        if not ids:
            raise ValidationException("application_ids must not be empty", missing_fields=["application_ids"])

        applications = await self._applications.get_many(ids)
        if len(applications) != len(ids) or any(a.tenant_id != tenant_id for a in applications):
            raise ApplicationOwnershipException(
                "One or more applications do not exist or do not belong to this tenant"
            )
        if any(not a.is_pending for a in applications):
            raise InvalidApplicationStateException("Only pending applications can be revoked")

        deleted = await self._applications.delete_many(ids)
        for application in applications:
            await self._properties.adjust_applicants(application.property_id, -1)
            record_application_event("revoked")

        logger.info("applications_bulk_revoked", tenant_id=tenant_id, count=deleted)
        return deleted

    async def add_tenant_note(self, tenant_id: str, application_id: str, content: str) -> ApplicationNote:
        await self._owned_application(tenant_id, application_id)
        return await self._add_note(application_id, content, CreatorType.TENANT, tenant_id)

    async def list_tenant_notes(self, tenant_id: str, application_id: str) -> List[ApplicationNote]:
        await self._owned_application(tenant_id, application_id)
        return await self._applications.list_notes(application_id)

    # =========================================================================
    # Landlord side
    # =========================================================================

    async def list_for_property(
        self,
        landlord_id: str,
        property_id: str,
        status: Optional[str] = None,
    ) -> List[Application]:
        await self._owned_property(landlord_id, property_id)
        parsed = self._parse_status(status) if status else None
        return await self._applications.list_by_property(property_id, parsed)

    async def update_status(
        self,
        landlord_id: str,
        property_id: str,
        application_id: str,
        status: str,
    ) -> Application:
        """
        Approve or reject a pending application.

        Approval also leases the property. Both changes are written in
        the same transaction.

        Raises:
            ValidationException: If status is not Approved or Rejected
            PropertyNotFoundException: If the landlord does not own the property
            ApplicationNotFoundException: If the application is not on the property
            InvalidApplicationStateException: If the application is not pending
        """
        new_status = self._parse_status(status)
        if new_status not in DECISION_STATUSES:
            raise ValidationException("Status must be either Approved or Rejected")

        await self._owned_property(landlord_id, property_id)

        application = await self._applications.get(application_id)
        if application is None or application.property_id != property_id:
            raise ApplicationNotFoundException(application_id)
        if not application.is_pending:
            raise InvalidApplicationStateException(
                f"Application has already been {application.status.value.lower()}"
            )

        approved = new_status == ApplicationStatus.APPROVED
        await self._applications.set_status(application, new_status, lease_property=approved)

        record_application_event(new_status.value.lower())
        logger.info(
            "application_status_updated",
            application_id=application_id,
            property_id=property_id,
            status=new_status.value,
            property_leased=approved,
        )
        return application

    async def list_documents(self, landlord_id: str, application_id: str) -> List[DocumentLink]:
        application = await self._landlord_application(landlord_id, application_id)
        links = []
        for doc_type in REQUIRED_DOCUMENTS:
            url = application.documents.get(doc_type)
            if not url:
                continue
            signed = await self._media.signed_url(
                APPLICATION_DOCUMENTS_BUCKET,
                url,
                settings.signed_url_ttl_seconds,
            )
            links.append(DocumentLink(type=doc_type, name=DOCUMENT_NAMES[doc_type], url=signed))
        return links

    async def get_document(
        self,
        landlord_id: str,
        application_id: str,
        document_type: str,
    ) -> DocumentFile:
        if document_type not in REQUIRED_DOCUMENTS:
            raise ValidationException(
                f"document_type must be one of: {', '.join(REQUIRED_DOCUMENTS)}"
            )

        application = await self._landlord_application(landlord_id, application_id)
        url = application.documents.get(document_type)
        if not url:
            raise DocumentNotFoundException(document_type)

        content = await self._media.download(APPLICATION_DOCUMENTS_BUCKET, url)
        extension = url.rsplit(".", 1)[-1].split("?", 1)[0] if "." in url else "bin"
        content_type = mimetypes.guess_type(f"file.{extension}")[0] or "application/octet-stream"
        return DocumentFile(
            filename=f"{document_type}.{extension}",
            content_type=content_type,
            content=content,
        )

    async def add_landlord_note(self, landlord_id: str, application_id: str, content: str) -> ApplicationNote:
        await self._landlord_application(landlord_id, application_id)
        return await self._add_note(application_id, content, CreatorType.LANDLORD, landlord_id)

    async def list_landlord_notes(self, landlord_id: str, application_id: str) -> List[ApplicationNote]:
        await self._landlord_application(landlord_id, application_id)
        return await self._applications.list_notes(application_id)

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _add_note(
        self,
        application_id: str,
        content: str,
        creator_type: CreatorType,
        creator_id: str,
    ) -> ApplicationNote:
        text = (content or "").strip().replace("<", "").replace(">", "")
        if not text:
            raise ValidationException("Note content is required", missing_fields=["content"])

        note = ApplicationNote(
            application_id=application_id,
            content=text,
            creator_type=creator_type,
            creator_id=creator_id,
        )
        await self._applications.add_note(note)
        logger.info("application_note_added", application_id=application_id, creator_type=creator_type.value)
        return note

    async def _owned_application(self, tenant_id: str, application_id: str) -> Application:
        application = await self._applications.get(application_id)
        if application is None:
            raise ApplicationNotFoundException(application_id)
        if application.tenant_id != tenant_id:
            raise ApplicationOwnershipException()
        return application

    async def _owned_property(self, landlord_id: str, property_id: str) -> Property:
        property = await self._properties.get(property_id)
        if property is None or property.landlord_id != landlord_id:
            raise PropertyNotFoundException(property_id)
        return property

    async def _landlord_application(self, landlord_id: str, application_id: str) -> Application:
        application = await self._applications.get(application_id)
        if application is None:
            raise ApplicationNotFoundException(application_id)
        property = await self._properties.get(application.property_id)
        if property is None or property.landlord_id != landlord_id:
            raise AuthorizationException("You do not have access to this application")
        return application

    @staticmethod
    def _parse_status(status: str) -> ApplicationStatus:
        try:
            return ApplicationStatus(status)
        except ValueError:
            allowed = ", ".join(s.value for s in ApplicationStatus)
            raise ValidationException(f"Invalid status. Must be one of: {allowed}")
