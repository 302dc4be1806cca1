"""Tenant-side rental application endpoints."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile

from src.application.services import ApplicationService
from src.core.dependencies import AuthenticatedUser, get_application_service
from src.domain.entities import DocumentType
from src.presentation.schemas import (
    ApplicationCheckSchema,
    ApplicationCreateSchema,
    ApplicationCreatedSchema,
    ApplicationListSchema,
    ApplicationSchema,
    ApplicationWithPropertySchema,
    BulkRevokeRequestSchema,
    DocumentUploadResponseSchema,
    ErrorResponseSchema,
    NoteCreateSchema,
    NoteListSchema,
    NoteSchema,
    RevokeResponseSchema,
)

from .uploads import read_upload

tenant_applications_router = APIRouter(
    prefix="/tenant/applications",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request or application state"},
        401: {"model": ErrorResponseSchema, "description": "Authentication required"},
        403: {"model": ErrorResponseSchema, "description": "Application belongs to another tenant"},
        404: {"model": ErrorResponseSchema, "description": "Application or property not found"},
    },
)


async def _document_files(
    id_file: Optional[UploadFile],
    bank_statement_file: Optional[UploadFile],
    form410_file: Optional[UploadFile],
) -> dict:
    return {
        DocumentType.ID.value: await read_upload(id_file),
        DocumentType.BANK_STATEMENT.value: await read_upload(bank_statement_file),
        DocumentType.FORM_410.value: await read_upload(form410_file),
    }


@tenant_applications_router.post(
    "/documents",
    response_model=DocumentUploadResponseSchema,
    summary="Upload Application Documents",
    description="""Upload the government ID, a bank statement and Form 410.

    All three files are required. Images, PDF, Word, Excel and plain text
    are accepted, each at most 10 MB. The returned URLs are passed to the
    application submission.""",
)
async def upload_documents(
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
    id_file: Optional[UploadFile] = File(None),
    bank_statement_file: Optional[UploadFile] = File(None),
    form410_file: Optional[UploadFile] = File(None),
) -> DocumentUploadResponseSchema:
    files = await _document_files(id_file, bank_statement_file, form410_file)
    urls = await application_service.upload_documents(user.supabase_id, files)
    return DocumentUploadResponseSchema(documents=urls)


@tenant_applications_router.post(
    "",
    response_model=ApplicationCreatedSchema,
    status_code=201,
    summary="Submit Application",
    description="""Apply to a property.

    The tenant must be verified, the property must not be leased, and
    the tenant may apply to a given property at most once per calendar
    month.""",
)
async def submit_application(
    request: ApplicationCreateSchema,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> ApplicationCreatedSchema:
    application = await application_service.apply(
        user.supabase_id,
        request.property_id,
        request.documents,
    )
    return ApplicationCreatedSchema(application=ApplicationSchema.model_validate(application))


@tenant_applications_router.get(
    "",
    response_model=ApplicationListSchema,
    summary="List My Applications",
)
async def list_applications(
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> ApplicationListSchema:
    views = await application_service.list_for_tenant(user.supabase_id)
    return ApplicationListSchema(
        count=len(views),
        applications=[ApplicationWithPropertySchema.from_view(v) for v in views],
    )


@tenant_applications_router.get(
    "/status/{status}",
    response_model=ApplicationListSchema,
    summary="List My Applications By Status",
    description="Status must be Pending, Approved or Rejected.",
)
async def list_applications_by_status(
    status: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> ApplicationListSchema:
    views = await application_service.list_for_tenant(user.supabase_id, status)
    return ApplicationListSchema(
        count=len(views),
        applications=[ApplicationWithPropertySchema.from_view(v) for v in views],
    )


@tenant_applications_router.get(
    "/check/{property_id}",
    response_model=ApplicationCheckSchema,
    summary="Check Existing Application",
    description="Whether the tenant already applied to the property this calendar month.",
)
async def check_application(
    property_id: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> ApplicationCheckSchema:
    application = await application_service.find_current(user.supabase_id, property_id)
    if application is None:
        return ApplicationCheckSchema(exists=False)
    return ApplicationCheckSchema(
        exists=True,
        application=ApplicationSchema.model_validate(application),
    )


@tenant_applications_router.post(
    "/bulk-revoke",
    response_model=RevokeResponseSchema,
    summary="Revoke Several Applications",
    description="""Revoke pending applications in one request.

    Every id must exist and belong to the caller, otherwise nothing is
    revoked.""",
)
async def bulk_revoke(
    request: BulkRevokeRequestSchema,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> RevokeResponseSchema:
    count = await application_service.bulk_revoke(user.supabase_id, request.application_ids)
    return RevokeResponseSchema(
        message=f"Successfully revoked {count} applications",
        revoked_count=count,
    )


@tenant_applications_router.get(
    "/{application_id}",
    response_model=ApplicationWithPropertySchema,
    summary="Get Application",
)
async def get_application(
    application_id: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> ApplicationWithPropertySchema:
    view = await application_service.get_for_tenant(user.supabase_id, application_id)
    return ApplicationWithPropertySchema.from_view(view)


@tenant_applications_router.put(
    "/{application_id}/documents",
    response_model=ApplicationSchema,
    summary="Replace Application Documents",
    description="Only pending applications can be updated. Unsent documents are kept.",
)
async def update_documents(
    application_id: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
    id_file: Optional[UploadFile] = File(None),
    bank_statement_file: Optional[UploadFile] = File(None),
    form410_file: Optional[UploadFile] = File(None),
) -> ApplicationSchema:
    files = await _document_files(id_file, bank_statement_file, form410_file)
    application = await application_service.update_documents(user.supabase_id, application_id, files)
    return ApplicationSchema.model_validate(application)


@tenant_applications_router.delete(
    "/{application_id}",
    response_model=RevokeResponseSchema,
    summary="Revoke Application",
    description="Only pending applications can be revoked.",
)
async def revoke_application(
    application_id: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> RevokeResponseSchema:
    await application_service.revoke(user.supabase_id, application_id)
    return RevokeResponseSchema(message="Application revoked successfully", revoked_count=1)


@tenant_applications_router.post(
    "/{application_id}/notes",
    response_model=NoteSchema,
    status_code=201,
    summary="Add Note",
)
async def add_note(
    application_id: str,
    request: NoteCreateSchema,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> NoteSchema:
    note = await application_service.add_tenant_note(user.supabase_id, application_id, request.content)
    return NoteSchema.model_validate(note)


@tenant_applications_router.get(
    "/{application_id}/notes",
    response_model=NoteListSchema,
    summary="List Notes",
)
async def list_notes(
    application_id: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> NoteListSchema:
    notes = await application_service.list_tenant_notes(user.supabase_id, application_id)
    return NoteListSchema(notes=[NoteSchema.model_validate(n) for n in notes])
