"""Landlord access to application documents and notes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response

from src.application.services import ApplicationService
from src.core.dependencies import AuthenticatedUser, get_application_service
from src.presentation.schemas import (
    DocumentLinkSchema,
    DocumentListSchema,
    ErrorResponseSchema,
    NoteCreateSchema,
    NoteListSchema,
    NoteSchema,
)

landlord_applications_router = APIRouter(
    prefix="/landlord/applications",
    responses={
        401: {"model": ErrorResponseSchema, "description": "Authentication required"},
        403: {"model": ErrorResponseSchema, "description": "Application is on another landlord's property"},
        404: {"model": ErrorResponseSchema, "description": "Application or document not found"},
    },
)


@landlord_applications_router.get(
    "/{application_id}/documents",
    response_model=DocumentListSchema,
    summary="List Application Documents",
    description="Signed, time-limited URLs for each uploaded document.",
)
async def list_documents(
    application_id: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> DocumentListSchema:
    links = await application_service.list_documents(user.supabase_id, application_id)
    return DocumentListSchema(documents=[DocumentLinkSchema.model_validate(link) for link in links])


@landlord_applications_router.get(
    "/{application_id}/documents/{document_type}",
    summary="Download Application Document",
    description="Stream one document. `view=true` displays it inline instead of downloading.",
    response_class=Response,
    responses={
        200: {"description": "The document content"},
        400: {"model": ErrorResponseSchema, "description": "Unknown document type"},
    },
)
async def get_document(
    application_id: str,
    document_type: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
    view: Annotated[bool, Query(description="Display inline")] = False,
) -> Response:
    document = await application_service.get_document(user.supabase_id, application_id, document_type)
    disposition = "inline" if view else "attachment"
    return Response(
        content=document.content,
        media_type=document.content_type,
        headers={"Content-Disposition": f'{disposition}; filename="{document.filename}"'},
    )


@landlord_applications_router.post(
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
    note = await application_service.add_landlord_note(user.supabase_id, application_id, request.content)
    return NoteSchema.model_validate(note)


@landlord_applications_router.get(
    "/{application_id}/notes",
    response_model=NoteListSchema,
    summary="List Notes",
)
async def list_notes(
    application_id: str,
    user: AuthenticatedUser,
    application_service: Annotated[ApplicationService, Depends(get_application_service)],
) -> NoteListSchema:
    notes = await application_service.list_landlord_notes(user.supabase_id, application_id)
    return NoteListSchema(notes=[NoteSchema.model_validate(n) for n in notes])
