"""Newsletter subscription and guide download endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Response
from fastapi.responses import FileResponse

from src.application.services import NewsletterService
from src.core.dependencies import get_newsletter_service
from src.presentation.schemas import (
    ErrorResponseSchema,
    SubscribeRequestSchema,
    SubscribeResponseSchema,
    SubscriberListSchema,
    SubscriberResponseSchema,
    SubscriberSchema,
)

newsletter_router = APIRouter(
    prefix="/newsletter",
    responses={
        400: {"model": ErrorResponseSchema, "description": "Invalid request"},
        404: {"model": ErrorResponseSchema, "description": "Subscriber not found"},
    },
)


@newsletter_router.post(
    "/subscribe",
    response_model=SubscribeResponseSchema,
    response_model_exclude_none=True,
    status_code=201,
    summary="Subscribe",
    description="""Subscribe to the newsletter and get the guide download link.

    An email that is already subscribed returns 200 with `success: false`.""",
    responses={
        200: {"model": SubscribeResponseSchema, "description": "Already subscribed"},
    },
)
async def subscribe(
    request: SubscribeRequestSchema,
    response: Response,
    newsletter_service: Annotated[NewsletterService, Depends(get_newsletter_service)],
) -> SubscribeResponseSchema:
    result = await newsletter_service.subscribe(request.name, request.email)
    if not result.success:
        response.status_code = 200
    return SubscribeResponseSchema(
        success=result.success,
        message=result.message,
        download_url=result.download_url,
    )


@newsletter_router.get(
    "/download/{subscriber_id}",
    summary="Download Guide",
    response_class=FileResponse,
)
async def download_guide(
    subscriber_id: str,
    newsletter_service: Annotated[NewsletterService, Depends(get_newsletter_service)],
) -> FileResponse:
    path = await newsletter_service.guide_path(subscriber_id)
    return FileResponse(path, media_type="application/pdf", filename="RentCasaYa.pdf")


@newsletter_router.get(
    "/subscribers",
    response_model=SubscriberListSchema,
    summary="List Subscribers",
)
async def list_subscribers(
    newsletter_service: Annotated[NewsletterService, Depends(get_newsletter_service)],
) -> SubscriberListSchema:
    subscribers = await newsletter_service.list_subscribers()
    return SubscriberListSchema(
        count=len(subscribers),
        subscribers=[SubscriberSchema.model_validate(s) for s in subscribers],
    )


@newsletter_router.get(
    "/subscriber/{subscriber_id}",
    response_model=SubscriberResponseSchema,
    summary="Get Subscriber",
)
async def get_subscriber(
    subscriber_id: str,
    newsletter_service: Annotated[NewsletterService, Depends(get_newsletter_service)],
) -> SubscriberResponseSchema:
    subscriber = await newsletter_service.get_subscriber(subscriber_id)
    return SubscriberResponseSchema(subscriber=SubscriberSchema.model_validate(subscriber))


@newsletter_router.get("/health", summary="Newsletter Health")
async def newsletter_health() -> dict:
    return {"status": "ok"}
