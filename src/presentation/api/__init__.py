"""HTTP API. Every route is served under /api."""

from fastapi import APIRouter

from .routes.router import router

api_router = APIRouter(prefix="/api")
api_router.include_router(router)

__all__ = ["api_router"]
