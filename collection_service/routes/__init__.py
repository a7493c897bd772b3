"""APIRouter registration for the collection service."""

from __future__ import annotations

from fastapi import APIRouter

from collection_service.routes.health import router as health_router
from collection_service.routes.items import router as items_router
from collection_service.routes.selection import router as selection_router
from collection_service.routes.state import router as state_router

api_router = APIRouter()
api_router.include_router(health_router, tags=["Health"])
api_router.include_router(items_router, tags=["Items"])
api_router.include_router(state_router, tags=["Order"])
api_router.include_router(selection_router, tags=["Selection"])

__all__ = ["api_router"]
