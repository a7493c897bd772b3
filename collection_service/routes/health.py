"""Liveness routes."""

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, Depends

from collection_service.logic.order_store import OrderStore
from collection_service.models.collection import HealthResponse
from collection_service.routes.deps import get_order_store

router = APIRouter()


@router.get("/", summary="Greeting")
def root() -> Dict[str, str]:
    return {"message": "Hello World!"}


@router.get("/health", summary="Service health", response_model=HealthResponse)
def health(store: OrderStore = Depends(get_order_store)) -> HealthResponse:
    return HealthResponse(totalItems=store.total_items, seed=store.items.seed)


__all__ = ["router", "root", "health"]
