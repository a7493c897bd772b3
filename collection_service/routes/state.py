"""Mutation routes for the working order: anchored reorder and reset."""

from __future__ import annotations

from typing import Any
import logging

from fastapi import APIRouter, Body, Depends

from collection_service.logic.errors import ReorderValidationError
from collection_service.logic.order_store import OrderStore
from collection_service.models.collection import ProblemOut, ReorderResponse, ResetResponse
from collection_service.routes.deps import get_order_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.patch(
    "/state",
    summary="Reorder a contiguous range of the current order",
    response_model=ReorderResponse,
    responses={400: {"model": ProblemOut}, 409: {"model": ProblemOut}},
)
def update_state(
    payload: Any = Body(None),
    store: OrderStore = Depends(get_order_store),
) -> ReorderResponse:
    """Replace ``oldPageOrder`` with ``newPageOrder`` where it first occurs.

    The client sends its last-known view of a contiguous range; when that
    range no longer appears verbatim the request is rejected with 409 and
    the current state so the client can resync.
    """
    if not isinstance(payload, dict):
        raise ReorderValidationError("request body must be a JSON object")
    applied = store.apply_reorder(payload.get("oldPageOrder"), payload.get("newPageOrder"))
    return ReorderResponse.from_range(applied)


@router.post("/reset", summary="Restore the initial order", response_model=ResetResponse)
def reset_state(store: OrderStore = Depends(get_order_store)) -> ResetResponse:
    store.reset()
    return ResetResponse()


__all__ = ["router", "update_state", "reset_state"]
