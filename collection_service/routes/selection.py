"""Selection set route."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends

from collection_service.logic.errors import SelectionValidationError
from collection_service.logic.order_store import OrderStore
from collection_service.models.collection import ProblemOut, SelectionResponse
from collection_service.routes.deps import get_order_store

router = APIRouter()


@router.post(
    "/selected",
    summary="Replace the selection set",
    response_model=SelectionResponse,
    responses={400: {"model": ProblemOut}},
)
def update_selection(
    payload: Any = Body(None),
    store: OrderStore = Depends(get_order_store),
) -> SelectionResponse:
    """Keep the ids in ``selectedIds`` that resolve to universe members.

    Non-numeric and out-of-range entries are dropped rather than rejected.
    """
    if not isinstance(payload, dict):
        raise SelectionValidationError("request body must be a JSON object")
    result = store.set_selection(payload.get("selectedIds"))
    return SelectionResponse.from_result(result)


__all__ = ["router", "update_selection"]
