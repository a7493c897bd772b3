"""Paged, searchable view of the working order."""

from __future__ import annotations

from typing import Optional
import logging

from fastapi import APIRouter, Depends, Query

from collection_service.logic.order_store import OrderStore, parse_page
from collection_service.models.collection import ItemsResponse
from collection_service.routes.deps import get_order_store

router = APIRouter()
logger = logging.getLogger(__name__)


@router.get(
    "/items",
    summary="List one page of the current order",
    response_model=ItemsResponse,
    response_model_exclude_none=True,
)
def list_items(
    page: Optional[str] = Query(None, description="1-based page number; invalid values mean 1"),
    search: Optional[str] = Query(None, description="Digit substring filter over item ids"),
    store: OrderStore = Depends(get_order_store),
) -> ItemsResponse:
    """Return a page of items plus the active search and current selection.

    Supplying ``search`` that differs from the active term restarts filtering
    from the full identity order; omitting it keeps the active term.
    """
    result = store.query(parse_page(page), search)
    logger.debug(
        "items.list page=%s search=%r total=%s", result.page, result.search, result.total
    )
    return ItemsResponse.from_result(result)


__all__ = ["router", "list_items"]
