"""FastAPI dependencies shared by the collection routers."""

from __future__ import annotations

from fastapi import Request

from collection_service.logic.order_store import OrderStore


def get_order_store(request: Request) -> OrderStore:
    """Return the order store owned by the running application."""
    return request.app.state.order_store


__all__ = ["get_order_store"]
