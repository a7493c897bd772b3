from __future__ import annotations

import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn

from collection_service.config import AppConfig, load_config
from collection_service.http.problem import (
    handle_collection_error,
    handle_http_exception,
    handle_request_validation_error,
    handle_unexpected_error,
)
from collection_service.http.request_id import RequestIdMiddleware
from collection_service.logging_setup import configure_logging
from collection_service.logic.errors import CollectionError
from collection_service.logic.order_store import OrderStore
from collection_service.middleware.cors import apply_cors
from collection_service.routes import api_router
from collection_service.routes.test_support import router as test_support_router

logger = logging.getLogger(__name__)


def build_order_store(config: AppConfig) -> OrderStore:
    """Create the process-lifetime store from the collection settings."""
    c = config.collection
    return OrderStore(
        total_items=c.total_items,
        page_size=c.page_size,
        seed=c.seed,
        conflict_snapshot_limit=c.conflict_snapshot_limit,
    )


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the FastAPI application.

    The order store is created here and attached to ``app.state`` so each
    application instance owns exactly one store; routes reach it through
    the ``get_order_store`` dependency.
    """
    cfg = config or load_config()
    # Configure global logging before app instantiation so all modules emit
    configure_logging(cfg.logging.level)
    app = FastAPI(title="Orderable Collection Service")
    app.state.config = cfg
    app.state.order_store = build_order_store(cfg)

    app.add_exception_handler(CollectionError, handle_collection_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(Exception, handle_unexpected_error)

    app.add_middleware(RequestIdMiddleware)
    apply_cors(app, origins=cfg.http.cors_origins)

    app.include_router(api_router)
    if cfg.http.enable_test_routes:
        # Test-support router exposes '/__test__/events'
        app.include_router(test_support_router)

    logger.info(
        "app.created total_items=%s page_size=%s seed=%s",
        cfg.collection.total_items,
        cfg.collection.page_size,
        app.state.order_store.items.seed,
    )
    return app


def run() -> None:
    """Console entry point: serve the app factory with uvicorn."""
    cfg = load_config()
    uvicorn.run(
        "collection_service.main:create_app",
        factory=True,
        host=cfg.http.host,
        port=cfg.http.port,
        log_level=cfg.logging.level.lower(),
    )


# Intentionally do not instantiate the app at import time to prevent side effects.
