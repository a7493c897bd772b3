"""FastAPI application package for the orderable collection service.

This package exposes a small FastAPI application factory. It wires only
cross-cutting middleware (request-id and CORS) and mounts the API routers.
Business logic lives in `collection_service/logic/` and route handlers in
`collection_service/routes/`.
"""

from __future__ import annotations

from collection_service.main import create_app

__all__ = ["create_app"]
