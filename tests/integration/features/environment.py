"""Behave environment hooks for integration scenarios.

Loads environment variables from a local .env (if present). When
`TEST_BASE_URL` is set the scenarios run against that live server through
httpx; otherwise they run in-process against a fresh application through
FastAPI's TestClient over a small universe. Every scenario starts from a
reset state.
"""

from __future__ import annotations

import os
from typing import Any

import httpx
from dotenv import load_dotenv
from fastapi.testclient import TestClient

from collection_service.config import AppConfig, CollectionConfig
from collection_service.main import create_app

IN_PROCESS_TOTAL_ITEMS = 20000
IN_PROCESS_SEED = 17


def before_all(context: Any) -> None:  # pragma: no cover - executed by Behave
    # Default .env first, then integration-specific defaults; explicit env wins
    load_dotenv(override=False)
    load_dotenv(dotenv_path="tests/integration/.env.test", override=False)

    base_url = os.environ.get("TEST_BASE_URL", "").strip().rstrip("/")
    if base_url:
        client = httpx.Client(base_url=base_url, timeout=30.0)
        try:
            client.get("/health")
        except httpx.HTTPError as exc:
            raise AssertionError(f"API not reachable at TEST_BASE_URL={base_url}: {exc}")
        context.client = client
        context.total_items = int(client.get("/health").json()["totalItems"])
        return

    print("[env] TEST_BASE_URL not set; running scenarios in-process")
    cfg = AppConfig(collection=CollectionConfig(total_items=IN_PROCESS_TOTAL_ITEMS, seed=IN_PROCESS_SEED))
    context.client = TestClient(create_app(cfg))
    context.total_items = IN_PROCESS_TOTAL_ITEMS


def before_scenario(context: Any, scenario: Any) -> None:  # pragma: no cover - executed by Behave
    resp = context.client.post("/reset")
    assert resp.status_code == 200, f"reset failed: {resp.status_code} {resp.text}"
    context.response = None


def after_all(context: Any) -> None:  # pragma: no cover - executed by Behave
    client = getattr(context, "client", None)
    if client is not None:
        client.close()
