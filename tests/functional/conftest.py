"""Functional test bootstrap.

Builds applications and stores over a small universe so each test gets a
fresh, deterministic state (fixed seed) without paying for the full
1,000,000-item identity order. Tests that need the production-sized
universe build their own store.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from collection_service.config import AppConfig, CollectionConfig, HttpConfig
from collection_service.logic import events
from collection_service.logic.order_store import OrderStore
from collection_service.main import create_app

SMALL_UNIVERSE = 200
TEST_SEED = 17


@pytest.fixture(autouse=True)
def clear_event_buffer() -> None:
    """Domain events are buffered module-wide; isolate them per test."""
    events.EVENT_BUFFER.clear()
    yield
    events.EVENT_BUFFER.clear()


@pytest.fixture
def small_config() -> AppConfig:
    return AppConfig(
        collection=CollectionConfig(
            total_items=SMALL_UNIVERSE,
            page_size=20,
            seed=TEST_SEED,
            conflict_snapshot_limit=50,
        ),
        http=HttpConfig(enable_test_routes=True),
    )


@pytest.fixture
def store() -> OrderStore:
    return OrderStore(total_items=SMALL_UNIVERSE, page_size=20, seed=TEST_SEED, conflict_snapshot_limit=50)


@pytest.fixture
def client(small_config: AppConfig) -> TestClient:
    with TestClient(create_app(small_config)) as c:
        yield c
