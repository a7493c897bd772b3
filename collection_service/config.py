"""Configuration utilities for the collection service.

This module loads application configuration with the following rules:
- Primary source: `collection_config.json` at the project root.
- Overrides: environment variables, then optional text files under `config/`.
- Validation: Pydantic models enforce value constraints.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from collection_service.logic.item_factory import SEED_MAX, SEED_MIN
from collection_service.logic.order_store import (
    DEFAULT_CONFLICT_SNAPSHOT_LIMIT,
    DEFAULT_PAGE_SIZE,
    DEFAULT_TOTAL_ITEMS,
)


CONFIG_DIR = Path("config")
ROOT_COLLECTION_CONFIG = Path("collection_config.json")
logger = logging.getLogger(__name__)

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}
_TRUTHY = {"1", "true", "yes", "on"}


def _read_config_file(rel_path: str) -> Optional[str]:
    path = CONFIG_DIR / rel_path
    try:
        if path.exists():
            return path.read_text(encoding="utf-8").strip()
    except (OSError, UnicodeDecodeError) as e:
        # Recoverable: log and ignore unreadable override
        logger.warning("Failed to read override %s: %s", path, e)
        return None
    return None


def _env(key: str, default: Optional[str] = None) -> Optional[str]:
    return os.environ.get(key, default)


class CollectionConfig(BaseModel):
    total_items: int = Field(default=DEFAULT_TOTAL_ITEMS, gt=0)
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, gt=0)
    seed: Optional[int] = None
    conflict_snapshot_limit: int = Field(default=DEFAULT_CONFLICT_SNAPSHOT_LIMIT, ge=0)

    @field_validator("seed")
    @classmethod
    def seed_must_be_in_range(cls, v: Optional[int]) -> Optional[int]:
        if v is not None and not SEED_MIN <= v <= SEED_MAX:
            raise ValueError(f"collection.seed must be within [{SEED_MIN}, {SEED_MAX}]")
        return v


class HttpConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = Field(default=8000, gt=0, lt=65536)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])
    enable_test_routes: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"

    @field_validator("level")
    @classmethod
    def level_must_be_known(cls, v: str) -> str:
        level = str(v).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"logging.level must be one of {sorted(_LOG_LEVELS)}")
        return level


class AppConfig(BaseModel):
    collection: CollectionConfig = Field(default_factory=CollectionConfig)
    http: HttpConfig = Field(default_factory=HttpConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def _read_json_file(path: Path) -> dict:
    try:
        if path.exists():
            return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        logger.error("Failed to read JSON config %s: %s", path, e)
    return {}


def _split_origins(text: str) -> List[str]:
    return [o.strip() for o in str(text).split(",") if o.strip()]


def _parse_flag(text: Optional[str]) -> bool:
    return str(text or "").strip().lower() in _TRUTHY


def load_config() -> AppConfig:
    """Load configuration with validation.

    Precedence (highest first):
    1) Environment variables
    2) Text files in `config/` (optional)
    3) collection_config.json at project root (primary base)
    4) Defaults matching the public contract (N=1,000,000, page size 20)
    """

    base = _read_json_file(ROOT_COLLECTION_CONFIG)

    # Helpers to fetch from base JSON
    def _base(path: str, default: Optional[str] = None) -> Optional[str]:
        cur: object = base
        for key in path.split("."):
            if not isinstance(cur, dict) or key not in cur:
                return default
            cur = cur[key]
        if isinstance(cur, list):
            return ",".join(str(v) for v in cur)
        return str(cur) if cur is not None else default

    # Collection
    total_items_text = _env("COLLECTION_TOTAL_ITEMS") or _read_config_file("collection.total_items") or _base("collection.total_items", str(DEFAULT_TOTAL_ITEMS))
    page_size_text = _env("COLLECTION_PAGE_SIZE") or _read_config_file("collection.page_size") or _base("collection.page_size", str(DEFAULT_PAGE_SIZE))
    seed_text = _env("COLLECTION_SEED") or _read_config_file("collection.seed") or _base("collection.seed")
    snapshot_limit_text = _env("COLLECTION_CONFLICT_SNAPSHOT_LIMIT") or _read_config_file("collection.conflict_snapshot_limit") or _base("collection.conflict_snapshot_limit", str(DEFAULT_CONFLICT_SNAPSHOT_LIMIT))

    # HTTP
    host = _env("HOST") or _base("http.host", "0.0.0.0")
    port_text = _env("PORT") or _base("http.port", "8000")
    origins_text = _env("CORS_ORIGINS") or _read_config_file("http.cors_origins") or _base("http.cors_origins", "*")
    test_routes_text = _env("ENABLE_TEST_ROUTES") or _read_config_file("http.enable_test_routes") or _base("http.enable_test_routes", "false")

    # Logging
    level = _env("LOG_LEVEL") or _read_config_file("logging.level") or _base("logging.level", "INFO")

    try:
        cfg = AppConfig(
            collection=CollectionConfig(
                total_items=int(str(total_items_text).strip()),
                page_size=int(str(page_size_text).strip()),
                seed=int(str(seed_text).strip()) if seed_text else None,
                conflict_snapshot_limit=int(str(snapshot_limit_text).strip()),
            ),
            http=HttpConfig(
                host=str(host).strip(),
                port=int(str(port_text).strip()),
                cors_origins=_split_origins(origins_text or "*") or ["*"],
                enable_test_routes=_parse_flag(test_routes_text),
            ),
            logging=LoggingConfig(level=str(level)),
        )
        return cfg
    except (PydanticValidationError, ValueError) as e:
        # Surface actionable message; int() parse failures land here too
        logger.error("Invalid application configuration: %s", e)
        raise


__all__ = [
    "AppConfig",
    "CollectionConfig",
    "HttpConfig",
    "LoggingConfig",
    "load_config",
]
