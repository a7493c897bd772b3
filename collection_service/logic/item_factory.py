"""Deterministic item generation with per-process memoization.

Every item is a pure function of its id and the process seed, so the cache
is only an accelerator: clearing it never changes what ``get`` returns.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Dict, Optional

from collection_service.logic.errors import ItemOutOfRangeError

logger = logging.getLogger(__name__)

SEED_MIN = 10
SEED_MAX = 50

NAMES = (
    "Алексей", "Мария", "Дмитрий", "Елена", "Сергей",
    "Ольга", "Иван", "Наталья", "Андрей", "Татьяна",
    "Кирилл", "Юлия", "Виктор", "Анна", "Роман",
)

CATEGORIES = (
    "Техника", "Дизайн", "Администрирование", "Поддержка", "Продажи",
    "Маркетинг", "Разработка", "HR", "Финансы", "Аналитика",
)


@dataclass(frozen=True)
class Item:
    id: int
    name: str
    category: str

    def to_dict(self) -> Dict[str, object]:
        return {"id": self.id, "name": self.name, "category": self.category}


def draw_seed() -> int:
    """Return a random seed in ``[SEED_MIN, SEED_MAX]`` inclusive."""
    return random.randint(SEED_MIN, SEED_MAX)


def generate_item(item_id: int, seed: int) -> Item:
    return Item(
        id=item_id,
        name=f"{NAMES[item_id % len(NAMES)]} {item_id}",
        category=CATEGORIES[(item_id * seed) % len(CATEGORIES)],
    )


class ItemFactory:
    """Resolve ids in ``[1, total_items]`` to memoized :class:`Item` records."""

    def __init__(self, total_items: int, seed: Optional[int] = None) -> None:
        self.total_items = int(total_items)
        self.seed = int(seed) if seed is not None else draw_seed()
        self._cache: Dict[int, Item] = {}
        logger.info("item_factory.seed seed=%s total_items=%s", self.seed, self.total_items)

    def get(self, item_id: int) -> Item:
        if isinstance(item_id, bool) or not isinstance(item_id, int):
            raise ItemOutOfRangeError(f"item id must be an integer, got {item_id!r}")
        if not 1 <= item_id <= self.total_items:
            raise ItemOutOfRangeError(
                f"item id {item_id} outside universe [1, {self.total_items}]"
            )
        cached = self._cache.get(item_id)
        if cached is not None:
            return cached
        item = generate_item(item_id, self.seed)
        self._cache[item_id] = item
        return item

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        self._cache.clear()


__all__ = [
    "Item",
    "ItemFactory",
    "NAMES",
    "CATEGORIES",
    "SEED_MIN",
    "SEED_MAX",
    "draw_seed",
    "generate_item",
]
