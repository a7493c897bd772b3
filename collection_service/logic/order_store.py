"""In-memory order store: working order, search term and selection set.

The store owns the single mutable permutation of the item universe and is
the only writer of it. Every public operation runs under one lock so that
concurrent requests served from the FastAPI thread pool observe a consistent
snapshot, and two reorders anchored on the same expected range cannot both
succeed.

Search state machine:

- an explicitly supplied search that differs from the stored term resets the
  working order to the identity permutation before the new term is stored;
- a request without a search keeps applying the stored term;
- a non-empty effective term filters the *current* working order and the
  filtered list replaces it, so repeating the same search is idempotent and
  reorders made inside a filtered view survive until the term changes.

Mutations publish their domain event before releasing the lock, so the event
buffer lists events in mutation order.
"""

from __future__ import annotations

import logging
import math
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from collection_service.logic import events
from collection_service.logic.errors import (
    ReorderConflictError,
    ReorderValidationError,
    SelectionValidationError,
)
from collection_service.logic.item_factory import Item, ItemFactory
from collection_service.logic.subsequence import find_subsequence

logger = logging.getLogger(__name__)

DEFAULT_TOTAL_ITEMS = 1_000_000
DEFAULT_PAGE_SIZE = 20
DEFAULT_CONFLICT_SNAPSHOT_LIMIT = 1000


@dataclass
class QueryResult:
    items: List[Item]
    total: int
    page: int
    page_size: int
    has_more: bool
    search: Optional[str]
    selected: List[int] = field(default_factory=list)


@dataclass(frozen=True)
class AppliedRange:
    start: int
    end: int


@dataclass(frozen=True)
class SelectionResult:
    count: int
    valid_ids: List[int]


def normalize_search(search: Optional[str]) -> Optional[str]:
    """Lower-case a search term; empty or missing terms become ``None``."""
    if search is None:
        return None
    term = str(search).lower()
    return term or None


_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_page(raw: Any) -> int:
    """Return a 1-based page number from the leading integer of ``raw``.

    ``"2.5"`` reads as 2 and ``"3abc"`` as 3; input without a leading integer
    defaults to 1.
    """
    if raw is None:
        return 1
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return 1
    return max(1, int(match.group(1)))


def coerce_item_id(value: Any, total_items: int) -> Optional[int]:
    """Coerce one selection candidate to an id in ``[1, total_items]``.

    Returns ``None`` for anything that is not an integral finite number in
    range; callers drop those silently.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        number: float = value
    elif isinstance(value, float):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return None
    else:
        return None
    if isinstance(number, float):
        if not math.isfinite(number) or not number.is_integer():
            return None
        number = int(number)
    if 1 <= number <= total_items:
        return int(number)
    return None


def _require_id_list(value: Any, name: str) -> List[int]:
    if not isinstance(value, list):
        raise ReorderValidationError(f"{name} must be an array")
    if not value:
        raise ReorderValidationError(f"{name} must not be empty")
    for element in value:
        if isinstance(element, bool) or not isinstance(element, int):
            raise ReorderValidationError(f"{name} must contain only integer ids")
    return list(value)


class OrderStore:
    """Process-lifetime state for one orderable collection."""

    def __init__(
        self,
        total_items: int = DEFAULT_TOTAL_ITEMS,
        page_size: int = DEFAULT_PAGE_SIZE,
        seed: Optional[int] = None,
        conflict_snapshot_limit: int = DEFAULT_CONFLICT_SNAPSHOT_LIMIT,
    ) -> None:
        self.total_items = int(total_items)
        self.page_size = int(page_size)
        self.conflict_snapshot_limit = int(conflict_snapshot_limit)
        self.items = ItemFactory(self.total_items, seed)
        self._lock = threading.Lock()
        self._order: List[int] = self._identity()
        self._search: Optional[str] = None
        # Client text of the active term, echoed back as supplied
        self._search_text: Optional[str] = None
        self._selected: set[int] = set()

    def _identity(self) -> List[int]:
        return list(range(1, self.total_items + 1))

    # ------------------------------------------------------------------
    # Query path
    # ------------------------------------------------------------------
    def query(self, page: int = 1, search: Optional[str] = None) -> QueryResult:
        """Return one page of the working order.

        ``search=None`` means the caller did not supply a search parameter;
        an empty string is an explicit request to clear the filter.
        """
        page = max(1, int(page))
        with self._lock:
            if search is not None:
                term = normalize_search(search)
                if term != self._search:
                    logger.info(
                        "order_store.search.changed previous=%r current=%r",
                        self._search,
                        term,
                    )
                    self._order = self._identity()
                    self._search = term
                self._search_text = search if term else None
            if self._search:
                needle = self._search
                self._order = [i for i in self._order if needle in str(i)]

            offset = (page - 1) * self.page_size
            end = offset + self.page_size
            total = len(self._order)
            page_ids = self._order[offset:end]
            return QueryResult(
                items=[self.items.get(i) for i in page_ids],
                total=total,
                page=page,
                page_size=self.page_size,
                has_more=total > end,
                search=self._search_text,
                selected=sorted(self._selected),
            )

    # ------------------------------------------------------------------
    # Mutation path
    # ------------------------------------------------------------------
    def apply_reorder(self, expected: Any, proposed: Any) -> AppliedRange:
        """Overwrite the first occurrence of ``expected`` with ``proposed``.

        Raises :class:`ReorderValidationError` for malformed ranges and
        :class:`ReorderConflictError` when ``expected`` is not found; in both
        cases the working order is left unchanged.
        """
        expected_ids = _require_id_list(expected, "oldPageOrder")
        proposed_ids = _require_id_list(proposed, "newPageOrder")
        if len(expected_ids) != len(proposed_ids):
            raise ReorderValidationError(
                "oldPageOrder and newPageOrder must have the same length"
            )
        if sorted(expected_ids) != sorted(proposed_ids):
            raise ReorderValidationError(
                "newPageOrder must be a permutation of oldPageOrder"
            )

        with self._lock:
            start = find_subsequence(self._order, expected_ids)
            if start < 0:
                logger.info(
                    "order_store.reorder.conflict expected_len=%s order_len=%s search=%r",
                    len(expected_ids),
                    len(self._order),
                    self._search,
                )
                raise ReorderConflictError(
                    "Expected range not found in current order",
                    expected=expected_ids,
                    proposed=proposed_ids,
                    current_state=self._snapshot(),
                )
            end = start + len(proposed_ids)
            self._order[start:end] = proposed_ids
            applied = AppliedRange(start=start, end=end - 1)
            logger.info("order_store.reorder.applied start=%s end=%s", applied.start, applied.end)
            events.publish(events.ORDER_REORDERED, {"start": applied.start, "end": applied.end})
        return applied

    def set_selection(self, candidates: Any) -> SelectionResult:
        """Replace the selection set with the valid ids among ``candidates``."""
        if not isinstance(candidates, list):
            raise SelectionValidationError("selectedIds must be an array")
        valid_ids = self._valid_ids(candidates)
        with self._lock:
            self._selected = set(valid_ids)
            logger.info(
                "order_store.selection.replaced received=%s kept=%s",
                len(candidates),
                len(valid_ids),
            )
            events.publish(events.SELECTION_REPLACED, {"count": len(valid_ids)})
        return SelectionResult(count=len(valid_ids), valid_ids=valid_ids)

    def reset(self) -> None:
        """Return to the startup state: identity order, no search, no selection."""
        with self._lock:
            self._order = self._identity()
            self._search = None
            self._search_text = None
            self._selected = set()
            self.items.clear()
            logger.info("order_store.reset total_items=%s", self.total_items)
            events.publish(events.STATE_RESET, {"total_items": self.total_items})

    # ------------------------------------------------------------------
    # Read-only helpers
    # ------------------------------------------------------------------
    @property
    def search(self) -> Optional[str]:
        with self._lock:
            return self._search_text

    @property
    def selected(self) -> List[int]:
        with self._lock:
            return sorted(self._selected)

    def order_snapshot(self) -> List[int]:
        """Return a copy of the full working order."""
        with self._lock:
            return list(self._order)

    def _valid_ids(self, candidates: Iterable[Any]) -> List[int]:
        seen: Dict[int, None] = {}
        for value in candidates:
            item_id = coerce_item_id(value, self.total_items)
            if item_id is not None:
                seen.setdefault(item_id, None)
        return list(seen)

    def _snapshot(self) -> Dict[str, Any]:
        # Caller holds the lock.
        limit = self.conflict_snapshot_limit
        return {
            "total": len(self._order),
            "search": self._search_text,
            "order": self._order[:limit],
            "truncated": len(self._order) > limit,
        }


__all__ = [
    "OrderStore",
    "QueryResult",
    "AppliedRange",
    "SelectionResult",
    "normalize_search",
    "parse_page",
    "coerce_item_id",
    "DEFAULT_TOTAL_ITEMS",
    "DEFAULT_PAGE_SIZE",
    "DEFAULT_CONFLICT_SNAPSHOT_LIMIT",
]
