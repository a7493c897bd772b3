"""Domain error taxonomy for the collection service.

Route handlers never build error bodies themselves: logic modules raise one
of these exceptions and the problem+json handlers in
``collection_service.http.problem`` translate them into HTTP responses.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional


class CollectionError(Exception):
    """Base class for all errors raised by the collection logic."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ReorderValidationError(CollectionError, ValueError):
    """Reorder payload has the wrong shape; state is left untouched."""


class SelectionValidationError(CollectionError, ValueError):
    """Selection payload is not a list of candidate ids."""


class ItemOutOfRangeError(CollectionError, ValueError):
    """Requested item id lies outside the universe ``[1, N]``."""


class ReorderConflictError(CollectionError):
    """Expected range no longer appears anywhere in the working order.

    Carries the data a client needs to resync: a snapshot of the current
    state and the ranges it sent.
    """

    def __init__(
        self,
        message: str,
        *,
        expected: List[Any],
        proposed: List[Any],
        current_state: Optional[Dict[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.expected = list(expected)
        self.proposed = list(proposed)
        self.current_state = dict(current_state or {})

    @property
    def received(self) -> Dict[str, List[Any]]:
        return {"oldPageOrder": self.expected, "newPageOrder": self.proposed}


__all__ = [
    "CollectionError",
    "ReorderValidationError",
    "SelectionValidationError",
    "ItemOutOfRangeError",
    "ReorderConflictError",
]
