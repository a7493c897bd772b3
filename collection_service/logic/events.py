"""Domain event constants and publisher.

Defines event type constants and a simple publish() callable used by the
mutation paths of the order store. The in-memory buffer keeps only the most
recent ``EVENT_BUFFER_LIMIT`` events.
"""

from __future__ import annotations

from collections import deque
from typing import Any, Deque, Dict, List
import logging

logger = logging.getLogger(__name__)

ORDER_REORDERED = "order.reordered"
SELECTION_REPLACED = "selection.replaced"
STATE_RESET = "state.reset"

EVENT_BUFFER_LIMIT = 1000


def publish(event_type: str, payload: Dict[str, Any]) -> None:
    """Publish a domain event.

    Events are logged for observability and buffered in-memory so tests can
    observe them.
    """
    logger.info("event_publish type=%s payload=%s", event_type, payload)
    EVENT_BUFFER.append({"type": event_type, "payload": payload})


# In-memory buffer for domain events (test-only visibility); oldest dropped first
EVENT_BUFFER: Deque[Dict[str, Any]] = deque(maxlen=EVENT_BUFFER_LIMIT)


def get_buffered_events(clear: bool = True) -> List[Dict[str, Any]]:
    """Return buffered domain events; optionally clear the buffer."""
    events = list(EVENT_BUFFER)
    if clear:
        EVENT_BUFFER.clear()
    return events


__all__ = [
    "ORDER_REORDERED",
    "SELECTION_REPLACED",
    "STATE_RESET",
    "EVENT_BUFFER_LIMIT",
    "publish",
    "get_buffered_events",
    "EVENT_BUFFER",
]
