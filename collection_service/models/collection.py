"""Response models for the collection HTTP surface.

Field names follow the JSON contract (camelCase). Request bodies are read as
raw JSON and validated by the order store so that shape errors surface as
400 problems instead of FastAPI's default 422.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from collection_service.logic.order_store import AppliedRange, QueryResult, SelectionResult


class ItemOut(BaseModel):
    id: int
    name: str
    category: str


class ItemsResponse(BaseModel):
    items: List[ItemOut]
    total: int
    page: int
    pageSize: int
    hasMore: bool
    search: Optional[str] = None
    selected: List[int] = Field(default_factory=list)

    @classmethod
    def from_result(cls, result: QueryResult) -> "ItemsResponse":
        return cls(
            items=[ItemOut(**item.to_dict()) for item in result.items],
            total=result.total,
            page=result.page,
            pageSize=result.page_size,
            hasMore=result.has_more,
            search=result.search,
            selected=list(result.selected),
        )


class UpdatedRange(BaseModel):
    start: int
    end: int


class ReorderResponse(BaseModel):
    success: bool = True
    message: str
    updatedRange: UpdatedRange

    @classmethod
    def from_range(cls, applied: AppliedRange) -> "ReorderResponse":
        return cls(
            message=f"Order updated for positions {applied.start}-{applied.end}",
            updatedRange=UpdatedRange(start=applied.start, end=applied.end),
        )


class SelectionResponse(BaseModel):
    success: bool = True
    message: str
    count: int
    selectedIds: List[int]

    @classmethod
    def from_result(cls, result: SelectionResult) -> "SelectionResponse":
        return cls(
            message=f"Selection updated with {result.count} item(s)",
            count=result.count,
            selectedIds=list(result.valid_ids),
        )


class ResetResponse(BaseModel):
    success: bool = True
    message: str = "State reset to initial order"


class HealthResponse(BaseModel):
    status: str = "ok"
    totalItems: int
    seed: int


class ProblemOut(BaseModel):
    """Documentation-only shape of problem+json error bodies."""

    title: str
    status: int
    detail: str
    code: str
    error: str
    currentState: Optional[Dict[str, Any]] = None
    received: Optional[Dict[str, List[Any]]] = None


__all__ = [
    "ItemOut",
    "ItemsResponse",
    "UpdatedRange",
    "ReorderResponse",
    "SelectionResponse",
    "ResetResponse",
    "HealthResponse",
    "ProblemOut",
]
