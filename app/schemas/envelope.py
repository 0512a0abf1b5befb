"""Uniform response envelope returned by every routed action."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ApiResponse(BaseModel, Generic[T]):
    success: bool
    data: T | None = None
    error: str | None = None
    timestamp: str = Field(default_factory=_now_iso)

    def to_wire(self) -> dict[str, Any]:
        """JSON-ready dict; ``data`` / ``error`` are left out when unset."""
        unset = {name for name in ("data", "error") if getattr(self, name) is None}
        return self.model_dump(mode="json", by_alias=True, exclude=unset)


def success(data: Any) -> ApiResponse[Any]:
    return ApiResponse[Any](success=True, data=data)


def failure(error: str) -> ApiResponse[Any]:
    return ApiResponse[Any](success=False, error=error)
