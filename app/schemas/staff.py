"""Pydantic schemas for records kept in the tabular store.

``StaffRecord`` is the HR sheet shape (camelCase on the wire) and is a
separate entity from the snake_case ``Employee`` domain shape.
``CircularGeoFence`` is the work-area shape kept in the ``areas`` table.
"""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, coerce_numbers_to_str=True
    )


# ── Staff (employees table) ─────────────────────────────────────────
class StaffRecord(_CamelModel):
    id: str
    name: str
    department: str | None = None
    position: str | None = None
    email: str | None = None
    phone: str | None = None
    hire_date: date | None = None
    is_active: bool = True

    @field_validator("id", "name")
    @classmethod
    def _required(cls, v: str) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("hire_date", mode="before")
    @classmethod
    def _hire_date(cls, v: object) -> object:
        # Time of day is dropped; the sheet keeps calendar dates only.
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return None
            if "T" in v or " " in v:
                return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
            return v.replace("/", "-")
        return v


# ── Work areas (areas table) ────────────────────────────────────────
class GeoPoint(BaseModel):
    model_config = ConfigDict(allow_inf_nan=False)

    lat: float
    lng: float


class CircularGeoFence(BaseModel):
    model_config = ConfigDict(coerce_numbers_to_str=True, allow_inf_nan=False)

    id: str
    name: str
    center: GeoPoint
    radius: float  # metres
    description: str | None = None
    color: str | None = None

    @field_validator("id")
    @classmethod
    def _id(cls, v: str) -> str:
        v = str(v).strip()
        if not v:
            raise ValueError("must not be empty")
        return v

    @field_validator("radius")
    @classmethod
    def _radius(cls, v: float) -> float:
        if v < 0:
            raise ValueError("radius must not be negative")
        return v
