"""
Typed access to the ``employees`` (staff) and ``areas`` tables.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from app.core.config import settings
from app.db.tabular import TabularStore, format_sheet_date, parse_sheet_date
from app.schemas.staff import CircularGeoFence, StaffRecord

logger = logging.getLogger(__name__)

STAFF_HEADER = ["id", "name", "department", "position", "email", "phone", "hireDate", "isActive"]
AREA_HEADER = ["id", "name", "centerLat", "centerLng", "radius", "description", "color"]
STAFF_OPTIONAL = ("department", "position", "email", "phone")


class StaffRepository:
    key_column = "id"

    def __init__(self, store: TabularStore, table: str | None = None):
        self.store = store
        self.table = table or settings.EMPLOYEES_TABLE

    @staticmethod
    def to_row(staff: StaffRecord) -> dict[str, Any]:
        row = staff.model_dump(by_alias=True)
        row["hireDate"] = format_sheet_date(staff.hire_date)
        return row

    @staticmethod
    def from_row(row: dict[str, Any]) -> StaffRecord:
        data = dict(row)
        data["hireDate"] = parse_sheet_date(data.get("hireDate"))
        if data.get("isActive") == "":
            data.pop("isActive")
        # Empty cells are how the sheet stores an omitted optional field
        for col in STAFF_OPTIONAL:
            if data.get(col) == "":
                data[col] = None
        return StaffRecord.model_validate(data)

    async def list_all(self, staff_id: str | None = None) -> list[StaffRecord]:
        records = []
        for row in await self.store.read_records(self.table):
            try:
                staff = self.from_row(row)
            except (ValidationError, ValueError) as e:
                logger.warning("Skipping malformed row in %s: %s", self.table, e)
                continue
            if staff_id is None or staff.id == staff_id:
                records.append(staff)
        return records

    async def get(self, staff_id: str) -> StaffRecord | None:
        matches = await self.list_all(staff_id)
        return matches[0] if matches else None

    async def add(self, staff: StaffRecord) -> bool:
        ok = await self.store.append_record(self.table, STAFF_HEADER, self.to_row(staff))
        if ok:
            logger.info("Added staff record %s (%s)", staff.id, staff.name)
        return ok

    async def delete(self, staff_id: str) -> bool:
        return await self.store.delete_by_key(self.table, self.key_column, staff_id)


class AreaRepository:
    key_column = "id"

    def __init__(self, store: TabularStore, table: str | None = None):
        self.store = store
        self.table = table or settings.AREAS_TABLE

    @staticmethod
    def to_row(area: CircularGeoFence) -> dict[str, Any]:
        return {
            "id": area.id,
            "name": area.name,
            "centerLat": area.center.lat,
            "centerLng": area.center.lng,
            "radius": area.radius,
            "description": area.description,
            "color": area.color,
        }

    @staticmethod
    def from_row(row: dict[str, Any]) -> CircularGeoFence:
        return CircularGeoFence(
            id=row.get("id", ""),
            name=row.get("name", ""),
            center={"lat": row.get("centerLat"), "lng": row.get("centerLng")},
            radius=row.get("radius"),
            description=row.get("description"),
            color=row.get("color"),
        )

    async def list_all(self) -> list[CircularGeoFence]:
        areas = []
        for row in await self.store.read_records(self.table):
            try:
                areas.append(self.from_row(row))
            except ValidationError as e:
                logger.warning("Skipping malformed row in %s: %s", self.table, e)
        return areas

    async def add(self, area: CircularGeoFence) -> bool:
        ok = await self.store.append_record(self.table, AREA_HEADER, self.to_row(area))
        if ok:
            logger.info("Added work area %s (%s)", area.id, area.name)
        return ok

    async def delete(self, area_id: str) -> bool:
        return await self.store.delete_by_key(self.table, self.key_column, area_id)
