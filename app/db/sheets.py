"""
The spreadsheet-like persistence collaborator.

Exposes exactly four primitives over named sheets: create a sheet with a
header row, read every row as a grid, append a row, and delete the row at
a grid position. Grid position 0 is the header row. Each primitive commits
immediately.
"""

from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.models.sheet import Sheet, SheetRow

logger = logging.getLogger(__name__)


class SheetNotFoundError(LookupError):
    pass


class SheetGrid:
    def __init__(self, db: AsyncSession):
        self.db = db

    async def _sheet_id(self, name: str) -> int | None:
        result = await self.db.execute(select(Sheet.id).where(Sheet.name == name))
        return result.scalar_one_or_none()

    async def _require_sheet_id(self, name: str) -> int:
        sheet_id = await self._sheet_id(name)
        if sheet_id is None:
            raise SheetNotFoundError(f"Sheet '{name}' does not exist")
        return sheet_id

    async def exists(self, name: str) -> bool:
        return await self._sheet_id(name) is not None

    async def create_sheet(self, name: str, header: list[str]) -> None:
        sheet = Sheet(name=name)
        self.db.add(sheet)
        await self.db.flush()
        self.db.add(SheetRow(sheet_id=sheet.id, cells=list(header)))
        await self.db.commit()
        logger.info("Created sheet %s with columns %s", name, header)

    async def get_values(self, name: str) -> list[list[Any]] | None:
        """Return every row of *name* in order, or ``None`` if it is missing."""
        sheet_id = await self._sheet_id(name)
        if sheet_id is None:
            return None
        result = await self.db.execute(
            select(SheetRow.cells)
            .where(SheetRow.sheet_id == sheet_id)
            .order_by(SheetRow.id.asc())
        )
        return [list(cells) for cells in result.scalars().all()]

    async def append_row(self, name: str, values: list[Any]) -> None:
        sheet_id = await self._require_sheet_id(name)
        self.db.add(SheetRow(sheet_id=sheet_id, cells=list(values)))
        await self.db.commit()

    async def delete_row(self, name: str, position: int) -> None:
        """Physically remove the row at grid *position* (0 = header)."""
        sheet_id = await self._require_sheet_id(name)
        result = await self.db.execute(
            select(SheetRow.id)
            .where(SheetRow.sheet_id == sheet_id)
            .order_by(SheetRow.id.asc())
            .offset(position)
            .limit(1)
        )
        row_id = result.scalar_one_or_none()
        if row_id is None:
            raise IndexError(f"Sheet '{name}' has no row at position {position}")
        await self.db.execute(delete(SheetRow).where(SheetRow.id == row_id))
        await self.db.commit()
