"""
Named tables on top of the sheet grid.

The first row of every sheet is the header and is the only source of
truth for column order: values are always located by column *name*, so
reordering columns in a sheet never breaks reads or writes.

Storage failures never propagate: they are logged and reported as
``False`` (writes) or an empty result (reads).
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any

from app.db.sheets import SheetGrid

logger = logging.getLogger(__name__)

NOT_FOUND = -1
SHEET_DATE_FORMAT = "%Y/%m/%d"


# ── Date cells ──────────────────────────────────────────────────────
def format_sheet_date(value: date | datetime | None) -> str:
    """Serialise a date as ``yyyy/mm/dd``; time of day is truncated."""
    if value is None:
        return ""
    if isinstance(value, datetime):
        value = value.date()
    return value.strftime(SHEET_DATE_FORMAT)


def parse_sheet_date(value: Any) -> date | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    try:
        return datetime.strptime(text, SHEET_DATE_FORMAT).date()
    except ValueError:
        # Cells edited by hand may hold ISO dates or timestamps.
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()


# ── Store ───────────────────────────────────────────────────────────
class TabularStore:
    def __init__(self, grid: SheetGrid):
        self.grid = grid

    @staticmethod
    def column_index(headers: list[Any], column: str) -> int:
        """Position of *column* in *headers*, or ``NOT_FOUND``."""
        for i, name in enumerate(headers):
            if name == column:
                return i
        return NOT_FOUND

    async def _rollback(self) -> None:
        try:
            await self.grid.db.rollback()
        except Exception:
            logger.exception("Rollback after storage failure also failed")

    async def ensure_table(self, name: str, header: list[str]) -> bool:
        """Create *name* with *header* unless it already exists."""
        try:
            if not await self.grid.exists(name):
                await self.grid.create_sheet(name, header)
            return True
        except Exception:
            logger.exception("Could not ensure table %s", name)
            await self._rollback()
            return False

    async def read_all(self, name: str) -> list[list[Any]]:
        """Full grid including the header row; ``[]`` for empty or missing tables."""
        try:
            values = await self.grid.get_values(name)
        except Exception:
            logger.exception("Could not read table %s", name)
            await self._rollback()
            return []
        if not values or len(values) <= 1:
            return []
        return values

    async def append(self, name: str, values: list[Any]) -> bool:
        try:
            await self.grid.append_row(name, values)
            return True
        except Exception:
            logger.exception("Could not append to table %s", name)
            await self._rollback()
            return False

    async def delete_by_key(self, name: str, key_column: str, key_value: Any) -> bool:
        """Remove the first row whose *key_column* equals *key_value*."""
        rows = await self.read_all(name)
        if not rows:
            return False
        key_idx = self.column_index(rows[0], key_column)
        if key_idx == NOT_FOUND:
            logger.error("Table %s has no key column %r", name, key_column)
            return False

        wanted = str(key_value)
        for position in range(1, len(rows)):
            row = rows[position]
            if key_idx < len(row) and str(row[key_idx]) == wanted:
                try:
                    await self.grid.delete_row(name, position)
                except Exception:
                    logger.exception("Could not delete row %d from table %s", position, name)
                    await self._rollback()
                    return False
                logger.info("Deleted %s=%s from table %s", key_column, wanted, name)
                return True
        return False

    # ── Record helpers ──────────────────────────────────────────────
    async def append_record(self, name: str, header: list[str], record: dict[str, Any]) -> bool:
        """Append *record*, creating the table with *header* on first use.

        Values are laid out following the table's stored header, not *header*;
        record keys without a column are dropped, columns without a key get ``""``.
        """
        if not await self.ensure_table(name, header):
            return False
        try:
            values = await self.grid.get_values(name)
        except Exception:
            logger.exception("Could not read header of table %s", name)
            await self._rollback()
            return False
        stored_header = values[0] if values else header
        row = ["" if record.get(col) is None else record[col] for col in stored_header]
        return await self.append(name, row)

    async def read_records(self, name: str) -> list[dict[str, Any]]:
        rows = await self.read_all(name)
        if not rows:
            return []
        header = rows[0]
        records = []
        for row in rows[1:]:
            records.append(
                {col: row[i] for i, col in enumerate(header) if col != "" and i < len(row)}
            )
        return records
