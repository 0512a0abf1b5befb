"""
Sheet & SheetRow models — the grid behind the tabular store.

A sheet is an ordered list of rows; row order is insertion order (``id``)
and the first row holds the column headers.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, Integer, String

from app.db.base import Base


class Sheet(Base):
    __tablename__ = "sheets"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    name: str = Column(String(100), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    created_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )


class SheetRow(Base):
    __tablename__ = "sheet_rows"
    __table_args__ = (Index("ix_sheet_rows_sheet_id_id", "sheet_id", "id"),)

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    sheet_id: int = Column(  # type: ignore[assignment]
        Integer, ForeignKey("sheets.id", ondelete="CASCADE"), nullable=False
    )
    cells: list = Column(JSON, nullable=False, default=list)  # type: ignore[assignment]
