"""
FastAPI dependencies — database session and the per-request action context.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.tokens import TokenRegistry
from app.db.repositories import AreaRepository, StaffRepository
from app.db.session import async_session_factory
from app.db.sheets import SheetGrid
from app.db.tabular import TabularStore


# ── Database session ────────────────────────────────────────────────
async def get_db() -> AsyncGenerator[AsyncSession, None]:
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()


# ── Action context ──────────────────────────────────────────────────
class ActionContext:
    """Everything an action handler may touch during one request."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.store = TabularStore(SheetGrid(db))
        self.staff = StaffRepository(self.store)
        self.areas = AreaRepository(self.store)
        self.registry = TokenRegistry(db)


async def get_action_context(db: AsyncSession = Depends(get_db)) -> ActionContext:
    return ActionContext(db)
