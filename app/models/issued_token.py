"""
IssuedToken model — registry of every token handed out by ``login``.

A token is only honoured while its row exists, has not expired and has
not been revoked.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import Column, DateTime, Integer, String

from app.db.base import Base


class IssuedToken(Base):
    __tablename__ = "issued_tokens"

    id: int = Column(Integer, primary_key=True, index=True)  # type: ignore[assignment]
    token_id: str = Column(String(64), unique=True, nullable=False, index=True)  # type: ignore[assignment]
    username: str = Column(String(150), nullable=False, index=True)  # type: ignore[assignment]
    role: str = Column(String(20), nullable=False)  # type: ignore[assignment]
    issued_at: datetime = Column(  # type: ignore[assignment]
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
    )
    expires_at: datetime = Column(DateTime(timezone=True), nullable=False)  # type: ignore[assignment]
    revoked_at: datetime | None = Column(DateTime(timezone=True), nullable=True)  # type: ignore[assignment]
