"""Outcomes of token authorisation."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class Principal(BaseModel):
    username: str
    role: str
    token_id: str | None = None
    expires_at: datetime | None = None


class Denied(BaseModel):
    reason: str
