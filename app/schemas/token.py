"""Pydantic schemas for login / token commands."""

from __future__ import annotations

from pydantic import BaseModel


class AuthRequest(BaseModel):
    username: str = ""
    password: str = ""


class AuthResponse(BaseModel):
    success: bool
    token: str | None = None


class TokenCheckResponse(BaseModel):
    success: bool
