"""
The issued-token registry is the single place that decides whether a token
authorises a command.

``AUTH_MODE=registry``: a token is honoured only if it decodes, has not
expired, was recorded by ``issue`` and has not been revoked, and its user
is still active.

``AUTH_MODE=stub``: legacy behaviour, any non-empty string is accepted.
"""

from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.security import (create_access_token, decode_access_token,
                               get_password_hash, new_token_id,
                               verify_password)
from app.models.issued_token import IssuedToken
from app.models.user import User
from app.schemas.user import Denied, Principal

logger = logging.getLogger(__name__)


def _ensure_utc(dt: datetime) -> datetime:
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


class TokenRegistry:
    def __init__(self, db: AsyncSession, mode: str | None = None):
        self.db = db
        self.mode = mode or settings.AUTH_MODE

    async def authenticate(self, username: str, password: str) -> User | None:
        """Return the active user matching the credentials, else ``None``."""
        if not username or not password:
            return None
        result = await self.db.execute(
            select(User).where(User.username == username.strip())
        )
        user = result.scalar_one_or_none()
        if user is None or not verify_password(password, user.hashed_password):
            return None
        if not user.is_active:
            return None
        return user

    async def issue(self, user: User) -> str:
        token_id = new_token_id()
        expires_at = datetime.now(timezone.utc) + timedelta(
            minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES
        )
        self.db.add(
            IssuedToken(
                token_id=token_id,
                username=user.username,
                role=user.role,
                expires_at=expires_at,
            )
        )
        await self.db.commit()
        logger.info("Issued token for %s (expires %s)", user.username, expires_at.isoformat())
        return create_access_token(user.username, token_id, expires_at)

    async def _lookup(self, token: str) -> IssuedToken | Denied:
        payload = decode_access_token(token)
        if payload is None:
            return Denied(reason="token is malformed, forged or expired")
        result = await self.db.execute(
            select(IssuedToken).where(IssuedToken.token_id == payload["jti"])
        )
        entry = result.scalar_one_or_none()
        if entry is None:
            return Denied(reason="token was not issued by this service")
        return entry

    async def authorize(self, token: str | None) -> Principal | Denied:
        if not isinstance(token, str) or not token:
            return Denied(reason="no token supplied")

        if self.mode == "stub":
            return Principal(username="anonymous", role="staff")

        entry = await self._lookup(token)
        if isinstance(entry, Denied):
            return entry
        if entry.revoked_at is not None:
            return Denied(reason="token has been revoked")
        if _ensure_utc(entry.expires_at) <= datetime.now(timezone.utc):
            return Denied(reason="token has expired")

        result = await self.db.execute(select(User).where(User.username == entry.username))
        user = result.scalar_one_or_none()
        if user is None or not user.is_active:
            return Denied(reason="user is missing or inactive")

        return Principal(
            username=entry.username,
            role=entry.role,
            token_id=entry.token_id,
            expires_at=_ensure_utc(entry.expires_at),
        )

    async def revoke(self, token: str | None) -> bool:
        if not isinstance(token, str) or not token:
            return False
        if self.mode == "stub":
            return True
        entry = await self._lookup(token)
        if isinstance(entry, Denied):
            return False
        if entry.revoked_at is None:
            entry.revoked_at = datetime.now(timezone.utc)
            await self.db.commit()
            logger.info("Revoked token %s for %s", entry.token_id, entry.username)
        return True


async def seed_users(db: AsyncSession) -> int:
    """Create the configured credential pairs that do not exist yet."""
    pairs = [
        (settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD, "admin"),
        (settings.STAFF_USERNAME, settings.STAFF_PASSWORD, "staff"),
    ]
    created = 0
    for username, password, role in pairs:
        if not username or not password:
            continue
        result = await db.execute(select(User).where(User.username == username))
        if result.scalar_one_or_none() is not None:
            continue
        db.add(User(username=username, hashed_password=get_password_hash(password), role=role))
        created += 1
    if created:
        await db.commit()
    return created
