"""Tests for login, token checks and the issued-token registry."""

from datetime import datetime, timedelta, timezone

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from app.core.config import settings
from app.core.security import create_access_token
from app.core.tokens import TokenRegistry
from app.models.issued_token import IssuedToken
from app.models.user import User
from app.schemas.user import Denied, Principal
from conftest import post_action


@pytest.mark.asyncio
async def test_login_with_both_credential_pairs(async_client: AsyncClient):
    for username, password in [
        (settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD),
        (settings.STAFF_USERNAME, settings.STAFF_PASSWORD),
    ]:
        resp = await post_action(async_client, "login", username=username, password=password)
        assert resp["success"] is True
        assert resp["token"]


@pytest.mark.asyncio
async def test_login_wrong_password(async_client: AsyncClient):
    resp = await post_action(
        async_client, "login", username=settings.ADMIN_USERNAME, password="wrong"
    )
    assert resp == {"success": False}


@pytest.mark.asyncio
async def test_login_missing_fields(async_client: AsyncClient):
    assert await post_action(async_client, "login") == {"success": False}


@pytest.mark.asyncio
async def test_login_records_token(async_client: AsyncClient, token: str, db_session):
    result = await db_session.execute(select(IssuedToken))
    entries = result.scalars().all()
    assert len(entries) == 1
    assert entries[0].username == settings.ADMIN_USERNAME
    assert entries[0].role == "admin"
    assert entries[0].revoked_at is None


@pytest.mark.asyncio
async def test_check_token_issued(async_client: AsyncClient, token: str):
    assert await post_action(async_client, "checkToken", token=token) == {"success": True}


@pytest.mark.asyncio
@pytest.mark.parametrize("body", [{}, {"token": ""}, {"token": None}, {"token": "   "}])
async def test_check_token_empty_or_absent(async_client: AsyncClient, body):
    assert await post_action(async_client, "checkToken", **body) == {"success": False}


@pytest.mark.asyncio
async def test_check_token_rejects_unissued_strings(async_client: AsyncClient):
    assert await post_action(async_client, "checkToken", token="anything") == {"success": False}


@pytest.mark.asyncio
async def test_check_token_rejects_signed_but_unregistered(async_client: AsyncClient):
    forged = create_access_token(settings.ADMIN_USERNAME, "never-issued")
    assert await post_action(async_client, "checkToken", token=forged) == {"success": False}


@pytest.mark.asyncio
async def test_logout_revokes_token(async_client: AsyncClient, token: str):
    assert await post_action(async_client, "logout", token=token) == {"success": True}
    assert await post_action(async_client, "checkToken", token=token) == {"success": False}
    resp = await post_action(
        async_client, "addWorkarea", token=token,
        area={"id": "a1", "name": "X", "center": {"lat": 0, "lng": 0}, "radius": 1},
    )
    assert resp == {"success": False}


@pytest.mark.asyncio
async def test_authorize_expired_entry(db_session):
    registry = TokenRegistry(db_session, mode="registry")
    result = await db_session.execute(select(User).where(User.username == settings.STAFF_USERNAME))
    user = result.scalar_one()
    token = await registry.issue(user)

    entry = (await db_session.execute(select(IssuedToken))).scalar_one()
    entry.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    await db_session.commit()

    outcome = await registry.authorize(token)
    assert isinstance(outcome, Denied)
    assert "expired" in outcome.reason


@pytest.mark.asyncio
async def test_authorize_inactive_user(db_session):
    registry = TokenRegistry(db_session, mode="registry")
    result = await db_session.execute(select(User).where(User.username == settings.STAFF_USERNAME))
    user = result.scalar_one()
    token = await registry.issue(user)
    assert isinstance(await registry.authorize(token), Principal)

    user.is_active = False
    await db_session.commit()
    assert isinstance(await registry.authorize(token), Denied)


@pytest.mark.asyncio
async def test_authorize_returns_principal(db_session):
    registry = TokenRegistry(db_session, mode="registry")
    user = await registry.authenticate(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
    assert user is not None
    principal = await registry.authorize(await registry.issue(user))
    assert isinstance(principal, Principal)
    assert principal.username == settings.ADMIN_USERNAME
    assert principal.role == "admin"
    assert principal.expires_at > datetime.now(timezone.utc)


# ── Legacy stub mode ────────────────────────────────────────────────
@pytest.mark.asyncio
async def test_stub_mode_accepts_any_non_empty_token(db_session):
    registry = TokenRegistry(db_session, mode="stub")
    assert isinstance(await registry.authorize("anything"), Principal)
    assert isinstance(await registry.authorize(" "), Principal)
    assert isinstance(await registry.authorize(""), Denied)
    assert isinstance(await registry.authorize(None), Denied)


@pytest.mark.asyncio
async def test_stub_mode_through_router(async_client: AsyncClient, monkeypatch):
    monkeypatch.setattr(settings, "AUTH_MODE", "stub")
    assert await post_action(async_client, "checkToken", token="x") == {"success": True}
    assert await post_action(async_client, "checkToken", token="") == {"success": False}


@pytest.mark.asyncio
async def test_registry_mode_rejects_whitespace_token(db_session):
    registry = TokenRegistry(db_session, mode="registry")
    assert isinstance(await registry.authorize("   "), Denied)
