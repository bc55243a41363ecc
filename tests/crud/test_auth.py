"""
管理员登录/会话 API 测试
"""
from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from careers.core.config import settings
from careers.core.security import create_session_token
from careers.crud import admin_crud, audit_crud


@pytest.mark.asyncio
async def test_login_me_logout_flow(client: AsyncClient, admin, db_session: AsyncSession):
    """登录设置 Cookie -> 访问 /me -> 登出后会话失效"""

    # 1. Login
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "Admin@Example.com", "password": "correct-horse-battery"},
        headers={"User-Agent": "pytest-agent"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["data"] == {
        "id": admin.id,
        "email": admin.email,
        "name": "Site Admin",
        "role": "ADMIN",
    }
    assert settings.session_cookie_name in response.cookies
    set_cookie = response.headers["set-cookie"].lower()
    assert "httponly" in set_cookie
    assert "samesite=lax" in set_cookie

    # 2. Me (客户端自动携带 Cookie)
    response = await client.get("/api/v1/auth/me")
    assert response.status_code == 200
    assert response.json()["data"]["email"] == admin.email

    # 3. Logout
    response = await client.post("/api/v1/auth/logout")
    assert response.status_code == 200
    assert (await client.get("/api/v1/auth/me")).status_code == 401

    # 登录与登出都写入审计日志
    logs = await audit_crud.list_for_user(db_session, admin.id)
    assert sorted(log.action for log in logs) == ["SIGN_IN", "SIGN_OUT"]
    assert all(log.user_agent == "pytest-agent" for log in logs if log.action == "SIGN_IN")

    refreshed = await admin_crud.get_by_email(db_session, admin.email)
    await db_session.refresh(refreshed)
    assert refreshed.last_login is not None


@pytest.mark.asyncio
async def test_login_with_wrong_password_is_rejected(client: AsyncClient, admin):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": admin.email, "password": "wrong-password"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"
    assert settings.session_cookie_name not in response.cookies


@pytest.mark.asyncio
async def test_login_with_unknown_email_is_rejected(client: AsyncClient, admin):
    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "nobody@example.com", "password": "correct-horse-battery"},
    )
    assert response.status_code == 401
    assert response.json()["message"] == "Invalid credentials"


@pytest.mark.asyncio
async def test_disabled_admin_cannot_sign_in_or_use_session(client: AsyncClient, db_session: AsyncSession):
    """停用账号：登录返回 401，已有会话返回 403"""
    disabled = await admin_crud.create_admin(
        db_session,
        email="former@example.com",
        name="Former Admin",
        password="old-password-123",
        is_active=False,
    )
    await db_session.commit()

    response = await client.post(
        "/api/v1/auth/login",
        json={"email": "former@example.com", "password": "old-password-123"},
    )
    assert response.status_code == 401

    token = create_session_token(disabled.id, disabled.email, disabled.role)
    response = await client.get(
        "/api/v1/auth/me",
        headers={"Cookie": f"{settings.session_cookie_name}={token}"},
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_expired_session_is_unauthorized(client: AsyncClient, admin):
    token = create_session_token(admin.id, admin.email, admin.role, expires_delta=timedelta(seconds=-1))
    response = await client.get(
        "/api/v1/auth/me",
        headers={"Cookie": f"{settings.session_cookie_name}={token}"},
    )
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_session_for_deleted_admin_is_unauthorized(client: AsyncClient):
    token = create_session_token("no-such-admin", "ghost@example.com", "ADMIN")
    response = await client.get(
        "/api/v1/auth/me",
        headers={"Cookie": f"{settings.session_cookie_name}={token}"},
    )
    assert response.status_code == 401
