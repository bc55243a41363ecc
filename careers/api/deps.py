"""
API 公共依赖

管理员会话校验与公开投递限流
"""
from typing import Annotated, Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from careers.core.config import settings
from careers.core.database import get_db
from careers.core.exceptions import ForbiddenException, RateLimitedException, UnauthorizedException
from careers.core.rate_limit import RateLimiter, get_client_ip
from careers.core.security import decode_session_token
from careers.crud import admin_crud
from careers.models.admin import AdminUser

DbSessionDep = Annotated[AsyncSession, Depends(get_db)]


async def get_optional_admin(request: Request, db: DbSessionDep) -> Optional[AdminUser]:
    """有有效会话且账号启用时返回管理员，否则返回 None"""
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    payload = decode_session_token(token)
    if payload is None:
        return None
    admin = await admin_crud.get(db, payload["sub"])
    if admin is None or not admin.is_active:
        return None
    return admin


async def get_current_admin(request: Request, db: DbSessionDep) -> AdminUser:
    """
    要求管理员会话

    无会话/会话无效/账号不存在 -> 401，账号已停用 -> 403
    """
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        raise UnauthorizedException("Unauthorized - Admin access required")

    payload = decode_session_token(token)
    if payload is None:
        raise UnauthorizedException("Session expired or invalid")

    admin = await admin_crud.get(db, payload["sub"])
    if admin is None:
        raise UnauthorizedException("Session expired or invalid")
    if not admin.is_active:
        raise ForbiddenException("Admin account is disabled")
    return admin


CurrentAdmin = Annotated[AdminUser, Depends(get_current_admin)]
OptionalAdmin = Annotated[Optional[AdminUser], Depends(get_optional_admin)]


def get_rate_limiter(request: Request) -> RateLimiter:
    """应用级限流器（create_app 中挂载）"""
    return request.app.state.rate_limiter


async def enforce_application_rate_limit(
    request: Request,
    limiter: Annotated[RateLimiter, Depends(get_rate_limiter)],
) -> None:
    """公开投递限流：每个 IP 窗口期内最多 N 次"""
    key = f"application_{get_client_ip(request)}"
    result = limiter.check(
        key,
        settings.application_rate_limit,
        settings.application_rate_window_ms,
    )
    if not result.allowed:
        raise RateLimitedException("Too many applications submitted. Please try again later.")
