"""
管理员认证 API 路由
"""
from fastapi import APIRouter, Request, Response
from loguru import logger

from careers.api.deps import CurrentAdmin, DbSessionDep
from careers.core.config import settings
from careers.core.exceptions import UnauthorizedException
from careers.core.rate_limit import get_client_ip
from careers.core.response import success_response, ResponseModel, MessageResponse
from careers.core.security import create_session_token, verify_password
from careers.crud import admin_crud, audit_crud
from careers.models.admin import AdminIdentity, AdminUser, LoginRequest
from careers.models.audit import AuditAction

router = APIRouter()


def _identity(admin: AdminUser) -> dict:
    return AdminIdentity.model_validate(admin).model_dump()


@router.post("/login", summary="管理员登录", response_model=ResponseModel[AdminIdentity])
async def login(data: LoginRequest, request: Request, response: Response, db: DbSessionDep):
    """
    邮箱+密码登录

    账号不存在、已停用或密码错误统一返回 401，避免泄露账号状态
    """
    admin = await admin_crud.get_by_email(db, data.email)
    if admin is None or not admin.is_active or not verify_password(data.password, admin.password_hash):
        logger.warning(f"登录失败: {data.email}")
        raise UnauthorizedException("Invalid credentials")

    await admin_crud.mark_login(db, admin)
    await audit_crud.record(
        db,
        user_id=admin.id,
        action=AuditAction.SIGN_IN.value,
        entity_type="AdminUser",
        entity_id=admin.id,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )

    token = create_session_token(admin.id, admin.email, admin.role)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=settings.session_max_age,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    logger.info(f"管理员登录: {admin.email}")
    return success_response(data=_identity(admin), message="Signed in successfully")


@router.post("/logout", summary="管理员登出", response_model=MessageResponse)
async def logout(request: Request, response: Response, db: DbSessionDep, admin: CurrentAdmin):
    await audit_crud.record(
        db,
        user_id=admin.id,
        action=AuditAction.SIGN_OUT.value,
        entity_type="AdminUser",
        entity_id=admin.id,
        ip_address=get_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )
    response.delete_cookie(settings.session_cookie_name)
    logger.info(f"管理员登出: {admin.email}")
    return success_response(message="Signed out successfully")


@router.get("/me", summary="当前管理员", response_model=ResponseModel[AdminIdentity])
async def me(admin: CurrentAdmin):
    return success_response(data=_identity(admin))
