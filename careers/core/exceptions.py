"""
异常处理模块

定义业务异常和全局异常处理器
"""
from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from loguru import logger
from sqlalchemy.exc import IntegrityError

from .response import error_response


class AppException(Exception):
    """应用基础异常"""

    def __init__(
        self,
        message: str = "Internal server error",
        code: int = 500,
        data: dict = None
    ):
        self.message = message
        self.code = code
        self.data = data
        super().__init__(self.message)


class BadRequestException(AppException):
    """请求参数错误异常"""

    def __init__(self, message: str = "Bad request", data: dict = None):
        super().__init__(message=message, code=400, data=data)


class UnauthorizedException(AppException):
    """未登录或会话无效"""

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message=message, code=401)


class ForbiddenException(AppException):
    """已登录但无权限（例如账号已停用）"""

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message=message, code=403)


class NotFoundException(AppException):
    """资源不存在异常"""

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message=message, code=404)


class ConflictException(AppException):
    """资源冲突异常"""

    def __init__(self, message: str = "Resource already exists"):
        super().__init__(message=message, code=409)


class RateLimitedException(AppException):
    """请求过于频繁"""

    def __init__(self, message: str = "Too many requests"):
        super().__init__(message=message, code=429)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """应用异常处理器"""
    logger.warning(f"AppException: {exc.message} | Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.code,
        content=error_response(message=exc.message, code=exc.code, data=exc.data)
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """HTTP 异常处理器"""
    logger.warning(f"HTTPException: {exc.detail} | Path: {request.url.path}")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_response(message=str(exc.detail), code=exc.status_code),
        headers=getattr(exc, "headers", None),
    )


def format_validation_errors(errors) -> list[dict]:
    """
    将 pydantic 错误转为 [{field, message}]

    去掉 body/query/path 等位置前缀，只保留字段路径
    """
    formatted = []
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "query", "path", "header", "cookie"):
            loc = loc[1:]
        formatted.append({
            "field": ".".join(loc) or "body",
            "message": error.get("msg", "Invalid value"),
        })
    return formatted


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """请求验证异常处理器"""
    errors = format_validation_errors(exc.errors())
    message = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
    logger.warning(f"ValidationError: {message} | Path: {request.url.path}")

    return JSONResponse(
        status_code=400,
        content=error_response(
            message="Validation failed",
            code=400,
            data={"errors": errors}
        )
    )


async def integrity_exception_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    """唯一约束等数据库完整性冲突"""
    logger.warning(f"IntegrityError: {exc.orig} | Path: {request.url.path}")
    return JSONResponse(
        status_code=409,
        content=error_response(message="Resource conflicts with existing data", code=409)
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """通用异常处理器"""
    logger.exception(f"Unhandled Exception: {exc} | Path: {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=error_response(message="Internal server error", code=500)
    )
