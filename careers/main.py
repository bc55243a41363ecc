"""
FastAPI 主应用入口

海外求职服务平台后端
"""
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Depends
from fastapi.routing import APIRoute
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from loguru import logger
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.exceptions import HTTPException as StarletteHTTPException

from careers.core.config import settings
from careers.core.database import init_db, close_db, get_db, check_db
from careers.core.rate_limit import InMemoryRateLimitStore, RateLimiter
from careers.core.response import success_response, error_response, DictResponse
from careers.core.exceptions import (
    AppException,
    app_exception_handler,
    http_exception_handler,
    validation_exception_handler,
    integrity_exception_handler,
    general_exception_handler,
)
from careers.api import api_router

APP_VERSION = "1.0.0"


def custom_generate_unique_id(route: APIRoute) -> str:
    """
    自定义 OpenAPI operationId 生成函数

    使用路由函数名作为 operationId，生成更简短的 API 名称
    """
    return route.name


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    应用生命周期管理

    启动时初始化数据库，关闭时释放连接
    """
    logger.info(f"启动应用: {settings.app_name}")
    logger.info(f"环境: {settings.app_env}")
    logger.info(f"调试模式: {settings.debug}")

    await init_db()
    logger.info("数据库初始化完成")

    yield

    await close_db()
    logger.info("应用已关闭")


def create_app(rate_limiter: RateLimiter = None) -> FastAPI:
    """
    创建 FastAPI 应用实例

    rate_limiter 可注入（测试中使用可控时钟），缺省为进程内存实现
    """
    app = FastAPI(
        title=settings.app_name,
        description="海外求职服务平台 API：岗位、申请、内容与后台管理",
        version=APP_VERSION,
        docs_url="/docs" if settings.debug else None,
        redoc_url="/redoc" if settings.debug else None,
        openapi_url="/openapi.json" if settings.debug else None,
        lifespan=lifespan,
        generate_unique_id_function=custom_generate_unique_id,
    )
    app.state.rate_limiter = rate_limiter or RateLimiter(InMemoryRateLimitStore())

    # 注册异常处理器
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(IntegrityError, integrity_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    # 注册路由
    app.include_router(api_router, prefix="/api/v1")

    # 上传文件静态访问
    app.mount(
        settings.upload_url_prefix,
        StaticFiles(directory=settings.upload_dir, check_dir=False),
        name="uploads",
    )

    # 健康检查
    @app.get("/health", tags=["系统"], response_model=DictResponse)
    async def health_check(db: AsyncSession = Depends(get_db)):
        """健康检查接口（含数据库连通性）"""
        timestamp = datetime.now(timezone.utc).isoformat()
        try:
            await check_db(db)
        except SQLAlchemyError as e:
            logger.error(f"数据库健康检查失败: {e}")
            return JSONResponse(
                status_code=503,
                content=error_response(
                    message="Service unavailable",
                    code=503,
                    data={"status": "unhealthy", "database": "disconnected", "timestamp": timestamp},
                ),
            )
        return success_response(data={
            "status": "healthy",
            "database": "connected",
            "timestamp": timestamp,
            "version": APP_VERSION,
        })

    # 根路径
    @app.get("/", tags=["系统"], response_model=DictResponse)
    async def root():
        """API 根路径"""
        return success_response(data={
            "name": settings.app_name,
            "version": APP_VERSION,
            "docs": "/docs" if settings.debug else None,
        })

    # 配置 CORS（必须放在最后添加，这样它会最先执行）
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    return app


# 创建应用实例
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "careers.main:app",
        host="127.0.0.1",
        port=8000,
        reload=settings.debug,
    )
