"""
API 路由模块
"""
from fastapi import APIRouter

from .v1 import auth, applications, jobs, blog, testimonials, uploads, analytics

# 创建主路由
api_router = APIRouter()

# 注册各模块路由
api_router.include_router(
    auth.router,
    prefix="/auth",
    tags=["管理员认证"]
)
api_router.include_router(
    applications.router,
    prefix="/applications",
    tags=["求职申请"]
)
api_router.include_router(
    jobs.router,
    prefix="/jobs",
    tags=["岗位管理"]
)
api_router.include_router(
    blog.router,
    prefix="/blog",
    tags=["博客文章"]
)
api_router.include_router(
    testimonials.router,
    prefix="/testimonials",
    tags=["客户评价"]
)
api_router.include_router(
    uploads.router,
    prefix="/upload",
    tags=["文件上传"]
)
api_router.include_router(
    analytics.router,
    prefix="/analytics",
    tags=["数据统计"]
)
