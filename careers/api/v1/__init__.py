"""
API v1 路由模块
"""
from . import auth, applications, jobs, blog, testimonials, uploads, analytics

__all__ = [
    "auth",
    "applications",
    "jobs",
    "blog",
    "testimonials",
    "uploads",
    "analytics",
]
