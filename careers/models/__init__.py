"""
SQLModel 模型模块

使用 SQLModel 统一 ORM Model 和 Pydantic Schema
"""
from .base import SQLModelBase, TimestampMixin, AdminBrief
from .admin import AdminUser, AdminRole, AdminIdentity, LoginRequest
from .job import JobVacancy, JobType, JobVacancyCreate, JobVacancyUpdate, JobVacancyResponse, JobBrief
from .application import (
    Application, StatusHistory, ApplicationStatus, SUBMISSION_NOTE,
    ApplicationCreate, ApplicationUpdate, ApplicationSubmitted,
    ApplicationListResponse, ApplicationDetailResponse, ApplicationStatusResponse,
    StatusHistoryResponse,
)
from .blog import (
    BlogPost, BlogMedia, BlogCategory, ContentStatus, MediaType,
    BlogMediaItem, BlogPostCreate, BlogPostUpdate, BlogPostListResponse, BlogPostResponse,
)
from .testimonial import (
    Testimonial, TestimonialMediaType, TestimonialCreate, TestimonialUpdate, TestimonialResponse,
)
from .audit import AuditLog, AuditAction

__all__ = [
    # Base
    "SQLModelBase",
    "TimestampMixin",
    "AdminBrief",
    # Admin
    "AdminUser",
    "AdminRole",
    "AdminIdentity",
    "LoginRequest",
    # Job
    "JobVacancy",
    "JobType",
    "JobVacancyCreate",
    "JobVacancyUpdate",
    "JobVacancyResponse",
    "JobBrief",
    # Application
    "Application",
    "StatusHistory",
    "ApplicationStatus",
    "SUBMISSION_NOTE",
    "ApplicationCreate",
    "ApplicationUpdate",
    "ApplicationSubmitted",
    "ApplicationListResponse",
    "ApplicationDetailResponse",
    "ApplicationStatusResponse",
    "StatusHistoryResponse",
    # Blog
    "BlogPost",
    "BlogMedia",
    "BlogCategory",
    "ContentStatus",
    "MediaType",
    "BlogMediaItem",
    "BlogPostCreate",
    "BlogPostUpdate",
    "BlogPostListResponse",
    "BlogPostResponse",
    # Testimonial
    "Testimonial",
    "TestimonialMediaType",
    "TestimonialCreate",
    "TestimonialUpdate",
    "TestimonialResponse",
    # Audit
    "AuditLog",
    "AuditAction",
]
