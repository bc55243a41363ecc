"""
客户评价模型模块
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import field_validator
from sqlalchemy import Column as SAColumn, String, ForeignKey
from sqlmodel import Field

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse, optional_str
from .blog import ContentStatus


class TestimonialMediaType(str, Enum):
    """评价附带媒体类型"""
    PHOTO = "PHOTO"
    VIDEO = "VIDEO"


# ==================== 基础字段定义 ====================

class TestimonialBase(SQLModelBase):
    """评价基础字段"""
    name: str = Field(..., min_length=2, max_length=100, description="姓名")
    title: str = Field(..., min_length=2, max_length=100, description="职位/身份")
    comment: str = Field(..., min_length=10, max_length=1000, description="评价内容")
    rating: float = Field(5.0, ge=0, le=5, description="评分")
    media_url: Optional[str] = Field(None, max_length=500, description="照片或视频URL")
    media_type: Optional[TestimonialMediaType] = Field(None, description="媒体类型")
    thumbnail_url: Optional[str] = Field(None, max_length=500, description="视频缩略图URL")
    status: ContentStatus = Field(ContentStatus.DRAFT, description="发布状态")
    order: int = Field(0, ge=0, description="排序，越小越靠前")


# ==================== 表模型 ====================

class Testimonial(TestimonialBase, TimestampMixin, IDMixin, table=True):
    """客户评价表模型"""
    __tablename__ = "testimonials"

    media_type: Optional[str] = Field(None, max_length=10, description="媒体类型")
    status: str = Field(ContentStatus.DRAFT.value, max_length=20, index=True, description="发布状态")
    published_at: Optional[datetime] = Field(None, description="首次发布时间")
    created_by: Optional[str] = Field(
        default=None,
        sa_column=SAColumn(String, ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True),
        description="创建人"
    )

    def __repr__(self) -> str:
        return f"<Testimonial(id={self.id}, name={self.name})>"


# ==================== 请求 Schema ====================

class TestimonialCreate(TestimonialBase):
    """创建评价请求"""

    @field_validator("media_url", "thumbnail_url", mode="before")
    @classmethod
    def empty_to_none(cls, v):
        return optional_str(v)


class TestimonialUpdate(SQLModelBase):
    """更新评价请求 - 所有字段可选"""
    name: Optional[str] = Field(None, min_length=2, max_length=100)
    title: Optional[str] = Field(None, min_length=2, max_length=100)
    comment: Optional[str] = Field(None, min_length=10, max_length=1000)
    rating: Optional[float] = Field(None, ge=0, le=5)
    media_url: Optional[str] = Field(None, max_length=500)
    media_type: Optional[TestimonialMediaType] = None
    thumbnail_url: Optional[str] = Field(None, max_length=500)
    status: Optional[ContentStatus] = None
    order: Optional[int] = Field(None, ge=0)


# ==================== 响应 Schema ====================

class TestimonialResponse(TimestampResponse):
    """评价响应"""
    name: str
    title: str
    comment: str
    rating: float
    media_url: Optional[str]
    media_type: Optional[str]
    thumbnail_url: Optional[str]
    status: str
    order: int
    published_at: Optional[datetime]
