"""
博客文章模型模块
"""
import re
from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import Column as SAColumn, String, ForeignKey, Text
from pydantic import field_validator
from sqlmodel import Field, Relationship

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse


class ContentStatus(str, Enum):
    """内容发布状态（博客与客户评价共用）"""
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class BlogCategory(str, Enum):
    """博客分类"""
    TEACHING = "TEACHING"
    VISAS = "VISAS"
    RELOCATION = "RELOCATION"
    CAREER_TIPS = "CAREER_TIPS"
    INTERVIEWS = "INTERVIEWS"
    CULTURE = "CULTURE"


class MediaType(str, Enum):
    """文章附带媒体类型"""
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"


SLUG_PATTERN = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")


def check_slug(value: Optional[str]) -> Optional[str]:
    """slug 只允许小写字母、数字和单个连字符分隔"""
    if value is not None and not SLUG_PATTERN.match(value):
        raise ValueError("Slug must be URL-friendly (lowercase letters, numbers and hyphens)")
    return value


# ==================== 嵌套 Schema ====================

class BlogMediaItem(SQLModelBase):
    """文章媒体项"""
    url: str = Field(..., min_length=1, max_length=500)
    type: MediaType = MediaType.IMAGE
    caption: Optional[str] = Field(None, max_length=300)
    order: int = Field(0, ge=0)


# ==================== 基础字段定义 ====================

class BlogPostBase(SQLModelBase):
    """文章基础字段"""
    slug: str = Field(..., min_length=3, max_length=200, description="URL 标识")
    title: str = Field(..., min_length=3, max_length=200, description="标题")
    excerpt: str = Field(..., min_length=10, max_length=500, description="摘要")
    content: str = Field(..., min_length=50, description="正文(HTML)")
    cover_image: str = Field(..., min_length=1, max_length=500, description="封面图URL")
    category: BlogCategory = Field(..., description="分类")
    status: ContentStatus = Field(ContentStatus.DRAFT, description="发布状态")
    read_time: str = Field("5 min read", max_length=50, description="阅读时长")
    meta_title: Optional[str] = Field(None, max_length=60, description="SEO 标题")
    meta_description: Optional[str] = Field(None, max_length=160, description="SEO 描述")
    published_at: Optional[datetime] = Field(None, description="发布时间")


# ==================== 表模型 ====================

class BlogPost(BlogPostBase, TimestampMixin, IDMixin, table=True):
    """博客文章表模型"""
    __tablename__ = "blog_posts"

    slug: str = Field(..., max_length=200, unique=True, index=True, description="URL 标识")
    content: str = Field(sa_column=SAColumn(Text, nullable=False), description="正文(HTML)")
    category: str = Field(..., max_length=30, index=True, description="分类")
    status: str = Field(ContentStatus.DRAFT.value, max_length=20, index=True, description="发布状态")
    author: str = Field(..., max_length=100, description="作者署名")
    views: int = Field(default=0, description="浏览量")
    author_id: Optional[str] = Field(
        default=None,
        sa_column=SAColumn(String, ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True),
        description="创建文章的管理员"
    )

    media: List["BlogMedia"] = Relationship(
        back_populates="post",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "BlogMedia.order",
        }
    )

    def __repr__(self) -> str:
        return f"<BlogPost(id={self.id}, slug={self.slug})>"


class BlogMedia(IDMixin, table=True):
    """文章媒体表"""
    __tablename__ = "blog_media"

    post_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("blog_posts.id", ondelete="CASCADE"), nullable=False, index=True),
        description="文章ID"
    )
    url: str = Field(..., max_length=500)
    type: str = Field(MediaType.IMAGE.value, max_length=10)
    caption: Optional[str] = Field(None, max_length=300)
    order: int = Field(default=0)

    post: Optional[BlogPost] = Relationship(back_populates="media")


# ==================== 请求 Schema ====================

class BlogPostCreate(BlogPostBase):
    """创建文章请求"""
    author: Optional[str] = Field(None, min_length=2, max_length=100, description="作者署名，缺省为当前管理员")
    media: List[BlogMediaItem] = Field(default_factory=list)

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v):
        return check_slug(v)


class BlogPostUpdate(SQLModelBase):
    """更新文章请求 - 所有字段可选；media 传入时整体替换"""
    slug: Optional[str] = Field(None, min_length=3, max_length=200)
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    excerpt: Optional[str] = Field(None, min_length=10, max_length=500)
    content: Optional[str] = Field(None, min_length=50)
    cover_image: Optional[str] = Field(None, min_length=1, max_length=500)
    category: Optional[BlogCategory] = None
    status: Optional[ContentStatus] = None
    author: Optional[str] = Field(None, min_length=2, max_length=100)
    read_time: Optional[str] = Field(None, max_length=50)
    meta_title: Optional[str] = Field(None, max_length=60)
    meta_description: Optional[str] = Field(None, max_length=160)
    published_at: Optional[datetime] = None
    media: Optional[List[BlogMediaItem]] = None

    @field_validator("slug")
    @classmethod
    def validate_slug(cls, v):
        return check_slug(v)


# ==================== 响应 Schema ====================

class BlogMediaResponse(SQLModelBase):
    id: str
    url: str
    type: str
    caption: Optional[str]
    order: int


class BlogPostListResponse(TimestampResponse):
    """文章列表项"""
    slug: str
    title: str
    excerpt: str
    cover_image: str
    category: str
    status: str
    author: str
    read_time: str
    views: int
    published_at: Optional[datetime]


class BlogPostResponse(BlogPostListResponse):
    """文章详情"""
    content: str
    meta_title: Optional[str]
    meta_description: Optional[str]
    author_id: Optional[str]
    media: List[BlogMediaResponse] = []
