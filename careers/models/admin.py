"""
管理员模型模块
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import EmailStr
from sqlmodel import Field

from .base import SQLModelBase, TimestampMixin, IDMixin


class AdminRole(str, Enum):
    """管理员角色"""
    ADMIN = "ADMIN"
    SUPER_ADMIN = "SUPER_ADMIN"


# ==================== 表模型 ====================

class AdminUser(TimestampMixin, IDMixin, table=True):
    """管理员表模型"""
    __tablename__ = "admin_users"

    email: str = Field(..., max_length=255, unique=True, index=True, description="登录邮箱")
    name: str = Field(..., max_length=100, description="姓名")
    password_hash: str = Field(..., description="bcrypt 密码哈希")
    role: str = Field(AdminRole.ADMIN.value, max_length=20, description="角色")
    is_active: bool = Field(default=True, description="是否启用")
    last_login: Optional[datetime] = Field(None, description="最近登录时间")

    def __repr__(self) -> str:
        return f"<AdminUser(id={self.id}, email={self.email})>"


# ==================== 请求 Schema ====================

class LoginRequest(SQLModelBase):
    """登录请求"""
    email: EmailStr
    password: str = Field(..., min_length=1, max_length=200)


# ==================== 响应 Schema ====================

class AdminIdentity(SQLModelBase):
    """会话中的管理员身份"""
    id: str
    email: str
    name: str
    role: str
