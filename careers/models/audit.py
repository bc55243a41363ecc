"""
审计日志模型模块

记录管理员的登录、登出等操作
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Column as SAColumn, String, ForeignKey
from sqlmodel import Field, Column, JSON

from .base import IDMixin, utcnow


class AuditAction(str, Enum):
    """审计动作"""
    SIGN_IN = "SIGN_IN"
    SIGN_OUT = "SIGN_OUT"


class AuditLog(IDMixin, table=True):
    """审计日志表"""
    __tablename__ = "audit_logs"

    user_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("admin_users.id", ondelete="CASCADE"), nullable=False, index=True),
        description="管理员ID"
    )
    action: str = Field(..., max_length=50, description="动作")
    entity_type: str = Field(..., max_length=50, description="实体类型")
    entity_id: str = Field(..., max_length=36, description="实体ID")
    changes: Optional[dict] = Field(default=None, sa_column=Column(JSON), description="变更内容")
    ip_address: Optional[str] = Field(None, max_length=64)
    user_agent: Optional[str] = Field(None, max_length=500)
    timestamp: datetime = Field(default_factory=utcnow, nullable=False, index=True)
