"""
岗位模型模块 - SQLModel 版本
"""
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Column as SAColumn, String, ForeignKey, Text
from sqlmodel import Field

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse


class JobType(str, Enum):
    """岗位类型"""
    FULL_TIME = "FULL_TIME"
    CONTRACT = "CONTRACT"
    SUBSTITUTE = "SUBSTITUTE"


# ==================== 基础字段定义 ====================

class JobVacancyBase(SQLModelBase):
    """岗位基础字段"""
    title: str = Field(..., min_length=3, max_length=200, description="岗位名称")
    description: str = Field(..., min_length=50, description="岗位描述")
    company_name: str = Field(..., min_length=2, max_length=100, description="招聘单位")
    location: str = Field(..., min_length=2, max_length=100, description="工作地点")
    salary_range: Optional[str] = Field(None, max_length=100, description="薪资范围")
    requirements: str = Field(..., min_length=20, description="任职要求")
    job_type: JobType = Field(JobType.FULL_TIME, description="岗位类型")
    application_deadline: Optional[datetime] = Field(None, description="截止日期")
    is_active: bool = Field(default=True, description="是否开放")


# ==================== 表模型 ====================

class JobVacancy(JobVacancyBase, TimestampMixin, IDMixin, table=True):
    """岗位表模型"""
    __tablename__ = "job_vacancies"

    description: str = Field(sa_column=SAColumn(Text, nullable=False), description="岗位描述")
    requirements: str = Field(sa_column=SAColumn(Text, nullable=False), description="任职要求")
    job_type: str = Field(JobType.FULL_TIME.value, max_length=20, index=True, description="岗位类型")
    is_active: bool = Field(default=True, index=True, description="是否开放")
    created_by: Optional[str] = Field(
        default=None,
        sa_column=SAColumn(String, ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True),
        description="创建人"
    )

    def __repr__(self) -> str:
        return f"<JobVacancy(id={self.id}, title={self.title})>"


# ==================== 请求 Schema ====================

class JobVacancyCreate(JobVacancyBase):
    """创建岗位请求"""
    pass


class JobVacancyUpdate(SQLModelBase):
    """更新岗位请求 - 所有字段可选"""
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = Field(None, min_length=50)
    company_name: Optional[str] = Field(None, min_length=2, max_length=100)
    location: Optional[str] = Field(None, min_length=2, max_length=100)
    salary_range: Optional[str] = Field(None, max_length=100)
    requirements: Optional[str] = Field(None, min_length=20)
    job_type: Optional[JobType] = None
    application_deadline: Optional[datetime] = None
    is_active: Optional[bool] = None


# ==================== 响应 Schema ====================

class JobBrief(SQLModelBase):
    """岗位简要信息（嵌入申请响应）"""
    id: str
    title: str
    company_name: str
    location: str


class JobVacancyResponse(TimestampResponse):
    """岗位详情响应"""
    title: str
    description: str
    company_name: str
    location: str
    salary_range: Optional[str]
    requirements: str
    job_type: str
    application_deadline: Optional[datetime]
    is_active: bool
    application_count: int = Field(0, description="申请数量")
