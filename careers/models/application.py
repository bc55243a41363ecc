"""
求职申请模型模块

Application 记录候选人通过公开表单提交的申请，
StatusHistory 是其状态变更的只追加审计记录
"""
from datetime import date, datetime
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

from pydantic import EmailStr, ValidationInfo, field_validator
from sqlalchemy import Column as SAColumn, String, ForeignKey
from sqlmodel import Field, Relationship

from careers.core.storage import DOCUMENTS_DIR, is_upload_url

from .base import SQLModelBase, TimestampMixin, IDMixin, TimestampResponse, AdminBrief, utcnow, optional_str
from .job import JobBrief

if TYPE_CHECKING:
    from .admin import AdminUser
    from .job import JobVacancy


class ApplicationStatus(str, Enum):
    """申请状态枚举"""
    PENDING = "PENDING"        # 待处理
    REVIEWING = "REVIEWING"    # 审核中
    APPROVED = "APPROVED"      # 已通过
    REJECTED = "REJECTED"      # 已拒绝


SUBMISSION_NOTE = "Application submitted via public form"


# ==================== 基础字段定义 ====================

class ApplicationBase(SQLModelBase):
    """申请基础字段"""
    # 个人信息
    full_name: str = Field(..., min_length=2, max_length=100, description="姓名")
    email: str = Field(..., max_length=255, description="邮箱")
    phone: str = Field(..., min_length=10, max_length=20, description="电话")
    nationality: str = Field(..., min_length=2, max_length=100, description="国籍")
    residence: str = Field(..., min_length=2, max_length=100, description="现居国家")
    religion: str = Field(..., min_length=2, max_length=100, description="宗教")
    marital_status: str = Field(..., min_length=2, max_length=50, description="婚姻状况")

    # 护照
    has_passport: bool = Field(..., description="是否持有护照")
    passport_number: Optional[str] = Field(None, min_length=5, max_length=50, description="护照号")

    # 求职意向
    start_date: date = Field(..., description="可入职日期")

    # 教育与材料
    education_level: str = Field(..., min_length=2, max_length=50, description="学历")
    tor_file: Optional[str] = Field(None, max_length=500, description="成绩单文件URL")
    diploma_file: Optional[str] = Field(None, max_length=500, description="毕业证文件URL")
    resume_file: Optional[str] = Field(None, max_length=500, description="简历文件URL")

    # 经验与技能
    has_experience: bool = Field(..., description="是否有相关经验")
    experience: Optional[str] = Field(None, min_length=10, max_length=2000, description="经验描述")
    languages: str = Field(..., min_length=2, max_length=200, description="语言")
    english_level: str = Field(..., min_length=2, max_length=50, description="英语水平")
    skills: Optional[str] = Field(None, max_length=1000, description="技能")

    # 其他
    motivation: str = Field(..., min_length=20, max_length=2000, description="求职动机")
    referral_source: str = Field(..., min_length=2, max_length=50, description="了解渠道")
    consent: bool = Field(..., description="是否同意条款")


# ==================== 表模型 ====================

class Application(ApplicationBase, TimestampMixin, IDMixin, table=True):
    """求职申请表模型"""
    __tablename__ = "applications"

    email: str = Field(..., max_length=255, unique=True, index=True, description="邮箱")
    status: str = Field(ApplicationStatus.PENDING.value, max_length=20, index=True, description="申请状态")
    review_notes: Optional[str] = Field(None, max_length=1000, description="审核备注")

    reviewed_by: Optional[str] = Field(
        default=None,
        sa_column=SAColumn(String, ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True),
        description="最近处理的管理员ID"
    )
    job_id: Optional[str] = Field(
        default=None,
        sa_column=SAColumn(String, ForeignKey("job_vacancies.id", ondelete="SET NULL"), nullable=True, index=True),
        description="申请的岗位ID"
    )

    # 关联关系
    status_history: List["StatusHistory"] = Relationship(
        back_populates="application",
        sa_relationship_kwargs={
            "lazy": "selectin",
            "cascade": "all, delete-orphan",
            "order_by": "StatusHistory.changed_at",
        }
    )
    reviewer: Optional["AdminUser"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})
    job: Optional["JobVacancy"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})

    def __repr__(self) -> str:
        return f"<Application(id={self.id}, status={self.status})>"


class StatusHistory(IDMixin, table=True):
    """申请状态变更记录表（只追加）"""
    __tablename__ = "status_history"

    application_id: str = Field(
        sa_column=SAColumn(String, ForeignKey("applications.id", ondelete="CASCADE"), nullable=False, index=True),
        description="申请ID"
    )
    status: str = Field(..., max_length=20, description="变更后的状态")
    changed_by: Optional[str] = Field(
        default=None,
        sa_column=SAColumn(String, ForeignKey("admin_users.id", ondelete="SET NULL"), nullable=True),
        description="操作管理员ID，公开提交时为空"
    )
    notes: Optional[str] = Field(None, max_length=1000, description="备注")
    changed_at: datetime = Field(default_factory=utcnow, nullable=False, description="变更时间")

    application: Optional[Application] = Relationship(back_populates="status_history")
    admin: Optional["AdminUser"] = Relationship(sa_relationship_kwargs={"lazy": "selectin"})


# ==================== 请求 Schema ====================

class ApplicationCreate(ApplicationBase):
    """公开表单提交"""
    model_config = {**SQLModelBase.model_config, "validate_default": True}

    email: EmailStr = Field(..., description="邮箱")
    job_id: Optional[str] = Field(None, max_length=36, description="申请的岗位ID")

    @field_validator(
        "passport_number", "tor_file", "diploma_file", "resume_file",
        "experience", "skills", "job_id",
        mode="before",
    )
    @classmethod
    def empty_to_none(cls, v):
        return optional_str(v)

    @field_validator("tor_file", "diploma_file", "resume_file")
    @classmethod
    def require_uploaded_document(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_upload_url(v, DOCUMENTS_DIR):
            raise ValueError("Document must be a file uploaded through the document upload endpoint")
        return v

    @field_validator("passport_number")
    @classmethod
    def require_passport_number(cls, v, info: ValidationInfo):
        if info.data.get("has_passport") and not v:
            raise ValueError("Passport number is required when you have a passport")
        return v

    @field_validator("experience")
    @classmethod
    def require_experience(cls, v, info: ValidationInfo):
        if info.data.get("has_experience") and not v:
            raise ValueError("Please describe your experience")
        return v

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return v.lower()

    @field_validator("consent")
    @classmethod
    def require_consent(cls, v: bool) -> bool:
        if v is not True:
            raise ValueError("You must agree to the terms and privacy policy")
        return v


class ApplicationUpdate(SQLModelBase):
    """管理员更新申请状态/备注"""
    status: Optional[ApplicationStatus] = None
    review_notes: Optional[str] = Field(None, max_length=1000)


# ==================== 响应 Schema ====================

class ApplicationSubmitted(SQLModelBase):
    """提交成功响应"""
    id: str
    email: str
    message: str = "Application submitted successfully"


class StatusHistoryResponse(SQLModelBase):
    """状态变更记录"""
    id: str
    status: str
    notes: Optional[str]
    changed_at: datetime
    admin: Optional[AdminBrief] = None


class ApplicationListResponse(TimestampResponse):
    """申请列表项"""
    full_name: str
    email: str
    phone: str
    nationality: str
    residence: str
    education_level: str
    english_level: str
    start_date: date
    status: str
    job_id: Optional[str]
    job: Optional[JobBrief] = None


class ApplicationDetailResponse(ApplicationListResponse):
    """申请详情（含状态历史）"""
    religion: str
    marital_status: str
    has_passport: bool
    passport_number: Optional[str]
    tor_file: Optional[str]
    diploma_file: Optional[str]
    resume_file: Optional[str]
    has_experience: bool
    experience: Optional[str]
    languages: str
    skills: Optional[str]
    motivation: str
    referral_source: str
    consent: bool
    review_notes: Optional[str]
    reviewed_by: Optional[str]
    reviewer: Optional[AdminBrief] = None
    status_history: List[StatusHistoryResponse] = []


class ApplicationStatusResponse(SQLModelBase):
    """状态更新结果"""
    id: str
    status: str
    review_notes: Optional[str]
    updated_at: datetime
