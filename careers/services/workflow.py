"""
求职申请状态流转服务

所有状态变更都经由 ApplicationWorkflow.transition 完成，
保证每次变更都会追加一条 StatusHistory 记录。
"""
from typing import Dict, FrozenSet, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from careers.core.exceptions import BadRequestException, ConflictException, NotFoundException
from careers.crud import application_crud, job_crud
from careers.models.application import (
    Application,
    ApplicationCreate,
    ApplicationStatus,
    StatusHistory,
    SUBMISSION_NOTE,
)
from careers.models.base import utcnow

_ALL_STATUSES: FrozenSet[ApplicationStatus] = frozenset(ApplicationStatus)

# 状态流转白名单：目前任意状态之间（含自身）都允许切换
ALLOWED_TRANSITIONS: Dict[ApplicationStatus, FrozenSet[ApplicationStatus]] = {
    status: _ALL_STATUSES for status in ApplicationStatus
}


def can_transition(current: str, target: str) -> bool:
    """判断 current -> target 是否在白名单内"""
    try:
        current_status = ApplicationStatus(current)
        target_status = ApplicationStatus(target)
    except ValueError:
        return False
    return target_status in ALLOWED_TRANSITIONS.get(current_status, frozenset())


class ApplicationWorkflow:
    """
    申请生命周期

    - submit: 公开提交，初始状态 PENDING 并写入首条历史
    - transition: 管理员变更状态，追加历史
    - remove: 硬删除，历史随之级联删除

    只 flush 不 commit，事务边界由调用方（get_db）控制。
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def submit(self, data: ApplicationCreate) -> Application:
        """
        提交新申请

        不发送通知邮件；需要通知候选人/管理员时在 flush 之后接入
        """
        if await application_crud.get_by_email(self.db, data.email):
            raise ConflictException("An application with this email already exists")

        if data.job_id and not await job_crud.get(self.db, data.job_id):
            raise NotFoundException(f"Job vacancy not found: {data.job_id}")

        application = Application(
            **data.model_dump(exclude={"job_id"}),
            job_id=data.job_id,
            status=ApplicationStatus.PENDING.value,
        )
        application.status_history.append(StatusHistory(
            status=ApplicationStatus.PENDING.value,
            changed_by=None,
            notes=SUBMISSION_NOTE,
        ))
        self.db.add(application)
        await self.db.flush()

        logger.info(f"新申请已提交: {application.id} ({application.email})")
        return application

    async def transition(
        self,
        application_id: str,
        new_status: str,
        admin_id: Optional[str],
        notes: Optional[str] = None,
    ) -> Application:
        """
        变更申请状态

        同状态也会记录一条历史；notes 为 None 时保留原审核备注
        """
        try:
            target = ApplicationStatus(new_status)
        except ValueError:
            raise BadRequestException(f"Invalid status: {new_status}")

        application = await application_crud.get(self.db, application_id)
        if not application:
            raise NotFoundException(f"Application not found: {application_id}")

        previous = application.status
        if not can_transition(previous, target.value):
            raise BadRequestException(f"Cannot change status from {previous} to {target.value}")

        application.status = target.value
        if admin_id is not None:
            application.reviewed_by = admin_id
        if notes is not None:
            application.review_notes = notes
        application.updated_at = utcnow()

        application.status_history.append(StatusHistory(
            status=target.value,
            changed_by=admin_id,
            notes=notes,
        ))
        await self.db.flush()

        logger.info(f"申请状态变更: {application_id} {previous} -> {target.value} (by {admin_id})")
        return application

    async def remove(self, application_id: str) -> Application:
        """硬删除申请，返回被删除的对象（用于后续清理文件）"""
        application = await application_crud.get(self.db, application_id)
        if not application:
            raise NotFoundException(f"Application not found: {application_id}")

        await self.db.delete(application)
        await self.db.flush()

        logger.info(f"申请已删除: {application_id}")
        return application
