"""
管理员与审计日志 CRUD 操作
"""
from typing import Optional
from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from careers.core.security import get_password_hash
from careers.models.admin import AdminUser, AdminRole
from careers.models.audit import AuditLog
from careers.models.base import utcnow
from .base import CRUDBase


class CRUDAdminUser(CRUDBase[AdminUser]):
    """管理员 CRUD 操作类"""

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[AdminUser]:
        """按邮箱查找（不区分大小写）"""
        result = await db.execute(
            select(self.model).where(func.lower(self.model.email) == email.lower())
        )
        return result.scalar_one_or_none()

    async def create_admin(
        self,
        db: AsyncSession,
        *,
        email: str,
        name: str,
        password: str,
        role: str = AdminRole.ADMIN.value,
        is_active: bool = True,
    ) -> AdminUser:
        """创建管理员（密码以 bcrypt 哈希保存）"""
        return await self.create(db, obj_in={
            "email": email.lower(),
            "name": name,
            "password_hash": get_password_hash(password),
            "role": role,
            "is_active": is_active,
        })

    async def mark_login(self, db: AsyncSession, admin: AdminUser) -> None:
        """记录最近登录时间"""
        admin.last_login = utcnow()
        await db.flush()


class CRUDAuditLog(CRUDBase[AuditLog]):
    """审计日志 CRUD 操作类"""

    async def record(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        action: str,
        entity_type: str,
        entity_id: str,
        changes: Optional[dict] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> AuditLog:
        """写入一条审计日志"""
        log = AuditLog(
            user_id=user_id,
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            changes=changes,
            ip_address=ip_address,
            user_agent=user_agent,
        )
        db.add(log)
        await db.flush()
        return log

    async def list_for_user(self, db: AsyncSession, user_id: str) -> list[AuditLog]:
        """某管理员的审计记录（时间倒序）"""
        result = await db.execute(
            select(self.model)
            .where(self.model.user_id == user_id)
            .order_by(self.model.timestamp.desc())
        )
        return list(result.scalars().all())


admin_crud = CRUDAdminUser(AdminUser)
audit_crud = CRUDAuditLog(AuditLog)
