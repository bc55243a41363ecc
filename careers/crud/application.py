"""
求职申请 CRUD 操作
"""
from datetime import datetime
from typing import Optional, List, Tuple, Dict
from sqlalchemy import select, func, or_, update
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.application import Application, ApplicationStatus
from .base import CRUDBase

# 允许排序的字段
SORT_FIELDS = {
    "created_at": Application.created_at,
    "updated_at": Application.updated_at,
    "full_name": Application.full_name,
    "residence": Application.residence,
}


class CRUDApplication(CRUDBase[Application]):
    """求职申请 CRUD 操作类"""

    async def get_by_email(self, db: AsyncSession, email: str) -> Optional[Application]:
        """按邮箱查找（不区分大小写）"""
        result = await db.execute(
            select(self.model).where(func.lower(self.model.email) == email.lower())
        )
        return result.scalar_one_or_none()

    def _filtered(
        self,
        query,
        *,
        status: Optional[str] = None,
        search: Optional[str] = None,
        job_id: Optional[str] = None,
    ):
        if status:
            query = query.where(self.model.status == status)
        if job_id:
            query = query.where(self.model.job_id == job_id)
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(
                self.model.full_name.ilike(pattern),
                self.model.email.ilike(pattern),
                self.model.nationality.ilike(pattern),
                self.model.residence.ilike(pattern),
            ))
        return query

    async def get_page(
        self,
        db: AsyncSession,
        *,
        page: int = 1,
        page_size: int = 25,
        status: Optional[str] = None,
        search: Optional[str] = None,
        job_id: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: str = "desc",
    ) -> Tuple[List[Application], int]:
        """分页查询申请，返回 (当前页, 总数)"""
        filters = {"status": status, "search": search, "job_id": job_id}

        column = SORT_FIELDS.get(sort_by, self.model.created_at)
        order = column.asc() if sort_order == "asc" else column.desc()
        query = self._filtered(select(self.model), **filters).order_by(order, self.model.id)
        return await self.paginate(db, query, page=page, page_size=page_size)

    async def count_by_status(self, db: AsyncSession) -> Dict[str, int]:
        """按状态统计数量，未出现的状态计 0"""
        result = await db.execute(
            select(self.model.status, func.count()).group_by(self.model.status)
        )
        counts = {status.value: 0 for status in ApplicationStatus}
        for status, count in result.all():
            counts[status] = count
        return counts

    async def count_since(self, db: AsyncSession, since: datetime) -> int:
        """统计某时间之后提交的数量"""
        result = await db.execute(
            select(func.count()).select_from(self.model).where(self.model.created_at >= since)
        )
        return result.scalar() or 0

    async def count_by_job(self, db: AsyncSession, job_ids: List[str]) -> Dict[str, int]:
        """统计各岗位的申请数量"""
        if not job_ids:
            return {}
        result = await db.execute(
            select(self.model.job_id, func.count())
            .where(self.model.job_id.in_(job_ids))
            .group_by(self.model.job_id)
        )
        return {job_id: count for job_id, count in result.all()}

    async def top_values(self, db: AsyncSession, column_name: str, limit: int = 10) -> List[Tuple[str, int]]:
        """某字段取值的数量排行"""
        column = getattr(self.model, column_name)
        result = await db.execute(
            select(column, func.count().label("count"))
            .group_by(column)
            .order_by(func.count().desc(), column)
            .limit(limit)
        )
        return [(value, count) for value, count in result.all()]

    async def created_since(self, db: AsyncSession, since: datetime) -> List[datetime]:
        """某时间之后的全部提交时间"""
        result = await db.execute(
            select(self.model.created_at).where(self.model.created_at >= since)
        )
        return list(result.scalars().all())

    async def detach_job(self, db: AsyncSession, job_id: str) -> None:
        """岗位删除前解除申请与岗位的关联"""
        await db.execute(
            update(self.model).where(self.model.job_id == job_id).values(job_id=None)
        )


application_crud = CRUDApplication(Application)
