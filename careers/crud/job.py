"""
岗位 CRUD 操作
"""
from typing import Optional, List, Tuple
from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.job import JobVacancy
from .base import CRUDBase


class CRUDJobVacancy(CRUDBase[JobVacancy]):
    """岗位 CRUD 操作类"""

    def _filtered(
        self,
        query,
        *,
        active_only: bool,
        job_type: Optional[str] = None,
        location: Optional[str] = None,
        search: Optional[str] = None,
    ):
        if active_only:
            query = query.where(self.model.is_active == True)  # noqa: E712
        if job_type and job_type != "all":
            query = query.where(self.model.job_type == job_type)
        if location:
            query = query.where(self.model.location.ilike(f"%{location}%"))
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(
                self.model.title.ilike(pattern),
                self.model.description.ilike(pattern),
                self.model.company_name.ilike(pattern),
            ))
        return query

    async def get_page(
        self,
        db: AsyncSession,
        *,
        page: int = 1,
        page_size: int = 10,
        active_only: bool = True,
        job_type: Optional[str] = None,
        location: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[JobVacancy], int]:
        """分页查询岗位，返回 (当前页, 总数)"""
        filters = {
            "active_only": active_only,
            "job_type": job_type,
            "location": location,
            "search": search,
        }
        query = self._filtered(select(self.model), **filters).order_by(
            self.model.created_at.desc(), self.model.id
        )
        return await self.paginate(db, query, page=page, page_size=page_size)


job_crud = CRUDJobVacancy(JobVacancy)
