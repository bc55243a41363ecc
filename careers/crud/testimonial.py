"""
客户评价 CRUD 操作
"""
from typing import Optional, List, Tuple
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.testimonial import Testimonial
from .base import CRUDBase


class CRUDTestimonial(CRUDBase[Testimonial]):
    """客户评价 CRUD 操作类"""

    async def get_page(
        self,
        db: AsyncSession,
        *,
        page: int = 1,
        page_size: int = 20,
        status: Optional[str] = None,
    ) -> Tuple[List[Testimonial], int]:
        """分页查询，按 order 升序、创建时间倒序"""
        query = select(self.model)
        if status and status != "all":
            query = query.where(self.model.status == status)

        query = query.order_by(self.model.order.asc(), self.model.created_at.desc())
        return await self.paginate(db, query, page=page, page_size=page_size)


testimonial_crud = CRUDTestimonial(Testimonial)
