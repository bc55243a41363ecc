"""
博客文章 CRUD 操作
"""
from typing import Optional, List, Tuple
from sqlalchemy import select, or_, update
from sqlalchemy.ext.asyncio import AsyncSession

from careers.models.blog import BlogPost, BlogMedia, BlogMediaItem, ContentStatus
from .base import CRUDBase


class CRUDBlogPost(CRUDBase[BlogPost]):
    """博客文章 CRUD 操作类"""

    async def get_by_slug(
        self,
        db: AsyncSession,
        slug: str,
        *,
        published_only: bool = False,
    ) -> Optional[BlogPost]:
        """按 slug 查询"""
        query = select(self.model).where(self.model.slug == slug)
        if published_only:
            query = query.where(self.model.status == ContentStatus.PUBLISHED.value)
        result = await db.execute(query)
        return result.scalar_one_or_none()

    async def slug_taken(self, db: AsyncSession, slug: str, exclude_id: Optional[str] = None) -> bool:
        """slug 是否已被其他文章占用"""
        query = select(self.model.id).where(self.model.slug == slug)
        if exclude_id:
            query = query.where(self.model.id != exclude_id)
        result = await db.execute(query)
        return result.first() is not None

    def _filtered(self, query, *, category=None, status=None, search=None):
        if category and category != "all":
            query = query.where(self.model.category == category)
        if status and status != "all":
            query = query.where(self.model.status == status)
        if search:
            pattern = f"%{search}%"
            query = query.where(or_(
                self.model.title.ilike(pattern),
                self.model.excerpt.ilike(pattern),
                self.model.content.ilike(pattern),
            ))
        return query

    async def get_page(
        self,
        db: AsyncSession,
        *,
        page: int = 1,
        page_size: int = 10,
        category: Optional[str] = None,
        status: Optional[str] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[BlogPost], int]:
        """分页查询文章，按发布时间倒序"""
        filters = {"category": category, "status": status, "search": search}
        query = self._filtered(select(self.model), **filters).order_by(
            self.model.published_at.desc().nulls_last(),
            self.model.created_at.desc(),
        )
        return await self.paginate(db, query, page=page, page_size=page_size)

    async def increment_views(self, db: AsyncSession, post: BlogPost) -> None:
        """浏览量 +1（数据库端自增）"""
        await db.execute(
            update(self.model)
            .where(self.model.id == post.id)
            .values(views=self.model.views + 1)
            .execution_options(synchronize_session=False)
        )
        post.views = (post.views or 0) + 1

    def build_media(self, items: List[BlogMediaItem]) -> List[BlogMedia]:
        """由请求中的媒体项构造表对象"""
        return [
            BlogMedia(url=item.url, type=item.type, caption=item.caption, order=item.order)
            for item in items
        ]


blog_crud = CRUDBlogPost(BlogPost)
