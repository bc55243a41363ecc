"""
CRUD 基类模块

各资源的 CRUD 单例都继承 CRUDBase，只 flush 不 commit，
事务由 get_db 或调用方统一提交。
"""
from typing import Generic, TypeVar, Type, Optional, List, Any, Dict, Tuple
from sqlalchemy import Select, select, func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import SQLModel

from careers.models.base import utcnow

ModelType = TypeVar("ModelType", bound=SQLModel)
CreateSchemaType = TypeVar("CreateSchemaType", bound=SQLModel)
UpdateSchemaType = TypeVar("UpdateSchemaType", bound=SQLModel)


class CRUDBase(Generic[ModelType]):
    """按主键读写单个模型，外加通用分页"""

    def __init__(self, model: Type[ModelType]):
        self.model = model

    async def get(self, db: AsyncSession, id: str) -> Optional[ModelType]:
        result = await db.execute(
            select(self.model).where(self.model.id == id)
        )
        return result.scalar_one_or_none()

    async def paginate(
        self,
        db: AsyncSession,
        query: Select,
        *,
        page: int,
        page_size: int,
    ) -> Tuple[List[ModelType], int]:
        """
        执行已筛选、已排序的查询，返回 (当前页, 总数)

        总数基于同一查询去掉排序后的子查询统计，筛选条件只需写一次
        """
        count_query = select(func.count()).select_from(query.order_by(None).subquery())
        total = (await db.execute(count_query)).scalar() or 0

        result = await db.execute(apply_pagination(query, page, page_size))
        return list(result.scalars().all()), total

    async def create(
        self,
        db: AsyncSession,
        *,
        obj_in: CreateSchemaType | Dict[str, Any]
    ) -> ModelType:
        """从 Schema 或 dict 新建记录并刷新默认值"""
        if isinstance(obj_in, dict):
            db_obj = self.model(**obj_in)
        else:
            db_obj = self.model.model_validate(obj_in)

        db.add(db_obj)
        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def update(
        self,
        db: AsyncSession,
        *,
        db_obj: ModelType,
        obj_in: UpdateSchemaType | Dict[str, Any]
    ) -> ModelType:
        """
        部分更新

        值为 None 的字段保留原值；带 updated_at 的模型同时刷新时间戳
        """
        if isinstance(obj_in, dict):
            changes = obj_in
        else:
            changes = obj_in.model_dump(exclude_unset=True)

        for field, value in changes.items():
            if value is not None:
                setattr(db_obj, field, value)

        if hasattr(db_obj, "updated_at"):
            db_obj.updated_at = utcnow()

        await db.flush()
        await db.refresh(db_obj)
        return db_obj

    async def delete(self, db: AsyncSession, *, id: str) -> bool:
        """按主键删除，记录不存在时返回 False"""
        obj = await self.get(db, id)
        if obj is None:
            return False
        await db.delete(obj)
        await db.flush()
        return True


def apply_pagination(query, page: int, page_size: int):
    """按页码截取查询"""
    return query.offset((page - 1) * page_size).limit(page_size)
