"""
客户评价 API 路由
"""
from typing import Optional
from fastapi import APIRouter, BackgroundTasks, Query

from careers.api.deps import CurrentAdmin, DbSessionDep, OptionalAdmin
from careers.core.exceptions import NotFoundException
from careers.core.response import (
    success_response,
    paged_response,
    ResponseModel,
    PagedResponseModel,
    DictResponse,
)
from careers.core.storage import TESTIMONIALS_DIR, delete_files, is_upload_url
from careers.crud import testimonial_crud
from careers.models.base import utcnow
from careers.models.blog import ContentStatus
from careers.models.testimonial import (
    TestimonialCreate,
    TestimonialUpdate,
    TestimonialResponse,
)

router = APIRouter()


def _dump(testimonial) -> dict:
    return TestimonialResponse.model_validate(testimonial).model_dump(mode="json")


@router.get("", summary="获取评价列表", response_model=PagedResponseModel[TestimonialResponse])
async def get_testimonials(
    db: DbSessionDep,
    admin: OptionalAdmin,
    page: int = Query(1, ge=1, description="页码"),
    page_size: int = Query(20, ge=1, le=50, description="每页数量"),
    status: Optional[str] = Query(None, pattern=r"^(all|DRAFT|PUBLISHED|ARCHIVED)$", description="状态，all 表示全部"),
):
    """访客只能看到已发布的评价"""
    if admin is None:
        status = ContentStatus.PUBLISHED.value

    testimonials, total = await testimonial_crud.get_page(
        db, page=page, page_size=page_size, status=status
    )
    return paged_response([_dump(t) for t in testimonials], total, page, page_size)


@router.get("/{testimonial_id}", summary="获取评价详情", response_model=ResponseModel[TestimonialResponse])
async def get_testimonial(testimonial_id: str, db: DbSessionDep, admin: OptionalAdmin):
    testimonial = await testimonial_crud.get(db, testimonial_id)
    if not testimonial or (admin is None and testimonial.status != ContentStatus.PUBLISHED.value):
        raise NotFoundException(f"Testimonial not found: {testimonial_id}")
    return success_response(data=_dump(testimonial))


@router.post("", summary="创建评价", status_code=201, response_model=ResponseModel[TestimonialResponse])
async def create_testimonial(data: TestimonialCreate, db: DbSessionDep, admin: CurrentAdmin):
    obj_in = {
        **data.model_dump(),
        "created_by": admin.id,
        "published_at": utcnow() if data.status == ContentStatus.PUBLISHED.value else None,
    }
    testimonial = await testimonial_crud.create(db, obj_in=obj_in)
    return success_response(data=_dump(testimonial), message="Testimonial created successfully", code=201)


@router.patch("/{testimonial_id}", summary="更新评价", response_model=ResponseModel[TestimonialResponse])
async def update_testimonial(
    testimonial_id: str,
    data: TestimonialUpdate,
    db: DbSessionDep,
    admin: CurrentAdmin,
):
    """首次改为 PUBLISHED 时记录发布时间，之后不再变动"""
    testimonial = await testimonial_crud.get(db, testimonial_id)
    if not testimonial:
        raise NotFoundException(f"Testimonial not found: {testimonial_id}")

    updates = data.model_dump(exclude_unset=True)
    if data.status == ContentStatus.PUBLISHED.value and testimonial.published_at is None:
        updates["published_at"] = utcnow()

    testimonial = await testimonial_crud.update(db, db_obj=testimonial, obj_in=updates)
    return success_response(data=_dump(testimonial), message="Testimonial updated successfully")


@router.delete("/{testimonial_id}", summary="删除评价", response_model=DictResponse)
async def delete_testimonial(
    testimonial_id: str,
    db: DbSessionDep,
    admin: CurrentAdmin,
    background_tasks: BackgroundTasks,
):
    """删除评价，提交成功后再清理本地存储的照片/视频/缩略图（外部链接不处理）"""
    testimonial = await testimonial_crud.get(db, testimonial_id)
    if not testimonial:
        raise NotFoundException(f"Testimonial not found: {testimonial_id}")

    files = [
        url
        for url in (testimonial.media_url, testimonial.thumbnail_url)
        if is_upload_url(url, TESTIMONIALS_DIR)
    ]
    await testimonial_crud.delete(db, id=testimonial_id)
    await db.commit()

    if files:
        background_tasks.add_task(delete_files, files, TESTIMONIALS_DIR)
    return success_response(
        data={"id": testimonial_id, "files_scheduled": len(files)},
        message="Testimonial deleted successfully",
    )
