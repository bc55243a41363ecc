"""
岗位 API 路由
"""
from typing import Optional
from fastapi import APIRouter, Query

from careers.api.deps import CurrentAdmin, DbSessionDep
from careers.core.exceptions import NotFoundException
from careers.core.response import (
    success_response,
    paged_response,
    ResponseModel,
    PagedResponseModel,
    DictResponse,
)
from careers.crud import application_crud, job_crud
from careers.models.job import (
    JobType,
    JobVacancy,
    JobVacancyCreate,
    JobVacancyUpdate,
    JobVacancyResponse,
)

router = APIRouter()


async def _serialize(db, jobs: list[JobVacancy]) -> list[dict]:
    """附带每个岗位的申请数量"""
    counts = await application_crud.count_by_job(db, [job.id for job in jobs])
    items = []
    for job in jobs:
        item = JobVacancyResponse.model_validate(job)
        item.application_count = counts.get(job.id, 0)
        items.append(item.model_dump(mode="json"))
    return items


@router.get("", summary="获取开放岗位列表", response_model=PagedResponseModel[JobVacancyResponse])
async def get_jobs(
    db: DbSessionDep,
    page: int = Query(1, ge=1, description="页码"),
    page_size: int = Query(10, ge=1, le=50, description="每页数量"),
    job_type: Optional[JobType] = Query(None, description="岗位类型"),
    location: Optional[str] = Query(None, max_length=100, description="工作地点"),
    search: Optional[str] = Query(None, max_length=200, description="关键词"),
):
    """公开接口，仅返回开放中的岗位"""
    jobs, total = await job_crud.get_page(
        db,
        page=page,
        page_size=page_size,
        active_only=True,
        job_type=job_type.value if job_type else None,
        location=location,
        search=search,
    )
    return paged_response(await _serialize(db, jobs), total, page, page_size)


@router.get("/admin/all", summary="获取全部岗位（后台）", response_model=PagedResponseModel[JobVacancyResponse])
async def get_all_jobs(
    db: DbSessionDep,
    admin: CurrentAdmin,
    page: int = Query(1, ge=1, description="页码"),
    page_size: int = Query(50, ge=1, le=100, description="每页数量"),
):
    """后台接口，包含已关闭的岗位"""
    jobs, total = await job_crud.get_page(db, page=page, page_size=page_size, active_only=False)
    return paged_response(await _serialize(db, jobs), total, page, page_size)


@router.post("", summary="创建岗位", status_code=201, response_model=ResponseModel[JobVacancyResponse])
async def create_job(data: JobVacancyCreate, db: DbSessionDep, admin: CurrentAdmin):
    job = await job_crud.create(db, obj_in={**data.model_dump(), "created_by": admin.id})
    items = await _serialize(db, [job])
    return success_response(data=items[0], message="Job vacancy created successfully", code=201)


@router.get("/{job_id}", summary="获取岗位详情", response_model=ResponseModel[JobVacancyResponse])
async def get_job(job_id: str, db: DbSessionDep):
    job = await job_crud.get(db, job_id)
    if not job:
        raise NotFoundException(f"Job vacancy not found: {job_id}")
    items = await _serialize(db, [job])
    return success_response(data=items[0])


@router.patch("/{job_id}", summary="更新岗位", response_model=ResponseModel[JobVacancyResponse])
async def update_job(job_id: str, data: JobVacancyUpdate, db: DbSessionDep, admin: CurrentAdmin):
    job = await job_crud.get(db, job_id)
    if not job:
        raise NotFoundException(f"Job vacancy not found: {job_id}")

    job = await job_crud.update(db, db_obj=job, obj_in=data)
    items = await _serialize(db, [job])
    return success_response(data=items[0], message="Job vacancy updated successfully")


@router.delete("/{job_id}", summary="删除岗位", response_model=DictResponse)
async def delete_job(job_id: str, db: DbSessionDep, admin: CurrentAdmin):
    """删除岗位；已有申请保留，但不再关联该岗位"""
    job = await job_crud.get(db, job_id)
    if not job:
        raise NotFoundException(f"Job vacancy not found: {job_id}")

    await application_crud.detach_job(db, job_id)
    await job_crud.delete(db, id=job_id)
    return success_response(data={"id": job_id}, message="Job vacancy deleted successfully")
