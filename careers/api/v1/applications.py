"""
求职申请 API 路由
"""
from typing import Literal, Optional
from fastapi import APIRouter, BackgroundTasks, Depends, Query

from careers.api.deps import CurrentAdmin, DbSessionDep, enforce_application_rate_limit
from careers.core.exceptions import NotFoundException
from careers.core.response import (
    success_response,
    paged_response,
    ResponseModel,
    PagedResponseModel,
    DictResponse,
)
from careers.core.storage import DOCUMENTS_DIR, delete_files
from careers.crud import application_crud
from careers.models.application import (
    ApplicationCreate,
    ApplicationUpdate,
    ApplicationStatus,
    ApplicationSubmitted,
    ApplicationListResponse,
    ApplicationDetailResponse,
    ApplicationStatusResponse,
)
from careers.services.workflow import ApplicationWorkflow

router = APIRouter()


@router.post(
    "",
    summary="提交求职申请",
    status_code=201,
    response_model=ResponseModel[ApplicationSubmitted],
    dependencies=[Depends(enforce_application_rate_limit)],
)
async def submit_application(
    data: ApplicationCreate,
    db: DbSessionDep,
):
    """
    公开表单提交（按 IP 限流）

    新申请状态为 PENDING，并写入首条状态历史
    """
    application = await ApplicationWorkflow(db).submit(data)
    response = ApplicationSubmitted(id=application.id, email=application.email)
    return success_response(
        data=response.model_dump(),
        message=response.message,
        code=201,
    )


@router.get("", summary="获取申请列表", response_model=PagedResponseModel[ApplicationListResponse])
async def get_applications(
    db: DbSessionDep,
    admin: CurrentAdmin,
    page: int = Query(1, ge=1, description="页码"),
    page_size: int = Query(25, ge=1, le=100, description="每页数量"),
    status: Optional[ApplicationStatus] = Query(None, description="状态筛选"),
    search: Optional[str] = Query(None, max_length=100, description="按姓名/邮箱/国籍/居住地搜索"),
    job_id: Optional[str] = Query(None, description="岗位ID筛选"),
    sort_by: Literal["created_at", "updated_at", "full_name", "residence"] = Query(
        "created_at", description="排序字段"
    ),
    sort_order: Literal["asc", "desc"] = Query("desc", description="排序方向"),
):
    """获取申请列表，支持筛选、搜索与排序"""
    applications, total = await application_crud.get_page(
        db,
        page=page,
        page_size=page_size,
        status=status.value if status else None,
        search=search,
        job_id=job_id,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    items = [
        ApplicationListResponse.model_validate(app).model_dump(mode="json")
        for app in applications
    ]
    return paged_response(items, total, page, page_size)


@router.get("/stats/overview", summary="获取申请统计概览", response_model=DictResponse)
async def get_stats_overview(db: DbSessionDep, admin: CurrentAdmin):
    """各状态数量及总数"""
    stats = await application_crud.count_by_status(db)
    stats["total"] = sum(stats.values())
    return success_response(data=stats)


@router.get("/{application_id}", summary="获取申请详情", response_model=ResponseModel[ApplicationDetailResponse])
async def get_application(application_id: str, db: DbSessionDep, admin: CurrentAdmin):
    """申请详情，含状态历史（最新在前）与处理人"""
    application = await application_crud.get(db, application_id)
    if not application:
        raise NotFoundException(f"Application not found: {application_id}")

    response = ApplicationDetailResponse.model_validate(application)
    response.status_history = sorted(
        response.status_history, key=lambda h: h.changed_at, reverse=True
    )
    return success_response(data=response.model_dump(mode="json"))


@router.patch("/{application_id}", summary="更新申请状态", response_model=ResponseModel[ApplicationStatusResponse])
async def update_application(
    application_id: str,
    data: ApplicationUpdate,
    db: DbSessionDep,
    admin: CurrentAdmin,
):
    """
    变更状态/审核备注

    未传 status 时沿用当前状态；每次调用都会追加一条历史
    """
    workflow = ApplicationWorkflow(db)
    new_status = data.status
    if new_status is None:
        current = await application_crud.get(db, application_id)
        if not current:
            raise NotFoundException(f"Application not found: {application_id}")
        new_status = current.status

    application = await workflow.transition(
        application_id, new_status, admin.id, notes=data.review_notes
    )
    return success_response(
        data=ApplicationStatusResponse.model_validate(application).model_dump(mode="json"),
        message="Application updated successfully",
    )


@router.delete("/{application_id}", summary="删除申请", response_model=DictResponse)
async def delete_application(
    application_id: str,
    db: DbSessionDep,
    admin: CurrentAdmin,
    background_tasks: BackgroundTasks,
):
    """
    硬删除申请及其状态历史

    上传的材料文件在事务提交成功后由后台任务清理，提交失败时文件保持不变
    """
    application = await ApplicationWorkflow(db).remove(application_id)
    files = [
        url
        for url in (application.resume_file, application.diploma_file, application.tor_file)
        if url
    ]
    await db.commit()

    if files:
        background_tasks.add_task(delete_files, files, DOCUMENTS_DIR)
    return success_response(
        data={"id": application_id, "files_scheduled": len(files)},
        message="Application deleted successfully",
    )
