"""
数据统计 API 路由
"""
from fastapi import APIRouter, Query

from careers.api.deps import CurrentAdmin, DbSessionDep
from careers.core.response import success_response, DictResponse
from careers.services.analytics import AnalyticsService

router = APIRouter()


@router.get("", summary="获取仪表盘统计", response_model=DictResponse)
async def get_dashboard(
    db: DbSessionDep,
    admin: CurrentAdmin,
    days: int = Query(30, ge=1, le=365, description="趋势图统计天数"),
):
    """概览、图表与趋势指标"""
    data = await AnalyticsService(db).dashboard(days=days)
    return success_response(data=data)
