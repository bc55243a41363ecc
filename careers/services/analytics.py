"""
后台仪表盘统计服务
"""
from collections import OrderedDict
from datetime import datetime, timedelta
from typing import Callable, Dict, List

from sqlalchemy.ext.asyncio import AsyncSession

from careers.crud import application_crud
from careers.models.application import ApplicationStatus
from careers.models.base import utcnow


def calculate_conversion_rate(approved: int, total: int) -> float:
    """通过率（百分比，保留两位小数）"""
    if total <= 0:
        return 0.0
    return round(approved / total * 100, 2)


def calculate_growth_rate(this_week: int, this_month: int) -> float:
    """本周相对近 30 天周均值的增长率（百分比，保留两位小数）"""
    if this_month <= 0:
        return 0.0
    avg_per_week = this_month / 4
    return round((this_week - avg_per_week) / avg_per_week * 100, 2)


class AnalyticsService:
    """申请数据统计"""

    def __init__(self, db: AsyncSession, now: Callable[[], datetime] = utcnow):
        self.db = db
        self.now = now

    async def overview(self) -> Dict[str, int]:
        now = self.now()
        today = now.replace(hour=0, minute=0, second=0, microsecond=0)

        by_status = await application_crud.count_by_status(self.db)
        return {
            "total": sum(by_status.values()),
            "pending": by_status[ApplicationStatus.PENDING.value],
            "reviewing": by_status[ApplicationStatus.REVIEWING.value],
            "approved": by_status[ApplicationStatus.APPROVED.value],
            "rejected": by_status[ApplicationStatus.REJECTED.value],
            "today": await application_crud.count_since(self.db, today),
            "this_week": await application_crud.count_since(self.db, today - timedelta(days=7)),
            "this_month": await application_crud.count_since(self.db, today - timedelta(days=30)),
        }

    async def over_time(self, days: int) -> List[Dict]:
        """近 days 天每日提交数量（只包含有提交的日期，按日期升序）"""
        since = self.now() - timedelta(days=days)
        timestamps = sorted(await application_crud.created_since(self.db, since))

        per_day: "OrderedDict[str, int]" = OrderedDict()
        for created_at in timestamps:
            key = created_at.date().isoformat()
            per_day[key] = per_day.get(key, 0) + 1
        return [{"date": day, "count": count} for day, count in per_day.items()]

    async def dashboard(self, days: int = 30) -> Dict:
        """仪表盘全部数据"""
        overview = await self.overview()
        by_country = await application_crud.top_values(self.db, "residence")
        by_education = await application_crud.top_values(self.db, "education_level")

        return {
            "overview": overview,
            "charts": {
                "by_country": [{"country": v, "count": c} for v, c in by_country],
                "by_education": [{"education": v, "count": c} for v, c in by_education],
                "over_time": await self.over_time(days),
            },
            "trends": {
                "conversion_rate": calculate_conversion_rate(overview["approved"], overview["total"]),
                "growth_rate": calculate_growth_rate(overview["this_week"], overview["this_month"]),
            },
        }
