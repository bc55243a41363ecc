"""
服务层模块
"""
from .workflow import ApplicationWorkflow, ALLOWED_TRANSITIONS, can_transition
from .analytics import AnalyticsService, calculate_conversion_rate, calculate_growth_rate

__all__ = [
    # 申请流转
    "ApplicationWorkflow",
    "ALLOWED_TRANSITIONS",
    "can_transition",
    # 统计
    "AnalyticsService",
    "calculate_conversion_rate",
    "calculate_growth_rate",
]
