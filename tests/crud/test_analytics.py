"""
仪表盘统计 API 测试
"""
import pytest
from httpx import AsyncClient
from tests.conftest import DataFactory

from careers.services.analytics import calculate_conversion_rate, calculate_growth_rate


def test_rate_helpers():
    assert calculate_conversion_rate(1, 3) == 33.33
    assert calculate_conversion_rate(5, 0) == 0.0
    assert calculate_growth_rate(this_week=2, this_month=4) == 100.0
    assert calculate_growth_rate(this_week=3, this_month=0) == 0.0


@pytest.mark.asyncio
async def test_dashboard_aggregates_applications(admin_client: AsyncClient, factory: DataFactory):
    a = await factory.submit_application(residence="Vietnam", education_level="Master")
    await factory.submit_application(residence="Philippines")
    await factory.submit_application(residence="Philippines")
    await admin_client.patch(f"/api/v1/applications/{a['id']}", json={"status": "APPROVED"})

    response = await admin_client.get("/api/v1/analytics", params={"days": 7})
    assert response.status_code == 200
    data = response.json()["data"]

    overview = data["overview"]
    assert overview["total"] == 3
    assert overview["pending"] == 2
    assert overview["approved"] == 1
    assert overview["today"] == 3
    assert overview["this_week"] == 3
    assert overview["this_month"] == 3

    charts = data["charts"]
    assert charts["by_country"][0] == {"country": "Philippines", "count": 2}
    assert {"education": "Master", "count": 1} in charts["by_education"]
    assert sum(point["count"] for point in charts["over_time"]) == 3

    assert data["trends"]["conversion_rate"] == 33.33


@pytest.mark.asyncio
async def test_dashboard_requires_admin_and_valid_range(client: AsyncClient, admin_client: AsyncClient):
    assert (await client.get("/api/v1/analytics")).status_code == 401
    assert (await admin_client.get("/api/v1/analytics", params={"days": 0})).status_code == 400

    response = await admin_client.get("/api/v1/analytics")
    assert response.json()["data"]["overview"]["total"] == 0
    assert response.json()["data"]["charts"]["over_time"] == []
