"""
客户评价 API 测试
"""
import pytest
from httpx import AsyncClient
from tests.conftest import DataFactory


@pytest.mark.asyncio
async def test_testimonial_crud_flow(client: AsyncClient, admin_client: AsyncClient, factory: DataFactory):
    # 1. Create (草稿)
    testimonial = await factory.create_testimonial(name="Maria Santos")
    testimonial_id = testimonial["id"]
    assert testimonial["status"] == "DRAFT"
    assert testimonial["published_at"] is None
    assert (await client.get(f"/api/v1/testimonials/{testimonial_id}")).status_code == 404

    # 2. 首次发布记录发布时间
    response = await admin_client.patch(
        f"/api/v1/testimonials/{testimonial_id}", json={"status": "PUBLISHED"}
    )
    first_published_at = response.json()["data"]["published_at"]
    assert first_published_at is not None

    # 再次发布不改变发布时间
    await admin_client.patch(f"/api/v1/testimonials/{testimonial_id}", json={"status": "DRAFT"})
    response = await admin_client.patch(
        f"/api/v1/testimonials/{testimonial_id}", json={"status": "PUBLISHED", "rating": 4.5}
    )
    assert response.json()["data"]["published_at"] == first_published_at
    assert response.json()["data"]["rating"] == 4.5

    # 3. Read (公开)
    response = await client.get(f"/api/v1/testimonials/{testimonial_id}")
    assert response.status_code == 200
    assert response.json()["data"]["name"] == "Maria Santos"

    # 4. Delete
    response = await admin_client.delete(f"/api/v1/testimonials/{testimonial_id}")
    assert response.status_code == 200
    assert response.json()["data"]["files_scheduled"] == 0
    assert (await admin_client.get(f"/api/v1/testimonials/{testimonial_id}")).status_code == 404


@pytest.mark.asyncio
async def test_list_orders_and_hides_drafts(client: AsyncClient, admin_client: AsyncClient, factory: DataFactory):
    second = await factory.create_testimonial(status="PUBLISHED", order=2)
    first = await factory.create_testimonial(status="PUBLISHED", order=1)
    await factory.create_testimonial(order=0)

    response = await client.get("/api/v1/testimonials", params={"status": "all"})
    ids = [t["id"] for t in response.json()["data"]["items"]]
    assert ids == [first["id"], second["id"]]

    response = await admin_client.get("/api/v1/testimonials", params={"status": "all"})
    assert response.json()["data"]["total"] == 3


@pytest.mark.asyncio
async def test_testimonial_validation(admin_client: AsyncClient):
    response = await admin_client.post("/api/v1/testimonials", json={
        "name": "Jo",
        "title": "Teacher",
        "comment": "Great!",
        "rating": 6,
    })
    assert response.status_code == 400
    fields = {e["field"] for e in response.json()["data"]["errors"]}
    assert {"comment", "rating"} <= fields


@pytest.mark.asyncio
async def test_delete_cleans_up_uploaded_media(admin_client: AsyncClient, factory: DataFactory, tmp_path, monkeypatch):
    from careers.core.config import settings

    monkeypatch.setattr(settings, "upload_dir", tmp_path)
    (tmp_path / "testimonials").mkdir()
    photo = tmp_path / "testimonials" / "maria.jpg"
    photo.write_bytes(b"jpeg")

    testimonial = await factory.create_testimonial(
        media_url="/uploads/testimonials/maria.jpg",
        media_type="PHOTO",
        thumbnail_url="https://cdn.example.com/thumb.jpg",
    )

    response = await admin_client.delete(f"/api/v1/testimonials/{testimonial['id']}")
    assert response.json()["data"]["files_scheduled"] == 1
    assert not photo.exists()


@pytest.mark.asyncio
async def test_delete_leaves_files_outside_testimonial_uploads(
    admin_client: AsyncClient, factory: DataFactory, tmp_path, monkeypatch
):
    from careers.core.config import settings

    monkeypatch.setattr(settings, "upload_dir", tmp_path)
    (tmp_path / "documents").mkdir()
    resume = tmp_path / "documents" / "cv.pdf"
    resume.write_bytes(b"%PDF-1.4")

    testimonial = await factory.create_testimonial(
        media_url="/uploads/documents/cv.pdf",
        media_type="PHOTO",
    )

    response = await admin_client.delete(f"/api/v1/testimonials/{testimonial['id']}")
    assert response.status_code == 200
    assert response.json()["data"]["files_scheduled"] == 0
    assert resume.exists()
