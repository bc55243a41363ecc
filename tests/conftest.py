"""
测试配置文件

提供测试用的 fixtures：内存数据库、测试客户端、管理员会话、测试数据工厂等
"""
from typing import AsyncGenerator
from dataclasses import dataclass, field

import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine, async_sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel

import careers.models  # noqa: F401  注册全部表
from careers.core.config import settings
from careers.core.database import get_db
from careers.core.rate_limit import InMemoryRateLimitStore, RateLimiter
from careers.core.security import create_session_token
from careers.crud import admin_crud
from careers.main import create_app
from careers.models.admin import AdminUser

# 使用内存 SQLite 作为测试数据库（StaticPool 保证所有会话共用同一连接）
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse-battery"


# ========== 测试数据工厂 ==========

@dataclass
class DataFactory:
    """
    测试数据工厂类

    集中管理测试数据创建，避免各测试文件重复代码
    字段变更时只需修改此处
    """
    client: AsyncClient
    admin_client: AsyncClient
    _counter: int = field(default=0, repr=False)

    def _next_id(self) -> str:
        """生成唯一后缀，避免数据冲突"""
        self._counter += 1
        return str(self._counter)

    def application_payload(self, **overrides) -> dict:
        """公开申请表单数据"""
        suffix = self._next_id()
        return {
            "full_name": f"Jane Candidate {suffix}",
            "email": f"jane{suffix}@example.com",
            "phone": "+6391712345678",
            "nationality": "Filipino",
            "residence": "Philippines",
            "religion": "Catholic",
            "marital_status": "Single",
            "has_passport": True,
            "passport_number": f"P{suffix.zfill(7)}",
            "start_date": "2026-01-15",
            "education_level": "Bachelor",
            "tor_file": "",
            "diploma_file": "",
            "resume_file": "",
            "has_experience": True,
            "experience": "Three years teaching English to primary students.",
            "languages": "English, Tagalog",
            "english_level": "Fluent",
            "skills": "Classroom management",
            "motivation": "I want to grow as a teacher abroad and learn new cultures.",
            "referral_source": "Facebook",
            "consent": True,
            **overrides,
        }

    async def submit_application(self, ip: str = None, **overrides) -> dict:
        """提交申请（每次使用不同来源 IP，避开限流）"""
        data = self.application_payload(**overrides)
        ip = ip or f"10.0.{self._counter // 250}.{self._counter % 250 + 1}"
        resp = await self.client.post(
            "/api/v1/applications", json=data, headers={"X-Forwarded-For": ip}
        )
        assert resp.status_code == 201, f"提交申请失败: {resp.text}"
        return resp.json()["data"]

    def job_payload(self, **overrides) -> dict:
        suffix = self._next_id()
        return {
            "title": f"English Teacher {suffix}",
            "description": "Teach English to elementary students in a public school in Seoul.",
            "company_name": "Seoul Metropolitan Office",
            "location": "Seoul, South Korea",
            "salary_range": "2.5M - 3M KRW",
            "requirements": "Bachelor degree and TEFL certificate required.",
            "job_type": "FULL_TIME",
            **overrides,
        }

    async def create_job(self, **overrides) -> dict:
        """创建岗位，返回完整响应数据"""
        resp = await self.admin_client.post("/api/v1/jobs", json=self.job_payload(**overrides))
        assert resp.status_code == 201, f"创建岗位失败: {resp.text}"
        return resp.json()["data"]

    def post_payload(self, **overrides) -> dict:
        suffix = self._next_id()
        return {
            "slug": f"teaching-in-korea-{suffix}",
            "title": f"Teaching in Korea {suffix}",
            "excerpt": "What to expect during your first year.",
            "content": "A long article body about teaching abroad. " * 3,
            "cover_image": "/uploads/cover.jpg",
            "category": "TEACHING",
            **overrides,
        }

    async def create_post(self, **overrides) -> dict:
        """创建博客文章"""
        resp = await self.admin_client.post("/api/v1/blog", json=self.post_payload(**overrides))
        assert resp.status_code == 201, f"创建文章失败: {resp.text}"
        return resp.json()["data"]

    async def create_testimonial(self, **overrides) -> dict:
        """创建客户评价"""
        suffix = self._next_id()
        data = {
            "name": f"Maria {suffix}",
            "title": "ESL Teacher in Busan",
            "comment": "The team guided me through every step of the visa process.",
            "rating": 5,
            **overrides,
        }
        resp = await self.admin_client.post("/api/v1/testimonials", json=data)
        assert resp.status_code == 201, f"创建评价失败: {resp.text}"
        return resp.json()["data"]


# ========== 数据库 ==========

@pytest_asyncio.fixture
async def engine():
    """每个测试独立的内存数据库"""
    test_engine = create_async_engine(
        TEST_DATABASE_URL,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with test_engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield test_engine
    await test_engine.dispose()


@pytest_asyncio.fixture
async def session_factory(engine):
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autocommit=False,
        autoflush=False,
    )


@pytest_asyncio.fixture
async def db_session(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """直接操作数据库的会话（服务层测试与数据准备）"""
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def admin(db_session: AsyncSession) -> AdminUser:
    """已启用的管理员账号"""
    admin = await admin_crud.create_admin(
        db_session, email=ADMIN_EMAIL, name="Site Admin", password=ADMIN_PASSWORD
    )
    await db_session.commit()
    return admin


# ========== HTTP 客户端 ==========

@pytest_asyncio.fixture
async def app(session_factory):
    """
    测试应用

    每个请求使用独立会话（与生产一致），并使用全新的限流器
    """
    application = create_app(rate_limiter=RateLimiter(InMemoryRateLimitStore()))

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    application.dependency_overrides[get_db] = override_get_db
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """匿名访客客户端"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac


def session_headers(admin: AdminUser) -> dict:
    """携带管理员会话 Cookie 的请求头"""
    token = create_session_token(admin.id, admin.email, admin.role)
    return {"Cookie": f"{settings.session_cookie_name}={token}"}


@pytest_asyncio.fixture
async def admin_client(app, admin: AdminUser) -> AsyncGenerator[AsyncClient, None]:
    """已登录管理员客户端"""
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
        headers=session_headers(admin),
    ) as ac:
        yield ac


@pytest_asyncio.fixture
async def factory(client: AsyncClient, admin_client: AsyncClient) -> DataFactory:
    """提供测试数据工厂实例"""
    return DataFactory(client=client, admin_client=admin_client)
