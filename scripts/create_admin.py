#!/usr/bin/env python
"""
创建后台管理员账号

用法：
    python scripts/create_admin.py --email admin@example.com --name "Site Admin"
    python scripts/create_admin.py --email ops@example.com --name Ops --role SUPER_ADMIN

未传 --password 时会交互式输入
"""
import argparse
import asyncio
import getpass
import sys
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT_DIR))

from careers.core.database import AsyncSessionLocal, init_db, close_db  # noqa: E402
from careers.crud import admin_crud  # noqa: E402
from careers.models.admin import AdminRole  # noqa: E402


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="创建后台管理员账号")
    parser.add_argument("--email", required=True, help="登录邮箱")
    parser.add_argument("--name", required=True, help="姓名")
    parser.add_argument("--password", help="密码（至少 8 位），不传则交互输入")
    parser.add_argument(
        "--role",
        default=AdminRole.ADMIN.value,
        help="角色: ADMIN / SUPER_ADMIN (默认: ADMIN)",
    )
    return parser.parse_args(argv)


def validate(email: str, name: str, password: str, role: str) -> str:
    """校验输入，返回规范化后的角色；不合法时抛 ValueError"""
    if not email or "@" not in email:
        raise ValueError("Invalid email address")
    if not name or len(name.strip()) < 2:
        raise ValueError("Name must be at least 2 characters")
    if not password or len(password) < 8:
        raise ValueError("Password must be at least 8 characters")
    role = (role or AdminRole.ADMIN.value).upper()
    if role not in {r.value for r in AdminRole}:
        raise ValueError("Role must be ADMIN or SUPER_ADMIN")
    return role


async def create_admin(email: str, name: str, password: str, role: str):
    """写入数据库，邮箱已存在时报错"""
    await init_db()
    try:
        async with AsyncSessionLocal() as session:
            if await admin_crud.get_by_email(session, email):
                raise ValueError(f"User with email {email} already exists")
            admin = await admin_crud.create_admin(
                session, email=email, name=name.strip(), password=password, role=role
            )
            await session.commit()
            return admin
    finally:
        await close_db()


def main(argv=None) -> int:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password (min 8 chars): ")

    try:
        role = validate(args.email, args.name, password, args.role)
        admin = asyncio.run(create_admin(args.email, args.name, password, role))
    except ValueError as e:
        print(f"❌ 创建失败: {e}")
        return 1

    print("✅ 管理员创建成功")
    print(f"   Email: {admin.email}")
    print(f"   Name: {admin.name}")
    print(f"   Role: {admin.role}")
    print(f"   ID: {admin.id}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
