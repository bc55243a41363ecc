"""
密码哈希、会话令牌与管理员脚本校验测试
"""
from datetime import timedelta

import pytest

from careers.core.security import (
    create_session_token,
    decode_session_token,
    get_password_hash,
    verify_password,
)
from scripts.create_admin import validate


def test_password_hash_round_trip():
    hashed = get_password_hash("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert verify_password("s3cret-pass", hashed)
    assert not verify_password("other-pass", hashed)


def test_session_token_carries_identity():
    token = create_session_token("admin-1", "admin@example.com", "ADMIN")
    payload = decode_session_token(token)
    assert payload["sub"] == "admin-1"
    assert payload["email"] == "admin@example.com"
    assert payload["role"] == "ADMIN"


def test_invalid_or_expired_token_decodes_to_none():
    expired = create_session_token("admin-1", "a@example.com", "ADMIN", expires_delta=timedelta(seconds=-5))
    assert decode_session_token(expired) is None
    assert decode_session_token("not-a-token") is None


def test_create_admin_input_validation():
    assert validate("ops@example.com", "Ops", "long-enough", "super_admin") == "SUPER_ADMIN"

    with pytest.raises(ValueError, match="email"):
        validate("ops", "Ops", "long-enough", "ADMIN")
    with pytest.raises(ValueError, match="Password"):
        validate("ops@example.com", "Ops", "short", "ADMIN")
    with pytest.raises(ValueError, match="Role"):
        validate("ops@example.com", "Ops", "long-enough", "OWNER")
