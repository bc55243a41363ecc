"""
固定窗口限流器测试
"""
from types import SimpleNamespace

from careers.core.rate_limit import (
    InMemoryRateLimitStore,
    RateLimiter,
    RateLimitRecord,
    get_client_ip,
)

WINDOW_MS = 15 * 60 * 1000


class FakeClock:
    """可手动推进的毫秒时钟"""

    def __init__(self, now: int = 1_700_000_000_000):
        self.now = now

    def __call__(self) -> int:
        return self.now


def make_limiter(clock=None) -> RateLimiter:
    return RateLimiter(InMemoryRateLimitStore(), clock=clock or FakeClock())


def test_first_request_opens_window():
    clock = FakeClock()
    limiter = make_limiter(clock)

    result = limiter.check("application_1.1.1.1", 5, WINDOW_MS)

    assert result.allowed is True
    assert result.remaining == 4
    record = limiter.store.get("application_1.1.1.1")
    assert record == RateLimitRecord(count=1, reset_at_ms=clock.now + WINDOW_MS)


def test_limit_reached_denies_with_zero_remaining():
    limiter = make_limiter()

    remaining = [limiter.check("k", 5, WINDOW_MS).remaining for _ in range(5)]
    denied = limiter.check("k", 5, WINDOW_MS)

    assert remaining == [4, 3, 2, 1, 0]
    assert denied.allowed is False
    assert denied.remaining == 0
    # 拒绝不再累加计数
    assert limiter.store.get("k").count == 5


def test_window_resets_only_after_reset_time_passes():
    clock = FakeClock()
    limiter = make_limiter(clock)
    for _ in range(5):
        limiter.check("k", 5, WINDOW_MS)

    # 恰好等于窗口结束时间仍在窗口内
    clock.now += WINDOW_MS
    assert limiter.check("k", 5, WINDOW_MS).allowed is False

    clock.now += 1
    result = limiter.check("k", 5, WINDOW_MS)
    assert result.allowed is True
    assert result.remaining == 4


def test_keys_are_independent():
    limiter = make_limiter()
    for _ in range(5):
        limiter.check("application_a", 5, WINDOW_MS)

    assert limiter.check("application_a", 5, WINDOW_MS).allowed is False
    assert limiter.check("application_b", 5, WINDOW_MS).allowed is True


def test_reset_clears_all_counters():
    limiter = make_limiter()
    for _ in range(5):
        limiter.check("k", 5, WINDOW_MS)

    limiter.reset()

    assert limiter.check("k", 5, WINDOW_MS).remaining == 4


def _request(headers: dict, host: str = "127.0.0.1"):
    return SimpleNamespace(headers=headers, client=SimpleNamespace(host=host) if host else None)


def test_client_ip_prefers_first_forwarded_address():
    request = _request({"x-forwarded-for": "203.0.113.7, 10.0.0.1", "x-real-ip": "198.51.100.2"})
    assert get_client_ip(request) == "203.0.113.7"


def test_client_ip_falls_back_to_real_ip_then_peer():
    assert get_client_ip(_request({"x-real-ip": "198.51.100.2"})) == "198.51.100.2"
    assert get_client_ip(_request({})) == "127.0.0.1"
    assert get_client_ip(_request({}, host=None)) == "unknown"
