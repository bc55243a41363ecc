"""
固定窗口限流模块

按 key 记录窗口内的请求次数，存储后端可替换（默认进程内存）。
限流器实例挂在 app.state 上，通过依赖注入获取。
"""
import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from threading import Lock
from typing import Callable, Dict, Optional

from fastapi import Request


@dataclass
class RateLimitRecord:
    """单个 key 的窗口计数"""
    count: int
    reset_at_ms: int


@dataclass(frozen=True)
class RateLimitResult:
    """限流检查结果"""
    allowed: bool
    remaining: int


class RateLimitStore(ABC):
    """限流计数存储接口"""

    @abstractmethod
    def get(self, key: str) -> Optional[RateLimitRecord]:
        ...

    @abstractmethod
    def set(self, key: str, record: RateLimitRecord) -> None:
        ...

    @abstractmethod
    def clear(self) -> None:
        ...


class InMemoryRateLimitStore(RateLimitStore):
    """
    线程安全的内存存储

    仅在单进程内有效，多实例部署时每个进程各自计数
    """

    def __init__(self):
        self._records: Dict[str, RateLimitRecord] = {}
        self._lock = Lock()

    def get(self, key: str) -> Optional[RateLimitRecord]:
        with self._lock:
            record = self._records.get(key)
            if record is None:
                return None
            return RateLimitRecord(record.count, record.reset_at_ms)

    def set(self, key: str, record: RateLimitRecord) -> None:
        with self._lock:
            self._records[key] = record

    def clear(self) -> None:
        with self._lock:
            self._records.clear()


def _now_ms() -> int:
    return int(time.time() * 1000)


class RateLimiter:
    """
    固定窗口限流器

    规则:
    - 无记录或当前时间已超过窗口结束时间：开启新窗口，count=1
    - count 已达上限：拒绝，remaining=0
    - 否则 count+1，remaining=limit-count
    """

    def __init__(self, store: RateLimitStore, clock: Callable[[], int] = None):
        self.store = store
        self.clock = clock or _now_ms
        self._lock = Lock()

    def check(self, key: str, limit: int, window_ms: int) -> RateLimitResult:
        """检查并记录一次请求"""
        with self._lock:
            now = self.clock()
            record = self.store.get(key)

            if record is None or now > record.reset_at_ms:
                self.store.set(key, RateLimitRecord(count=1, reset_at_ms=now + window_ms))
                return RateLimitResult(allowed=True, remaining=limit - 1)

            if record.count >= limit:
                return RateLimitResult(allowed=False, remaining=0)

            record.count += 1
            self.store.set(key, record)
            return RateLimitResult(allowed=True, remaining=limit - record.count)

    def reset(self) -> None:
        """清空全部计数"""
        self.store.clear()


def get_client_ip(request: Request) -> str:
    """
    获取客户端 IP

    优先 X-Forwarded-For 的第一个地址，其次 X-Real-IP，最后是连接对端地址
    """
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        ip = forwarded.split(",")[0].strip()
        if ip:
            return ip

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    if request.client and request.client.host:
        return request.client.host
    return "unknown"
