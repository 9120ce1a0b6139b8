"""
API Rate Limit

클라이언트(호스트)별 고정 윈도우 요청 제한.
윈도우 경계에서 카운터 리셋, 초과 시 429 + Retry-After.
"""

import logging
import math
import time
from dataclasses import dataclass, field
from typing import Callable

from core.constants import Defaults

logger = logging.getLogger(__name__)


class RateLimitExceeded(Exception):
    """요청 한도 초과

    retry_after 초 후 재시도 필요.
    """

    code = "RATE_LIMIT_EXCEEDED"

    def __init__(self, retry_after: int, message: str = "Too many requests"):
        self.retry_after = retry_after
        self.message = message
        super().__init__(f"{message}. Retry after {retry_after} seconds.")


@dataclass
class _Window:
    started_at: float
    count: int = 0


@dataclass
class FixedWindowRateLimiter:
    """고정 윈도우 Rate Limiter

    Attributes:
        max_requests: 윈도우당 최대 요청 수
        window_sec: 윈도우 길이 (초)
        clock: 단조 시계 (테스트에서 교체)
    """

    max_requests: int = Defaults.RATE_LIMIT_MAX_REQUESTS
    window_sec: int = Defaults.RATE_LIMIT_WINDOW_SEC
    clock: Callable[[], float] = time.monotonic
    _windows: dict[str, _Window] = field(default_factory=dict)
    _last_sweep: float | None = None

    def hit(self, client_key: str) -> int:
        """요청 1건 기록

        Args:
            client_key: 클라이언트 식별자 (호스트)

        Returns:
            윈도우 내 남은 요청 수

        Raises:
            RateLimitExceeded: 한도 초과
        """
        now = self.clock()
        self._sweep(now)
        window = self._windows.get(client_key)
        if window is None or now - window.started_at >= self.window_sec:
            window = _Window(started_at=now)
            self._windows[client_key] = window

        if window.count >= self.max_requests:
            retry_after = max(1, math.ceil(window.started_at + self.window_sec - now))
            logger.warning(f"Rate limit 초과: client={client_key}, retry_after={retry_after}s")
            raise RateLimitExceeded(retry_after)

        window.count += 1
        return self.max_requests - window.count

    def _sweep(self, now: float) -> None:
        """만료된 윈도우 제거 (윈도우 길이마다 최대 1회)"""
        if self._last_sweep is not None and now - self._last_sweep < self.window_sec:
            return
        self._last_sweep = now
        expired = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.window_sec
        ]
        for key in expired:
            del self._windows[key]
        if expired:
            logger.debug(f"Rate limit 윈도우 정리: {len(expired)}개 제거")

    def reset(self) -> None:
        """전체 카운터 리셋"""
        self._windows.clear()
        self._last_sweep = None
