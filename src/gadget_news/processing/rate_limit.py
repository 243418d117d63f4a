from __future__ import annotations

import threading
import time
from typing import Callable


class MinIntervalRateLimiter:
    """연속된 외부 호출 사이에 최소 간격을 보장하는 리미터.

    여러 워커가 같은 인스턴스를 공유해도 간격이 지켜지도록, 다음 호출 슬롯은
    락 안에서 예약하고 실제 대기는 락 밖에서 한다. 첫 호출은 기다리지 않는다.
    """

    def __init__(
        self,
        interval_sec: float,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._interval = max(0.0, float(interval_sec))
        self._clock = clock
        self._sleep = sleep
        self._lock = threading.Lock()
        self._next_slot: float | None = None

    @property
    def interval_sec(self) -> float:
        return self._interval

    def wait(self) -> float:
        """다음 슬롯까지 대기하고, 실제로 기다린 시간(초)을 돌려준다."""
        with self._lock:
            now = self._clock()
            slot = now if self._next_slot is None else max(now, self._next_slot)
            self._next_slot = slot + self._interval
        delay = slot - now
        if delay > 0:
            self._sleep(delay)
        return delay
