"""Оценка скорости передачи данных по скользящему окну"""

import threading
import time
from collections import deque
from typing import Callable


class ThroughputEstimator:
    """
    Считает байты/с за последние window секунд.

    Пока оценщик моложе окна, делим на его возраст, чтобы
    первая секунда не занижала скорость.
    """

    # Дольше этого не храним отсчеты
    MAX_WINDOW_SEC = 60.0

    def __init__(self, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._samples = deque()
        self._created_at = clock()
        self._total_bytes = 0
        self._sample_count = 0

    def add_sample(self, byte_count: int):
        """Записать одну завершенную операцию"""
        now = self._clock()
        with self._lock:
            self._samples.append((now, byte_count))
            self._total_bytes += byte_count
            self._sample_count += 1
            self._expire(now - self.MAX_WINDOW_SEC)

    def rate(self, window: float = 1.0) -> float:
        """Байт в секунду за последние window секунд"""
        if window <= 0:
            raise ValueError(f"window must be positive, got {window}")
        now = self._clock()
        span = min(window, now - self._created_at)
        if span <= 0:
            return 0.0
        cutoff = now - span
        with self._lock:
            recent = sum(n for t, n in self._samples if t >= cutoff)
        return recent / span

    @property
    def total_bytes(self) -> int:
        return self._total_bytes

    @property
    def sample_count(self) -> int:
        return self._sample_count

    def _expire(self, cutoff: float):
        while self._samples and self._samples[0][0] < cutoff:
            self._samples.popleft()
