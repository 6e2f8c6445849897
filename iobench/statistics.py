"""Устойчивая к выбросам статистика по замерам скорости"""

import logging
from typing import List

import numpy as np

logger = logging.getLogger(__name__)


class StatisticsAggregator:
    """Копит замеры суммарной скорости в порядке поступления"""

    # Процент, отбрасываемый с каждого края в robust_average
    TRIM_PERCENT = 5
    # Меньше замеров - результат ненадежен
    MIN_RELIABLE_SAMPLES = 100
    # Первые замеры искажены разгоном
    STARTUP_SAMPLES = 2

    def __init__(self):
        self._samples: List[float] = []

    def add_sample(self, value: float):
        self._samples.append(float(value))

    @property
    def samples(self) -> List[float]:
        return list(self._samples)

    def __len__(self):
        return len(self._samples)

    def average(self) -> float:
        self._require_samples()
        return float(np.mean(self._samples))

    def robust_average(self) -> float:
        """Среднее после отбрасывания 5% самых малых и 5% самых больших"""
        self._require_samples()
        n = len(self._samples)
        if n < self.MIN_RELIABLE_SAMPLES:
            logger.warning("Only %d samples, robust average is not statistically reliable", n)

        ordered = np.sort(np.asarray(self._samples))
        lo = n * self.TRIM_PERCENT // 100
        # поровну с каждого края
        hi = n - lo
        trimmed = ordered[lo:hi]
        if trimmed.size == 0:
            return float(np.mean(ordered))
        return float(np.mean(trimmed))

    def min(self) -> float:
        self._require_samples()
        return float(np.min(self._samples))

    def robust_min(self) -> float:
        """Минимум без первых двух (по времени) замеров"""
        if len(self._samples) <= self.STARTUP_SAMPLES:
            raise ValueError(
                f"robust_min needs at least {self.STARTUP_SAMPLES + 1} samples, "
                f"got {len(self._samples)}"
            )
        return float(np.min(self._samples[self.STARTUP_SAMPLES:]))

    def percentile(self, q: float) -> float:
        self._require_samples()
        return float(np.percentile(self._samples, q))

    def _require_samples(self):
        if not self._samples:
            raise ValueError("no samples recorded")
