"""Часы, которые "тикают" заданное число раз в секунду"""

import logging
import threading
import time
from typing import Callable

logger = logging.getLogger(__name__)

# Погрешность float при делении прошедшего времени на интервал
_EPSILON = 1e-9


class Pacemaker:
    """
    Опрашиваемый таймер с заданной частотой.

    target_fps > 0 - is_due() возвращает True не чаще target_fps раз в секунду
    target_fps == 0 - никогда не возвращает True
    target_fps < 0 - всегда возвращает True (если не на паузе)

    Если accumulate_unfetched_ticks=True, пропущенные тики копятся:
    после паузы в 1с при 10 fps следующие 10 вызовов вернут True подряд.
    Иначе пропущенные тики сгорают и ритм продолжается с номинальной частотой.
    """

    def __init__(self, target_fps: float = 30.0,
                 accumulate_unfetched_ticks: bool = False,
                 clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._lock = threading.Lock()
        self._paused = False
        self._accumulate = accumulate_unfetched_ticks
        self._target_fps = 0.0
        self._interval = 0.0
        self._last_beat = clock()
        self.set_target_fps(target_fps)

    @property
    def target_fps(self) -> float:
        return self._target_fps

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def paused(self) -> bool:
        return self._paused

    def is_due(self) -> bool:
        """Пора ли следующий тик"""
        if self._paused:
            return False
        if self._target_fps == 0:
            return False
        if self._target_fps < 0:
            return True

        with self._lock:
            now = self._clock()
            elapsed = now - self._last_beat
            if elapsed + _EPSILON < self._interval:
                return False

            if self._accumulate:
                self._last_beat += self._interval
            else:
                beats = max(1, int(elapsed / self._interval + _EPSILON))
                if beats > 1:
                    logger.debug("Pacemaker: %.4fs since last beat, skipping %d beats",
                                 elapsed, beats - 1)
                self._last_beat += beats * self._interval
            return True

    __call__ = is_due

    def pause(self):
        self._paused = True

    def resume(self):
        self._paused = False

    def reset(self):
        """Время последнего тика = сейчас"""
        with self._lock:
            self._last_beat = self._clock()

    def set_target_fps(self, target_fps: float):
        with self._lock:
            self._target_fps = float(target_fps)
            if self._target_fps > 0:
                self._interval = 1.0 / self._target_fps

        if self._target_fps == 0:
            logger.debug("Pacemaker: 0 fps, no ticks will be issued")
        elif self._target_fps < 0:
            logger.debug("Pacemaker: negative fps, every request will generate a tick")
        else:
            logger.debug("Pacemaker: %.2f fps, one tick every %.6fs",
                         self._target_fps, self._interval)
