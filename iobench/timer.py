"""Простой таймер для замера общего времени работы"""

import time
from typing import Callable, List, Optional, Tuple


class Timer:
    """
    Явный интервал: begin() ... end() возвращает длительность в секундах.
    mark() запоминает промежуточную отметку с момента предыдущей.
    """

    def __init__(self, clock: Callable[[], float] = time.perf_counter):
        self._clock = clock
        self._start: Optional[float] = None
        self._last_mark: Optional[float] = None
        self.marks: List[Tuple[str, float]] = []

    def begin(self) -> 'Timer':
        self._start = self._last_mark = self._clock()
        self.marks = []
        return self

    def mark(self, label: str) -> float:
        now = self._clock()
        self._check_started()
        elapsed = now - self._last_mark
        self._last_mark = now
        self.marks.append((label, elapsed))
        return elapsed

    def elapsed(self) -> float:
        self._check_started()
        return self._clock() - self._start

    def end(self) -> float:
        duration = self.elapsed()
        self._start = self._last_mark = None
        return duration

    def _check_started(self):
        if self._start is None:
            raise RuntimeError("Timer.begin() was not called")
