"""Структуры результатов бенчмарка"""

from dataclasses import dataclass, asdict
from typing import Optional

MB = 1024 * 1024


@dataclass
class ReportRow:
    """Одна строка периодического отчета"""
    time_sec: float
    progress_pct: Optional[float]
    throughput_bps: float
    active_workers: int
    cpu_usage: Optional[float]
    disk_read_bps: Optional[float]

    @property
    def throughput_mbps(self) -> float:
        return self.throughput_bps / MB

    def to_dict(self):
        return asdict(self)


@dataclass
class BenchmarkResult:
    """Итоги одного запуска"""
    mode: str
    split: str
    jobs: int
    files: int
    done: int
    errors: int
    total_bytes: int
    total_time_sec: float
    samples: int
    average_mbps: Optional[float]
    robust_average_mbps: Optional[float]
    min_mbps: Optional[float]
    robust_min_mbps: Optional[float]
    median_mbps: Optional[float] = None

    @property
    def overall_mbps(self) -> float:
        """Средняя скорость по общему времени"""
        if self.total_time_sec <= 0:
            return 0.0
        return self.total_bytes / MB / self.total_time_sec

    def to_dict(self):
        data = asdict(self)
        data['overall_mbps'] = self.overall_mbps
        return data
