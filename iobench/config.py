"""Конфигурация бенчмарка и типы нагрузок"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Tuple


class ConfigError(Exception):
    """Некорректная конфигурация запуска"""


class WorkMode(Enum):
    """Режим работы воркеров"""
    READ = 'read'
    WRITE = 'write'
    READWRITE = 'readwrite'

    @property
    def reads(self) -> bool:
        return self in (WorkMode.READ, WorkMode.READWRITE)

    @property
    def writes(self) -> bool:
        return self in (WorkMode.WRITE, WorkMode.READWRITE)


class SplitPolicy(Enum):
    """Как файлы распределяются между воркерами"""
    SEPARATE = 'separate'
    OVERLAP = 'overlap'
    SAME = 'same'


class WorkloadConfig:
    """Значения по умолчанию"""

    WRITE_SIZE = 1 * 1024 * 1024  # 1 MB
    JOBS = 1

    # Строк отчета в секунду
    REPORT_FPS = float(os.getenv('IOBENCH_REPORT_RATE', '1.0'))
    # Пауза монитора между тиками
    IDLE_SLEEP_SEC = 0.01
    # Окно оценки скорости воркера
    THROUGHPUT_WINDOW_SEC = 1.0

    # Пороги предупреждений
    CPU_BOUND_RATIO = 0.9
    CACHE_SUSPECT_RATIO = 1.1


def _parse_enum(enum_cls, value, option: str):
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        choices = ', '.join(m.value for m in enum_cls)
        raise ConfigError(
            f"Unhandled choice for \"{option}\": {value!r} (choose from {choices})"
        ) from None


@dataclass(frozen=True)
class BenchmarkConfig:
    """Неизменяемая конфигурация одного запуска"""
    infiles: Tuple[str, ...] = ()
    outfiles: Tuple[str, ...] = ()
    jobs: int = WorkloadConfig.JOBS
    split: SplitPolicy = SplitPolicy.SEPARATE
    randomize: bool = False
    mode: WorkMode = WorkMode.READ
    write_size: int = WorkloadConfig.WRITE_SIZE
    report_fps: float = field(default_factory=lambda: WorkloadConfig.REPORT_FPS)

    def __post_init__(self):
        # frozen: нормализуем через object.__setattr__
        object.__setattr__(self, 'infiles', tuple(str(p) for p in self.infiles))
        object.__setattr__(self, 'outfiles', tuple(str(p) for p in self.outfiles))
        object.__setattr__(self, 'split',
                           _parse_enum(SplitPolicy, self.split, 'workload-split'))
        object.__setattr__(self, 'mode', _parse_enum(WorkMode, self.mode, 'mode'))

        if not self.infiles and not self.outfiles:
            raise ConfigError("Need at least one of [--infiles, --outfiles]")
        if self.mode.reads and not self.infiles:
            raise ConfigError(f"--mode={self.mode.value} needs --infiles")
        if self.mode.writes and not self.outfiles:
            raise ConfigError(f"--mode={self.mode.value} needs --outfiles")
        if self.jobs < 1:
            raise ConfigError(f"--jobs must be at least 1, got {self.jobs}")
        if self.write_size <= 0:
            raise ConfigError(f"--write-size must be positive, got {self.write_size}")

    @property
    def num_indices(self) -> int:
        return max(len(self.infiles), len(self.outfiles))

    @classmethod
    def from_lists(cls, infiles_list: Optional[str] = None,
                   outfiles_list: Optional[str] = None, **kwargs) -> 'BenchmarkConfig':
        """Собрать конфигурацию из файлов-списков"""
        infiles = load_file_list(infiles_list, 'inputs') if infiles_list else []
        outfiles = load_file_list(outfiles_list, 'outputs') if outfiles_list else []
        return cls(infiles=tuple(infiles), outfiles=tuple(outfiles), **kwargs)


def load_file_list(path, what: str = 'files') -> List[str]:
    """
    Чтение списка файлов.
    Один путь на строку, пустые строки пропускаются.
    """
    try:
        text = Path(path).read_text(encoding='utf-8')
    except OSError as e:
        raise ConfigError(f"Could not read list of {what}: {path} ({e})") from e
    return [line.strip() for line in text.splitlines() if line.strip()]


def describe_split(split: SplitPolicy) -> str:
    if split is SplitPolicy.SEPARATE:
        return "Workload is equally distributed among all workers"
    if split is SplitPolicy.OVERLAP:
        return "Workload is the same for all workers, but random for each"
    return "Workload is exactly the same for all workers"
