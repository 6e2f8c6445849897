"""Общие фикстуры тестов"""

import sys
from pathlib import Path

import pytest

# Корень репозитория (main.py, demo.py)
sys.path.insert(0, str(Path(__file__).parent.parent))


class FakeClock:
    """Ручные часы для детерминированных тестов"""

    def __init__(self, start: float = 0.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float):
        self.now += seconds


class FakeCPUInfo:
    def __init__(self, values=(0.1,)):
        self.values = list(values)
        self.calls = 0

    def get_total_cpu_usage(self) -> float:
        value = self.values[min(self.calls, len(self.values) - 1)]
        self.calls += 1
        return value


class FakeDiskInfo:
    def __init__(self, rate=None):
        self.rate = rate
        self.updates = 0

    def update(self):
        self.updates += 1

    def get_fastest_disk_read(self):
        return self.rate


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def data_files(tmp_path):
    """10 файлов разного размера и список путей к ним"""
    data_dir = tmp_path / "data"
    data_dir.mkdir()
    paths = []
    for i in range(10):
        path = data_dir / f"{i:04d}.bin"
        path.write_bytes(bytes([i]) * (1000 + 137 * i))
        paths.append(str(path))
    return paths
