"""Системная телеметрия: загрузка CPU и реальная скорость чтения с дисков"""

import logging
import os
import time
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Виртуальные устройства, которые не являются физическими дисками
VIRTUAL_DEVICE_PREFIXES = ('loop', 'ram', 'zram')


class CPUUsageInfo:
    """
    Загрузка CPU этим процессом между двумя вызовами.

    Возвращает отношение (user+system)/wall: 1.0 - одно ядро занято полностью.
    При переполнении/откате счетчиков возвращает OVERFLOW (-1.0).
    """

    OVERFLOW = -1.0

    def __init__(self, times_source: Callable[[], os.times_result] = os.times):
        self._times = times_source
        self._last_wall, self._last_sys, self._last_user = self._sample()

    def _sample(self) -> Tuple[float, float, float]:
        t = self._times()
        return t.elapsed, t.system, t.user

    def get_total_cpu_usage(self) -> float:
        wall, sys_time, user_time = self._sample()
        if (wall <= self._last_wall
                or sys_time < self._last_sys
                or user_time < self._last_user):
            usage = self.OVERFLOW
        else:
            usage = ((sys_time - self._last_sys) + (user_time - self._last_user)) \
                / (wall - self._last_wall)
        self._last_wall, self._last_sys, self._last_user = wall, sys_time, user_time
        return usage


@dataclass
class Disk:
    """Физический диск из /proc/diskstats"""
    name: str
    bytes_per_sector: int
    current_sectors_read: int
    last_sectors_read: int = 0


class DiskInfoState(Enum):
    INIT = 'init'
    HAVE_DISKS = 'have_disks'
    NO_DISKS_AVAILABLE = 'no_disks_available'


def parse_diskstats(content: str) -> Dict[str, int]:
    """
    Имя устройства -> число прочитанных секторов.

    Пример строки:
       8       4 sda4 5 0 28 108 0 0 0 0 0 108 108
            NAME--^       ^--sectors_read
    """
    sectors = {}
    for line in content.splitlines():
        parts = line.split()
        if len(parts) < 6:
            continue
        try:
            sectors[parts[2]] = int(parts[5])
        except ValueError:
            continue
    return sectors


class DiskIOInfo:
    """Скорость чтения самого быстрого физического диска между вызовами update()"""

    def __init__(self, diskstats_path: str = '/proc/diskstats',
                 sys_block_path: str = '/sys/block',
                 clock: Callable[[], float] = time.monotonic):
        self.diskstats_path = Path(diskstats_path)
        self.sys_block_path = Path(sys_block_path)
        self._clock = clock
        self.state = DiskInfoState.INIT
        self.disks: List[Disk] = []
        self._last_update = clock()
        self._interval = 0.0
        self._init()

    @property
    def available(self) -> bool:
        return self.state is DiskInfoState.HAVE_DISKS

    def _read_diskstats(self) -> Optional[Dict[str, int]]:
        try:
            return parse_diskstats(self.diskstats_path.read_text())
        except OSError as e:
            logger.debug("Cannot read %s: %s", self.diskstats_path, e)
            return None

    def _init(self):
        stats = self._read_diskstats()
        if stats is None:
            self.state = DiskInfoState.NO_DISKS_AVAILABLE
            return

        for name, sectors_read in stats.items():
            if name.startswith(VIRTUAL_DEVICE_PREFIXES):
                continue
            # Файл есть только у дисков, у разделов его нет
            sector_file = self.sys_block_path / name / 'queue' / 'hw_sector_size'
            try:
                bytes_per_sector = int(sector_file.read_text().strip())
            except (OSError, ValueError):
                continue
            self.disks.append(Disk(name, bytes_per_sector, sectors_read, sectors_read))

        self.state = DiskInfoState.HAVE_DISKS if self.disks \
            else DiskInfoState.NO_DISKS_AVAILABLE
        logger.debug("Disks found: %s", [d.name for d in self.disks])

    def update(self):
        if not self.available:
            return
        now = self._clock()
        self._interval = now - self._last_update
        self._last_update = now

        stats = self._read_diskstats()
        for disk in self.disks:
            disk.last_sectors_read = disk.current_sectors_read
            if stats is not None and disk.name in stats:
                disk.current_sectors_read = stats[disk.name]

    def get_fastest_disk_read(self) -> Optional[float]:
        """Байт/с самого быстрого диска с прошлого update(); None если данных нет"""
        if not self.available or self._interval <= 0:
            return None
        fastest = 0
        for disk in self.disks:
            read = disk.bytes_per_sector * max(0, disk.current_sectors_read - disk.last_sectors_read)
            fastest = max(fastest, read)
        return fastest / self._interval
