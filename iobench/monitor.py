"""Цикл мониторинга: запуск воркеров, периодический отчет, итоговая статистика"""

import logging
import random
import time
from typing import List, Optional

from rich.console import Console

from .base import MB, BenchmarkResult, ReportRow
from .config import BenchmarkConfig, SplitPolicy, WorkloadConfig, describe_split
from .console import get_console
from .pacemaker import Pacemaker
from .partition import partition_workload
from .statistics import StatisticsAggregator
from .telemetry import CPUUsageInfo, DiskIOInfo
from .timer import Timer
from .worker import Worker

logger = logging.getLogger(__name__)

HLINE = "-" * 80
NA = "n/a"


def _fmt(value: Optional[float], spec: str, suffix: str = "") -> str:
    if value is None:
        return NA
    return f"{value:{spec}}{suffix}"


class MonitorLoop:
    """
    Один полный прогон бенчмарка.

    Телеметрию и pacemaker можно передать снаружи (по умолчанию - /proc и report_fps из конфигурации).
    """

    def __init__(self, config: BenchmarkConfig,
                 console: Optional[Console] = None,
                 cpu_info: Optional[CPUUsageInfo] = None,
                 disk_info: Optional[DiskIOInfo] = None,
                 pacemaker: Optional[Pacemaker] = None,
                 idle_sleep: float = WorkloadConfig.IDLE_SLEEP_SEC,
                 rng: Optional[random.Random] = None):
        self.config = config
        self.console = console or get_console()
        self.cpu_info = cpu_info or CPUUsageInfo()
        self.disk_info = disk_info or DiskIOInfo()
        self.pacemaker = pacemaker or Pacemaker(config.report_fps)
        self.idle_sleep = idle_sleep
        self.rng = rng

        self.stats = StatisticsAggregator()
        self.rows: List[ReportRow] = []
        self.workers: List[Worker] = []
        self.timer = Timer()

    def build_workers(self) -> List[Worker]:
        plans = partition_workload(
            self.config.num_indices,
            self.config.jobs,
            self.config.split,
            randomize=self.config.randomize,
            rng=self.rng,
        )
        return [Worker(i, plan, self.config) for i, plan in enumerate(plans)]

    def run(self) -> BenchmarkResult:
        cfg = self.config
        self.console.print(f"Parsed {cfg.num_indices} filenames.")
        if cfg.randomize:
            self.console.print("Randomizing filenames")
        self.console.print(f"Spawning {cfg.jobs} worker threads...")
        self.console.print(describe_split(cfg.split))

        self.timer.begin()
        self.workers = self.build_workers()
        for worker in self.workers:
            worker.start()
        logger.debug("Workers started in %.3fs", self.timer.mark("start"))

        self.print_header()
        try:
            while not self.all_finished():
                if self.pacemaker.is_due():
                    self.tick()
                else:
                    time.sleep(self.idle_sleep)
        finally:
            for worker in self.workers:
                worker.stop()

        total_time = self.timer.end()
        result = self.build_result(total_time)
        self.print_summary(result)
        return result

    def all_finished(self) -> bool:
        return all(worker.is_done() for worker in self.workers)

    def progress(self) -> Optional[float]:
        """Процент выполнения; None если файлов нет"""
        done = sum(worker.get_done_count() for worker in self.workers)
        if self.workers and self.config.split in (SplitPolicy.OVERLAP, SplitPolicy.SAME):
            # все воркеры проходят одно и то же множество файлов
            done = done / len(self.workers)
        if self.config.num_indices == 0:
            return None
        return 100.0 * done / self.config.num_indices

    def tick(self) -> ReportRow:
        """Снять замер со всех воркеров и телеметрии, напечатать строку"""
        throughput = sum(worker.get_throughput() for worker in self.workers)
        active = sum(1 for worker in self.workers if not worker.is_done())

        cpu_usage = self.cpu_info.get_total_cpu_usage()
        if cpu_usage < 0:
            logger.debug("CPU counter overflow, dropping this CPU sample")
            cpu_usage = None

        self.disk_info.update()
        disk_read = self.disk_info.get_fastest_disk_read()

        self.stats.add_sample(throughput)
        row = ReportRow(
            time_sec=self.timer.elapsed(),
            progress_pct=self.progress(),
            throughput_bps=throughput,
            active_workers=active,
            cpu_usage=cpu_usage,
            disk_read_bps=disk_read,
        )
        self.rows.append(row)
        self.print_row(row)
        self.check_warnings(row)
        return row

    def check_warnings(self, row: ReportRow):
        if row.cpu_usage is not None and row.active_workers > 0 \
                and row.cpu_usage >= WorkloadConfig.CPU_BOUND_RATIO * row.active_workers:
            self.warn("(benchmark might be CPU-constrained; use more workers!)")

        # для записи скорость чтения с диска ничего не говорит
        if self.config.mode.reads and row.disk_read_bps is not None \
                and row.throughput_bps > WorkloadConfig.CACHE_SUSPECT_RATIO * row.disk_read_bps:
            self.warn(f"(actual disk is much slower ({row.disk_read_bps / MB:.1f} MB/s); "
                      f"data may be cached!)")

    def warn(self, message: str):
        self.console.print(f"     [bold red]!!![/bold red] {message}")

    def print_header(self):
        self.console.print(HLINE)
        self.console.print(f"{'Progress':>8}  {'speed':>13}  {'speed':>13}  "
                           f"{'CPU usage':>10}  {'CPU usage':>12}")
        self.console.print(f"{'':>8}  {'(total)':>13}  {'(per worker)':>13}  "
                           f"{'(total)':>10}  {'(per worker)':>12}")
        self.console.print(HLINE)

    def print_row(self, row: ReportRow):
        per_worker = row.throughput_mbps / row.active_workers if row.active_workers else None
        cpu_pct = row.cpu_usage * 100 if row.cpu_usage is not None else None
        cpu_per_worker = cpu_pct / row.active_workers \
            if cpu_pct is not None and row.active_workers else None

        speed = f"{row.throughput_mbps:8.1f} MB/s"
        self.console.print(
            f"{_fmt(row.progress_pct, '7.2f', '%'):>8}  "
            f"[bold]{speed:>13}[/bold]  "
            f"{_fmt(per_worker, '8.1f', ' MB/s'):>13}  "
            f"{_fmt(cpu_pct, '9.1f', '%'):>10}  "
            f"{_fmt(cpu_per_worker, '11.1f', '%'):>12}"
        )

    def build_result(self, total_time: float) -> BenchmarkResult:
        def stat(fn) -> Optional[float]:
            try:
                return fn() / MB
            except ValueError:
                return None

        return BenchmarkResult(
            mode=self.config.mode.value,
            split=self.config.split.value,
            jobs=self.config.jobs,
            files=self.config.num_indices,
            done=sum(worker.get_done_count() for worker in self.workers),
            errors=sum(worker.get_error_count() for worker in self.workers),
            total_bytes=sum(worker.get_total_bytes() for worker in self.workers),
            total_time_sec=total_time,
            samples=len(self.stats),
            average_mbps=stat(self.stats.average),
            robust_average_mbps=stat(self.stats.robust_average),
            min_mbps=stat(self.stats.min),
            robust_min_mbps=stat(self.stats.robust_min),
            median_mbps=stat(lambda: self.stats.percentile(50)),
        )

    def print_summary(self, result: BenchmarkResult):
        self.console.print(HLINE)
        self.console.print(f"{_fmt(self.progress(), '7.2f', '%'):>8}  done")
        self.console.print(HLINE)
        self.console.print(f"Total run time:   {result.total_time_sec:10.2f} s")
        self.console.print(f"Robust average:   "
                           f"[bold]{_fmt(result.robust_average_mbps, '10.1f', ' MB/s')}[/bold]")
        self.console.print(f"Robust minimum:   "
                           f"{_fmt(result.robust_min_mbps, '10.1f', ' MB/s')}")
        if result.errors:
            self.console.print(f"Failed files:     {result.errors:10d}")
