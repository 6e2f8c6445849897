"""Tests for the monitoring loop and the end-to-end run."""

import io
from pathlib import Path

import pytest
from rich.console import Console

from conftest import FakeClock, FakeCPUInfo, FakeDiskInfo
from iobench.config import BenchmarkConfig, SplitPolicy, WorkMode
from iobench.monitor import MonitorLoop
from iobench.pacemaker import Pacemaker
from iobench.throughput import ThroughputEstimator
from iobench.worker import Worker


def make_console():
    return Console(file=io.StringIO(), width=120, highlight=False)


def output(loop):
    return loop.console.file.getvalue()


class StubWorker:
    def __init__(self, done=0, throughput=0.0, finished=False):
        self.done = done
        self.throughput = throughput
        self.finished = finished

    def get_done_count(self):
        return self.done

    def get_throughput(self):
        return self.throughput

    def is_done(self):
        return self.finished


def make_loop(config, cpu=(0.1,), disk=None, fps=-1):
    loop = MonitorLoop(
        config,
        console=make_console(),
        cpu_info=FakeCPUInfo(cpu),
        disk_info=FakeDiskInfo(disk),
        pacemaker=Pacemaker(fps),
        idle_sleep=0.001,
    )
    loop.timer.begin()
    return loop


def test_end_to_end_separate_read(data_files):
    config = BenchmarkConfig(infiles=tuple(data_files), jobs=2, split=SplitPolicy.SEPARATE)
    loop = make_loop(config)
    result = loop.run()

    assert sum(w.get_done_count() for w in loop.workers) == 10
    expected = sum(Path(p).stat().st_size for p in data_files)
    assert sum(w.estimator.total_bytes for w in loop.workers) == expected
    assert result.total_bytes == expected
    assert result.done == 10
    assert result.errors == 0
    assert all(w.is_done() for w in loop.workers)
    text = output(loop)
    assert "Robust average" in text
    assert "100.00%" in text


@pytest.mark.parametrize("split", [SplitPolicy.OVERLAP, SplitPolicy.SAME])
def test_end_to_end_shared_index_space(data_files, split):
    config = BenchmarkConfig(infiles=tuple(data_files), jobs=3, split=split)
    loop = make_loop(config)
    result = loop.run()
    assert result.done == 30
    # прогресс нормирован на число воркеров
    assert loop.progress() == pytest.approx(100.0)


def test_end_to_end_write(tmp_path):
    outfiles = tuple(str(tmp_path / f"w{i}.bin") for i in range(6))
    config = BenchmarkConfig(outfiles=outfiles, jobs=2, mode=WorkMode.WRITE, write_size=1024)
    result = make_loop(config).run()
    assert result.total_bytes == 6 * 1024
    assert all(Path(p).stat().st_size == 1024 for p in outfiles)


def test_tick_records_sample_and_row(data_files):
    loop = make_loop(BenchmarkConfig(infiles=tuple(data_files), jobs=2))
    loop.workers = [StubWorker(3, 2 * 1024 * 1024), StubWorker(2, 1024 * 1024)]
    row = loop.tick()

    assert loop.stats.samples == [3 * 1024 * 1024]
    assert row.progress_pct == pytest.approx(50.0)
    assert row.active_workers == 2
    assert row.cpu_usage == pytest.approx(0.1)
    assert "50.00%" in output(loop)
    assert "3.0 MB/s" in output(loop)


def test_cpu_bound_warning(data_files):
    loop = make_loop(BenchmarkConfig(infiles=tuple(data_files), jobs=1), cpu=(0.95,))
    loop.workers = [StubWorker(1, 1000.0)]
    loop.tick()
    assert "CPU-constrained" in output(loop)


def test_no_cpu_warning_below_threshold(data_files):
    loop = make_loop(BenchmarkConfig(infiles=tuple(data_files), jobs=2), cpu=(1.5,))
    loop.workers = [StubWorker(1, 1000.0), StubWorker(1, 1000.0)]
    loop.tick()
    assert "CPU-constrained" not in output(loop)


def test_cpu_overflow_shown_as_na(data_files):
    loop = make_loop(BenchmarkConfig(infiles=tuple(data_files)), cpu=(-1.0,))
    loop.workers = [StubWorker(1, 1000.0)]
    row = loop.tick()
    assert row.cpu_usage is None
    assert "n/a" in output(loop)
    assert "CPU-constrained" not in output(loop)


def test_cache_warning(data_files):
    loop = make_loop(BenchmarkConfig(infiles=tuple(data_files)), disk=1024 * 1024)
    loop.workers = [StubWorker(1, 10 * 1024 * 1024)]
    loop.tick()
    assert "data may be cached" in output(loop)


def test_no_cache_warning_when_disk_keeps_up(data_files):
    loop = make_loop(BenchmarkConfig(infiles=tuple(data_files)), disk=10 * 1024 * 1024)
    loop.workers = [StubWorker(1, 10 * 1024 * 1024)]
    loop.tick()
    assert "data may be cached" not in output(loop)


def test_no_cache_check_without_disk_data(data_files):
    loop = make_loop(BenchmarkConfig(infiles=tuple(data_files)), disk=None)
    loop.workers = [StubWorker(1, 10 * 1024 * 1024)]
    loop.tick()
    assert "data may be cached" not in output(loop)


def test_no_cache_check_in_write_mode(tmp_path):
    config = BenchmarkConfig(outfiles=(str(tmp_path / "x"),), mode=WorkMode.WRITE)
    loop = make_loop(config, disk=0.0)
    loop.workers = [StubWorker(1, 10 * 1024 * 1024)]
    loop.tick()
    assert "data may be cached" not in output(loop)


def test_no_active_workers_shows_na(data_files):
    loop = make_loop(BenchmarkConfig(infiles=tuple(data_files)))
    loop.workers = [StubWorker(10, 0.0, finished=True)]
    row = loop.tick()
    assert row.active_workers == 0
    assert "n/a" in output(loop)


def test_summary_without_samples(data_files):
    config = BenchmarkConfig(infiles=tuple(data_files))
    loop = make_loop(config, fps=0)
    result = loop.run()
    assert result.samples == 0
    assert result.robust_average_mbps is None
    assert result.robust_min_mbps is None
    assert "n/a" in output(loop)


def test_readwrite_copy_at_disk_speed_is_not_cached(tmp_path):
    source = tmp_path / "in.bin"
    source.write_bytes(b"\0" * (1024 * 1024))
    config = BenchmarkConfig(infiles=(str(source),), outfiles=(str(tmp_path / "out.bin"),),
                             mode=WorkMode.READWRITE)
    clock = FakeClock()
    worker = Worker(0, [0], config, estimator=ThroughputEstimator(clock))
    clock.now = 0.5
    worker.start()
    assert worker.wait(10.0)
    worker.stop()

    clock.now = 1.0
    loop = make_loop(config, disk=1024 * 1024)
    loop.workers = [worker]
    row = loop.tick()
    assert row.throughput_mbps == pytest.approx(1.0)
    assert "data may be cached" not in output(loop)


def test_build_result_reports_median(data_files):
    loop = make_loop(BenchmarkConfig(infiles=tuple(data_files)))
    for mbps in (1, 2, 3, 4, 100):
        loop.stats.add_sample(mbps * 1024 * 1024)
    result = loop.build_result(5.0)
    assert result.median_mbps == pytest.approx(3.0)
    assert result.to_dict()["median_mbps"] == pytest.approx(3.0)
