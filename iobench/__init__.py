"""I/O throughput benchmark"""

from .base import BenchmarkResult, ReportRow
from .config import BenchmarkConfig, ConfigError, SplitPolicy, WorkMode, WorkloadConfig
from .metrics import MetricsCollector, write_logfile
from .monitor import MonitorLoop
from .pacemaker import Pacemaker
from .partition import partition_workload
from .statistics import StatisticsAggregator
from .throughput import ThroughputEstimator
from .visualize import generate_all_plots
from .worker import Worker, WorkerStatus

__all__ = [
    'BenchmarkConfig',
    'BenchmarkResult',
    'ConfigError',
    'MetricsCollector',
    'MonitorLoop',
    'Pacemaker',
    'ReportRow',
    'SplitPolicy',
    'StatisticsAggregator',
    'ThroughputEstimator',
    'WorkMode',
    'Worker',
    'WorkerStatus',
    'WorkloadConfig',
    'generate_all_plots',
    'partition_workload',
    'write_logfile',
]
