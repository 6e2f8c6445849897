"""Визуализация замеров бенчмарка"""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from .base import MB, ReportRow

logger = logging.getLogger(__name__)


def generate_all_plots(rows: Sequence[ReportRow], output_dir: Path,
                       robust_average_mbps: Optional[float] = None) -> List[Path]:
    """Генерация всех графиков"""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    paths = [
        plot_throughput_timeline(rows, output_dir / "01_throughput_timeline.png",
                                 robust_average_mbps),
        plot_cpu_usage(rows, output_dir / "02_cpu_usage.png"),
    ]
    logger.info("All plots saved to %s/", output_dir)
    return paths


def plot_throughput_timeline(rows: Sequence[ReportRow], output_path: Path,
                             robust_average_mbps: Optional[float] = None) -> Path:
    """Скорость по времени + реальное чтение с диска"""
    times = np.array([r.time_sec for r in rows])
    speed = np.array([r.throughput_mbps for r in rows])
    # None -> nan, чтобы matplotlib рисовал разрывы
    disk = np.array([np.nan if r.disk_read_bps is None else r.disk_read_bps / MB
                     for r in rows])

    fig, ax = plt.subplots(figsize=(14, 8))
    ax.plot(times, speed, 'o-', linewidth=2, markersize=3,
            color='#3498db', label='observed (total)')
    if not np.all(np.isnan(disk)):
        ax.plot(times, disk, '--', linewidth=1.5, color='#e74c3c',
                label='fastest disk read')
    if robust_average_mbps is not None:
        ax.axhline(robust_average_mbps, color='#2ecc71', linestyle=':', linewidth=2,
                   label=f'robust average ({robust_average_mbps:.1f} MB/s)')

    ax.set_xlabel('Time (s)', fontsize=12, fontweight='bold')
    ax.set_ylabel('Throughput (MB/s)', fontsize=12, fontweight='bold')
    ax.set_title('Throughput over time', fontsize=14, fontweight='bold', pad=20)
    ax.legend(fontsize=11, loc='upper right')
    ax.grid(axis='y', alpha=0.3, linestyle='--')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info("  ✓ %s", output_path.name)
    return output_path


def plot_cpu_usage(rows: Sequence[ReportRow], output_path: Path) -> Path:
    """Загрузка CPU и число активных воркеров"""
    times = np.array([r.time_sec for r in rows])
    cpu = np.array([np.nan if r.cpu_usage is None else r.cpu_usage * 100 for r in rows])
    active = np.array([r.active_workers for r in rows])

    fig, ax = plt.subplots(figsize=(14, 8))
    ax.plot(times, cpu, 'o-', linewidth=2, markersize=3, color='#e67e22', label='CPU usage')
    # 100% на воркера - порог, выше которого тест упирается в CPU
    ax.step(times, active * 100, where='post', color='#95a5a6', linestyle='--',
            label='active workers x 100%')

    ax.set_xlabel('Time (s)', fontsize=12, fontweight='bold')
    ax.set_ylabel('CPU usage (%)', fontsize=12, fontweight='bold')
    ax.set_title('CPU usage over time', fontsize=14, fontweight='bold', pad=20)
    ax.legend(fontsize=11, loc='upper right')
    ax.grid(axis='y', alpha=0.3, linestyle='--')

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    logger.info("  ✓ %s", output_path.name)
    return output_path
