"""Сохранение результатов: сырые данные, текстовый отчет, лог замеров"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import List, Sequence

from .base import MB, BenchmarkResult, ReportRow

logger = logging.getLogger(__name__)


class MetricsCollector:
    """Сборщик результатов запусков"""

    def __init__(self):
        self.results: List[BenchmarkResult] = []
        self.rows: List[ReportRow] = []
        self.timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")

    def add_result(self, result: BenchmarkResult, rows: Sequence[ReportRow] = ()):
        """Добавить итог запуска и его периодические замеры"""
        self.results.append(result)
        self.rows.extend(rows)

    def save_raw_data(self, output_dir: Path) -> Path:
        """Сохранить сырые данные в JSON"""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        data = {
            'timestamp': self.timestamp,
            'results': [r.to_dict() for r in self.results],
            'samples': [row.to_dict() for row in self.rows],
        }

        output_file = output_dir / f"iobench_raw_{self.timestamp}.json"
        with open(output_file, 'w', encoding='utf-8') as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.info("Raw data saved: %s", output_file)
        return output_file

    def generate_report(self, output_dir: Path) -> str:
        """Генерация текстового отчета"""
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        lines = []
        lines.append("=" * 80)
        lines.append("IOBENCH REPORT")
        lines.append("=" * 80)
        lines.append(f"Timestamp: {self.timestamp}")

        for result in self.results:
            lines.append(f"\n  Run: mode={result.mode}, split={result.split}, "
                         f"jobs={result.jobs}, files={result.files}")
            lines.append(f"  {'─' * 70}")
            lines.append(f"    Robust average:  {_mbps(result.robust_average_mbps)}")
            lines.append(f"    Robust minimum:  {_mbps(result.robust_min_mbps)}")
            lines.append(f"    Average:         {_mbps(result.average_mbps)}")
            lines.append(f"    Median:          {_mbps(result.median_mbps)}")
            lines.append(f"    Minimum:         {_mbps(result.min_mbps)}")
            lines.append(f"    Overall:         {_mbps(result.overall_mbps)}")
            lines.append(f"    Transferred:     {result.total_bytes / MB:>10.2f} MB")
            lines.append(f"    Total time:      {result.total_time_sec:>10.2f} sec")
            lines.append(f"    Files done:      {result.done:>10}")
            lines.append(f"    Errors:          {result.errors:>10}")
            lines.append(f"    Samples:         {result.samples:>10}")

        lines.append("\n" + "=" * 80)
        report_text = "\n".join(lines)

        report_file = output_dir / f"iobench_report_{self.timestamp}.txt"
        with open(report_file, 'w', encoding='utf-8') as f:
            f.write(report_text)

        logger.info("Report saved: %s", report_file)
        return report_text


def _mbps(value) -> str:
    if value is None:
        return f"{'n/a':>10}"
    return f"{value:>10.2f} MB/s"


def write_logfile(path: Path, rows: Sequence[ReportRow]) -> Path:
    """Лог замеров: одна строка на тик, колонки через табуляцию"""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write("time_sec\tprogress_pct\tthroughput_mbps\tactive_workers\t"
                "cpu_usage\tdisk_read_mbps\n")
        for row in rows:
            f.write("\t".join([
                f"{row.time_sec:.3f}",
                _cell(row.progress_pct, '.2f'),
                f"{row.throughput_mbps:.3f}",
                str(row.active_workers),
                _cell(row.cpu_usage, '.3f'),
                _cell(None if row.disk_read_bps is None else row.disk_read_bps / MB, '.3f'),
            ]) + "\n")
    logger.info("Log file saved: %s", path)
    return path


def _cell(value, spec: str) -> str:
    return 'nan' if value is None else format(value, spec)
