#!/usr/bin/env python3
"""
Демонстрация работы бенчмарка на сгенерированных данных
Создает случайные файлы во временной папке, читает их и пишет копии
"""

import argparse
import tempfile
from pathlib import Path

from iobench import BenchmarkConfig, MetricsCollector, MonitorLoop, generate_all_plots
from iobench.config import load_file_list
from iobench.console import setup_logging
from iobench.example_data import make_random_files, parse_size


def run_demo(work_dir: Path, number_of_files: int, file_size: int, jobs: int):
    """Чтение, затем чтение+запись того же набора"""
    list_file = make_random_files(work_dir / 'data', number_of_files, file_size)
    infiles = load_file_list(list_file)
    outfiles = [str(work_dir / 'copies' / Path(p).name) for p in infiles]
    (work_dir / 'copies').mkdir(parents=True, exist_ok=True)

    collector = MetricsCollector()
    rows = {}

    for mode in ['read', 'readwrite']:
        print(f"\n[{mode}] {number_of_files} files x {file_size} bytes, {jobs} workers")
        print("-" * 80)
        config = BenchmarkConfig(
            infiles=tuple(infiles),
            outfiles=tuple(outfiles),
            jobs=jobs,
            mode=mode,
            report_fps=4.0,
        )
        loop = MonitorLoop(config)
        result = loop.run()
        collector.add_result(result, loop.rows)
        rows[mode] = (loop.rows, result.robust_average_mbps)

    return collector, rows


def main():
    parser = argparse.ArgumentParser(description='iobench demo')
    parser.add_argument('-n', '--number-of-files', type=int, default=100)
    parser.add_argument('-s', '--file-size', default='10M')
    parser.add_argument('-j', '--jobs', type=int, default=2)
    parser.add_argument('--output-dir', default='iobench_results_demo')
    args = parser.parse_args()

    setup_logging("INFO")

    print("=" * 80)
    print("IO BENCHMARK - DEMO MODE")
    print("=" * 80)
    print("Generating random files to demonstrate framework functionality...")
    print("(Freshly written files are usually still in the page cache,")
    print(" so expect \"data may be cached\" warnings)")
    print("=" * 80)

    with tempfile.TemporaryDirectory(prefix='iobench-demo-') as tmp:
        collector, rows = run_demo(Path(tmp), args.number_of_files,
                                   parse_size(args.file_size), args.jobs)

    output_dir = Path(args.output_dir)

    print("\n" + "=" * 80)
    print("SAVING RESULTS")
    print("=" * 80)

    collector.save_raw_data(output_dir)
    print(collector.generate_report(output_dir))
    for mode, (mode_rows, robust_average) in rows.items():
        if mode_rows:
            generate_all_plots(mode_rows, output_dir / mode, robust_average)

    print("\n" + "=" * 80)
    print("✅ DEMO COMPLETED")
    print("=" * 80)
    print(f"\nResults saved to: {output_dir.absolute()}")


if __name__ == '__main__':
    main()
