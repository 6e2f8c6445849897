#!/usr/bin/env python3
"""
I/O Benchmark Tool
Замер устойчивой скорости чтения/записи файлов несколькими потоками
"""
import sys
import argparse
from pathlib import Path

from iobench import (
    BenchmarkConfig,
    ConfigError,
    MetricsCollector,
    MonitorLoop,
    SplitPolicy,
    WorkMode,
    WorkloadConfig,
    generate_all_plots,
    write_logfile,
)
from iobench.console import setup_logging


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='I/O Benchmark Tool',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Read all listed files with 4 workers, each worker gets its own slice
  python3 main.py --infiles test-files.txt --jobs 4

  # Every worker reads all files, each in its own random order
  python3 main.py -i test-files.txt -j 8 -s overlap

  # Write 4 MB into each listed output file
  python3 main.py -o out-files.txt -m write -w 4194304
        """
    )

    parser.add_argument('-i', '--infiles', default=None,
                        help='list of input filenames')
    parser.add_argument('-o', '--outfiles', default=None,
                        help='list of output filenames')
    parser.add_argument('-j', '--jobs', type=int, default=WorkloadConfig.JOBS,
                        help='number of parallel workers to start')
    parser.add_argument('-s', '--workload-split',
                        choices=[p.value for p in SplitPolicy],
                        default=SplitPolicy.SEPARATE.value,
                        help='how files are split between workers')
    parser.add_argument('-r', '--randomize-files', action='store_true',
                        help='access listed files randomly instead of sequentially')
    parser.add_argument('-m', '--mode',
                        choices=[m.value for m in WorkMode],
                        default=WorkMode.READ.value,
                        help='benchmark mode (only read / only write / read and write)')
    parser.add_argument('-w', '--write-size', type=int, default=WorkloadConfig.WRITE_SIZE,
                        help='bytes written per file in write/readwrite mode')
    parser.add_argument('--report-rate', type=float, default=WorkloadConfig.REPORT_FPS,
                        help='report rows per second')
    parser.add_argument('-l', '--logfile', default=None,
                        help='write per-tick measurements to this file')
    parser.add_argument('--output-dir', default=None,
                        help='save raw JSON, text report and plots here')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='debug logging')
    return parser


def build_config(args) -> BenchmarkConfig:
    mode = WorkMode(args.mode)
    infiles, outfiles = args.infiles, args.outfiles
    if not infiles and not outfiles:
        raise ConfigError("Need at least one of [--infiles, --outfiles]")
    if infiles and mode is WorkMode.WRITE:
        print("Ignoring --infiles because --mode=write is set")
        infiles = None
    if outfiles and mode is WorkMode.READ:
        print("Ignoring --outfiles because --mode=read is set")
        outfiles = None

    return BenchmarkConfig.from_lists(
        infiles_list=infiles,
        outfiles_list=outfiles,
        jobs=args.jobs,
        split=args.workload_split,
        randomize=args.randomize_files,
        mode=mode,
        write_size=args.write_size,
        report_fps=args.report_rate,
    )


def save_artifacts(args, loop: MonitorLoop, result):
    if args.logfile:
        write_logfile(Path(args.logfile), loop.rows)

    if args.output_dir:
        output_dir = Path(args.output_dir)
        collector = MetricsCollector()
        collector.add_result(result, loop.rows)
        collector.save_raw_data(output_dir)
        collector.generate_report(output_dir)
        if loop.rows:
            generate_all_plots(loop.rows, output_dir, result.robust_average_mbps)
        print(f"\nResults saved to: {output_dir.absolute()}")


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.verbose else "INFO")

    try:
        config = build_config(args)
    except ConfigError as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1

    print("=" * 80)
    print("IO BENCHMARK")
    print("=" * 80)
    print(f"Mode:         {config.mode.value}")
    print(f"Split:        {config.split.value}")
    print(f"Jobs:         {config.jobs}")
    if config.mode.writes:
        print(f"Write size:   {config.write_size} bytes")
    print("=" * 80)

    loop = MonitorLoop(config)
    try:
        result = loop.run()
    except KeyboardInterrupt:
        print("\nInterrupted, workers stopped.")
        return 130

    save_artifacts(args, loop, result)
    return 0


if __name__ == '__main__':
    sys.exit(main())
