#!/usr/bin/env python3
"""
S21 Compensator: reflection-loss compensation of VNA sweep exports.

Usage:
    python app.py load FILE...                      # Parse files, show status
    python app.py process FILE... --ref NAME        # Compensate against a reference
"""

import sys
import logging
import argparse

from s21comp.utils.constants import DEFAULT_MAX_ROWS, DEFAULT_SKIP_ROWS, EXPORT_FILENAME


def setup_logging(verbose: bool = False):
    """Route library logging through rich."""
    from rich.logging import RichHandler

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _load(args, console):
    from s21comp.measurement import ExtractorConfig, load_paths

    config = ExtractorConfig(skip_rows=args.skip_rows, max_rows=args.max_rows)
    with console.status(f"[bold blue]Reading {len(args.files)} files...[/bold blue]"):
        measurements = load_paths(args.files, config, max_workers=args.jobs)
    return measurements


def _file_table(measurements):
    from rich.table import Table

    table = Table(title="Files")
    table.add_column("File", style="cyan")
    table.add_column("Status")
    table.add_column("Range (GHz)", style="green")
    table.add_column("S21 (dB)", style="green")

    for outcome in measurements.outcomes:
        if outcome.ok:
            s = outcome.sweep.summary()
            table.add_row(
                f"📄 {outcome.label}", outcome.status,
                f"{s['start_ghz']:.3f} – {s['stop_ghz']:.3f}",
                f"{s['min_s21_db']:.2f} … {s['max_s21_db']:.2f}",
            )
        else:
            table.add_row(f"📄 {outcome.label}", f"[red]{outcome.status}[/red]",
                          "", f"[red]{outcome.error}[/red]")
    return table


def _load_status(measurements, n_files, console) -> bool:
    n_ok = sum(o.ok for o in measurements.outcomes)
    if measurements.ok:
        console.print(f"[green]{n_ok} of {n_files} files loaded successfully.[/green]")
        return True
    console.print(f"[red]Failed to load any valid data from {n_files} files. "
                  f"Please check file format.[/red]")
    return False


def cmd_load(args):
    """Parse sweep files and report what was found."""
    from rich.console import Console

    console = Console()
    measurements = _load(args, console)
    console.print(_file_table(measurements))
    return 0 if _load_status(measurements, len(args.files), console) else 1


def cmd_process(args):
    """Compensate all sweeps against a reference and export the result."""
    from rich.console import Console
    from rich.table import Table

    import numpy as np

    from s21comp.analysis import ReferenceNotFoundError, compensate
    from s21comp.export import write_compensated_csv
    from s21comp.visualization import build_plot_data

    console = Console()
    measurements = _load(args, console)
    console.print(_file_table(measurements))
    if not _load_status(measurements, len(args.files), console):
        return 1

    try:
        result = compensate(measurements, args.ref)
    except ReferenceNotFoundError as e:
        console.print(f"[red]{e}[/red] Available: {', '.join(measurements.labels)}")
        return 1

    table = Table(title=f"Compensated S21 (reference: {result.reference})")
    table.add_column("File", style="cyan")
    table.add_column("Points", style="green")
    table.add_column("Mean (dB)", style="green")
    table.add_column("Min (dB)", style="green")
    table.add_column("Max (dB)", style="green")

    for label, curve in result.plotted().items():
        finite = curve[np.isfinite(curve)]
        if finite.size:
            stats = [f"{finite.mean():.3f}", f"{finite.min():.3f}", f"{finite.max():.3f}"]
        else:
            stats = ["NaN"] * 3
        table.add_row(label, str(len(curve)), *stats)

    console.print(table)

    if args.output:
        path = write_compensated_csv(args.output, measurements, result)
        console.print(f"  CSV: {path}")

    if args.plot:
        from s21comp.visualization.plots import S21Plotter

        plotter = S21Plotter(style="dark_background" if args.theme == "dark" else "default")
        plotter.plot_s21(build_plot_data(measurements, result), save_path=args.plot)
        console.print(f"  Chart: {args.plot}")

    return 0


def _add_load_arguments(parser):
    parser.add_argument("files", nargs="+", help="CSV sweep files")
    parser.add_argument("--skip-rows", type=int, default=DEFAULT_SKIP_ROWS, dest="skip_rows",
                        help="Rows to skip when the file has no BEGIN/END block")
    parser.add_argument("--max-rows", type=int, default=DEFAULT_MAX_ROWS, dest="max_rows",
                        help="Maximum data rows to read when the file has no BEGIN/END block")
    parser.add_argument("-j", "--jobs", type=int, default=1,
                        help="Parse files on this many threads")


def build_parser():
    parser = argparse.ArgumentParser(
        prog="s21comp",
        description="S21 Compensator: reflection-loss compensation of VNA sweeps",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Examples:
  python app.py load dut1.csv dut2.csv thru.csv        # Check parsing
  python app.py process *.csv --ref thru               # Compensate against thru.csv
  python app.py process *.csv --ref thru -o out.csv --plot s21.png
  python app.py process *.csv --ref thru --skip-rows 8 --max-rows 201

The default export file name is {EXPORT_FILENAME}.
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command")

    # Load command
    load_parser = subparsers.add_parser("load", help="Parse files and show status")
    _add_load_arguments(load_parser)

    # Process command
    proc_parser = subparsers.add_parser("process", help="Compensate against a reference")
    _add_load_arguments(proc_parser)
    proc_parser.add_argument("-r", "--ref", type=str, required=True,
                             help="Reference file name (without .csv)")
    proc_parser.add_argument("-o", "--output", type=str, default=None,
                             help=f"Export CSV path (e.g. {EXPORT_FILENAME})")
    proc_parser.add_argument("--plot", type=str, default=None,
                             help="Save raw/compensated S21 charts to this image file")
    proc_parser.add_argument("--theme", choices=["light", "dark"], default="light")

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    if getattr(args, "skip_rows", 0) < 0 or getattr(args, "max_rows", 1) < 1:
        parser.error("--skip-rows must be >= 0 and --max-rows must be >= 1")

    setup_logging(args.verbose)

    commands = {
        "load": cmd_load,
        "process": cmd_process,
    }

    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
