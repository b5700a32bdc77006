"""Command-line interface for tareconcile."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from time import perf_counter
from typing import Any, List, Optional

from tareconcile.config import load_config
from tareconcile.diagnostics import (
    FAILED_MULTIPLE_TIMES,
    FAILED_THEN_PASSED,
    Diagnostics,
)
from tareconcile.errors import ReconcileError
from tareconcile.logging import (
    add_file_handler,
    get_logger,
    remove_file_handler,
    set_global_log_level,
)
from tareconcile.model.outcome import CLASSIFICATIONS
from tareconcile.runner import RunResult, analyze_run, run_reconciliation
from tareconcile.utils.output_paths import ensure_parent_dir, resolve_under_root

logger = get_logger(__name__)


def _format_table(
    headers: List[str],
    rows: List[List[str]],
    min_width: int = 8,
    max_col_width: Optional[int] = None,
) -> str:
    """Format data as a simple ASCII table.

    Args:
        headers: Column headers
        rows: Data rows
        min_width: Minimum column width
        max_col_width: Cells longer than this are clipped with "..."

    Returns:
        Formatted table string
    """
    if not rows:
        return ""

    def clip(val: Any) -> str:
        s = str(val)
        if max_col_width is not None and len(s) > max_col_width:
            return s[: max_col_width - 3] + "..."
        return s

    clipped_headers = [clip(h) for h in headers]
    clipped_rows = [[clip(item) for item in row] for row in rows]

    all_data = [clipped_headers] + clipped_rows
    col_widths = []
    for col_idx in range(len(clipped_headers)):
        max_width = max(len(str(row[col_idx])) for row in all_data)
        col_widths.append(max(max_width, min_width))

    def format_row(row_data: List[str]) -> str:
        return "   " + " | ".join(
            f"{str(item):<{col_widths[i]}}" for i, item in enumerate(row_data)
        )

    lines = [format_row(clipped_headers)]
    lines.append("   " + "-+-".join("-" * width for width in col_widths))
    for row in clipped_rows:
        lines.append(format_row(row))
    return "\n".join(lines)


def _format_duration(seconds: float) -> str:
    """Return a concise human-readable duration string.

    Examples:
        0.123 -> "123.0 ms"; 1.234 -> "1.23 s"; 75.2 -> "1m 15.2s".
    """
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f} ms"
    if seconds < 60.0:
        return f"{seconds:.2f} s"
    minutes = int(seconds // 60)
    rem = seconds - minutes * 60
    return f"{minutes}m {rem:.1f}s"


def _plural(n: int, singular: str, plural: Optional[str] = None) -> str:
    """Return grammatically correct unit for count n."""
    if n == 1:
        return singular
    return plural or (singular + "s")


def _print_outcomes(result: RunResult) -> None:
    counts = result.outcomes.counts()
    total = len(result.manifest)
    rows: List[List[str]] = []
    for name in CLASSIFICATIONS:
        share = (counts[name] / total * 100.0) if total else 0.0
        output = str(result.written[name]) if name in result.written else "-"
        rows.append([name.capitalize(), f"{counts[name]:,}", f"{share:.1f}%", output])
    print(_format_table(["Outcome", "Tests", "Share", "Output"], rows, max_col_width=64))


def _print_anomalies(diagnostics: Diagnostics, detail: bool) -> None:
    for kind, title in (
        (FAILED_MULTIPLE_TIMES, "Failed multiple times"),
        (FAILED_THEN_PASSED, "Failed and later passed"),
    ):
        ids = diagnostics.subjects_of(kind)
        print(f"   {title}: {len(ids)} {_plural(len(ids), 'test')}")
        if detail:
            for tc_id in ids:
                print(f"     - {tc_id}")


def _inspect_run(root: Path, config_path: Optional[Path], detail: bool) -> None:
    """Reconcile ``root`` and print the result without writing any file."""
    logger.info(f"Inspecting run directory: {root}")
    try:
        config = load_config(root, config_path)
        result = analyze_run(root, config)
    except ReconcileError as e:
        logger.error(f"Inspection failed: {type(e).__name__}: {e}")
        print(f"❌ ERROR: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to inspect run: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to inspect run: {type(e).__name__}: {e}")
        sys.exit(1)

    manifest = result.manifest
    print("\n" + "=" * 60)
    print("TEST PLAN RECONCILIATION")
    print("=" * 60)

    print("\n1. MASTER MANIFEST")
    print("-" * 30)
    rows = [
        ["File", result.master_path.name],
        ["Project", manifest.project_id],
        ["Plan", manifest.plan_id],
        ["Build result", manifest.build_result],
        ["Verification loop", manifest.verification_loop],
        ["Test cases", f"{len(manifest):,}"],
    ]
    print(_format_table(["Field", "Value"], rows, max_col_width=64))

    print("\n2. REPORTS")
    print("-" * 30)
    counters = result.diagnostics.counters
    print(f"   Report folders: {', '.join(config.report_dirs)}")
    print(f"   Report files: {counters.get('report_files', 0):,}")
    print(f"   Skipped files: {counters.get('skipped_files', 0):,}")

    print("\n3. OUTCOMES")
    print("-" * 30)
    _print_outcomes(result)

    print("\n4. ANOMALIES")
    print("-" * 30)
    _print_anomalies(result.diagnostics, detail)
    if detail:
        print("\n5. REMAINING TEST CASES")
        print("-" * 30)
        for entry in result.derived["remaining"].entries:
            print(f"   {entry.test_case_id}  {entry.test_script_reference}")
    print()


def _run(
    root: Path,
    config_path: Optional[Path],
    output_dir: Optional[Path],
    summary: Optional[Path],
    log_file: Optional[Path],
) -> None:
    """Reconcile ``root`` and write the derived manifests.

    Args:
        root: Run directory holding the master manifest and report folders.
        config_path: Explicit YAML config; otherwise ``<root>/tareconcile.yaml``
            when present.
        output_dir: Overrides the configured output directory.
        summary: Optional path for a JSON run summary.
        log_file: Overrides the configured log mirror.
    """
    logger.info(f"Running reconciliation in: {root}")
    _start_time = perf_counter()
    file_handler: Optional[logging.Handler] = None

    try:
        config = load_config(root, config_path)
        effective_log = log_file or resolve_under_root(root, config.log_file)
        if effective_log is not None:
            ensure_parent_dir(effective_log)
            file_handler = add_file_handler(effective_log)
            logger.info(f"Mirroring log to: {effective_log}")

        diagnostics = Diagnostics()
        result = run_reconciliation(root, config, output_dir, diagnostics)
        diagnostics.emit(logger)

        if summary is not None:
            ensure_parent_dir(summary)
            summary.write_text(json.dumps(result.to_dict(), indent=2))
            logger.info(f"Summary written to: {summary}")

        _print_outcomes(result)
        for name in CLASSIFICATIONS:
            print(f"✅ Results written to: {result.written[name]}")

        _elapsed = perf_counter() - _start_time
        logger.info(
            f"Reconciliation completed successfully in {_format_duration(_elapsed)}"
        )
    except ReconcileError as e:
        logger.error(f"Reconciliation failed: {type(e).__name__}: {e}")
        print(f"❌ ERROR: {e}")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Failed to run reconciliation: {type(e).__name__}: {e}")
        print(f"❌ ERROR: Failed to run reconciliation: {type(e).__name__}: {e}")
        sys.exit(1)
    finally:
        if file_handler is not None:
            remove_file_handler(file_handler)


def main(argv: Optional[List[str]] = None) -> None:
    """Entry point for the ``tareconcile`` command.

    Args:
        argv: Optional list of command-line arguments. If ``None``, ``sys.argv``
            is used.
    """
    parser = argparse.ArgumentParser(
        prog="tareconcile",
        description="Split a master test plan into passed, failed and remaining tests.",
    )

    parser.add_argument(
        "--verbose", "-v", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--quiet", action="store_true", help="Suppress console output (logs only)"
    )

    subparsers = parser.add_subparsers(
        dest="command",
        required=True,
        title="Available commands",
        metavar="{run,inspect}",
        help="Available commands",
    )

    run_parser = subparsers.add_parser(
        "run", help="Reconcile reports and write passed/failed/remaining manifests"
    )
    run_parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Directory for the derived manifests (default: the run directory)",
    )
    run_parser.add_argument(
        "--summary",
        "-s",
        type=Path,
        default=None,
        help="Also write a JSON summary of the run to this file",
    )
    run_parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Mirror the log to this file",
    )

    inspect_parser = subparsers.add_parser(
        "inspect", help="Show how reports reconcile without writing files"
    )
    inspect_parser.add_argument(
        "--detail",
        "-d",
        action="store_true",
        help="List anomalous and remaining test case ids",
    )

    for p in (run_parser, inspect_parser):
        p.add_argument(
            "root",
            type=Path,
            nargs="?",
            default=None,
            help="Run directory (default: current directory)",
        )
        p.add_argument(
            "--config",
            "-c",
            type=Path,
            default=None,
            help="YAML config file (default: <root>/tareconcile.yaml when present)",
        )

    effective_args = sys.argv[1:] if argv is None else argv

    if not effective_args:
        parser.print_help()
        raise SystemExit(0)

    args = parser.parse_args(effective_args)

    if args.verbose:
        set_global_log_level(logging.DEBUG)
        logger.debug("Debug logging enabled")
    elif args.quiet:
        set_global_log_level(logging.WARNING)
    else:
        set_global_log_level(logging.INFO)

    root = args.root if args.root is not None else Path.cwd()

    if args.command == "run":
        _run(
            root=root,
            config_path=args.config,
            output_dir=args.output,
            summary=args.summary,
            log_file=args.log_file,
        )
    elif args.command == "inspect":
        _inspect_run(root, args.config, args.detail)


if __name__ == "__main__":
    main()
