"""
CLI subcommand implementations for the sarif-review system.

Subcommands::

    sarif-review runs    LOG [LOG ...] [--keywords K] [--level L ...]
    sarif-review results LOG [LOG ...] --run N [--keywords K]
"""

import argparse
import logging
import sys
from pathlib import Path

from core.config import BASELINE, DEFAULT_FILTER_STATE, KEYWORDS, LEVEL, SUPPRESSION
from core.viewer import Viewer

from .interface import load_logs, print_results, print_runs


def _build_viewer(args) -> Viewer:
    """Load the logs named on the command line and apply filter options."""
    try:
        logs = load_logs([Path(p) for p in args.logs])
    except (FileNotFoundError, ValueError) as e:
        print(f"Error: {e}")
        sys.exit(1)

    viewer = Viewer(logs, default_filter_state=DEFAULT_FILTER_STATE, hide_baseline=args.hide_baseline)
    if args.keywords:
        viewer.set_filter(KEYWORDS, args.keywords)
    if args.level:
        viewer.set_filter(LEVEL, args.level)
    if args.baseline:
        viewer.set_filter(BASELINE, args.baseline)
    if args.all_suppression:
        viewer.clear_filter(SUPPRESSION)
    elif args.suppression:
        viewer.set_filter(SUPPRESSION, args.suppression)
    return viewer


# ---------------------------------------------------------------------------
# Subcommand: runs
# ---------------------------------------------------------------------------

def cmd_runs(args):
    """Print runs ranked by filtered result count."""
    viewer = _build_viewer(args)
    print_runs(viewer.results_view, warn_old_version=viewer.warn_old_version)


# ---------------------------------------------------------------------------
# Subcommand: results
# ---------------------------------------------------------------------------

def cmd_results(args):
    """Print the filtered results of one run (by run index)."""
    viewer = _build_viewer(args)
    for run in viewer.runs:
        if run.index == args.run:
            print_results(run)
            return
    print(f"Error: No run with index {args.run}")
    sys.exit(1)


def _add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("logs", nargs="+", help="SARIF log file(s)")
    parser.add_argument("--keywords", help="Keyword query (all tokens must match)")
    parser.add_argument(
        "--level", action="append", choices=["none", "note", "warning", "error"],
        help="Only include results with this level (repeatable)",
    )
    parser.add_argument(
        "--baseline", action="append", choices=["new", "unchanged", "updated", "absent"],
        help="Only include results with this baseline state (repeatable)",
    )
    parser.add_argument(
        "--suppression", action="append", choices=["suppressed", "unsuppressed"],
        help="Suppression states to include (default: unsuppressed)",
    )
    parser.add_argument(
        "--all-suppression", action="store_true",
        help="Include suppressed and unsuppressed results",
    )
    parser.add_argument(
        "--hide-baseline", action="store_true",
        help="Ignore baseline state when filtering",
    )


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="sarif-review",
        description="Filter and rank static-analysis results from SARIF logs",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- runs ---
    p_runs = subparsers.add_parser("runs", help="List runs ranked by matching results")
    _add_filter_arguments(p_runs)

    # --- results ---
    p_results = subparsers.add_parser("results", help="List the matching results of one run")
    _add_filter_arguments(p_results)
    p_results.add_argument("--run", type=int, required=True, help="Run index (see 'runs')")

    return parser


def main(argv=None):
    """Entry point for the CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == 'runs':
        cmd_runs(args)
    elif args.command == 'results':
        cmd_results(args)
