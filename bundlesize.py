#!/usr/bin/env python3
"""
bundlesize - Track and enforce bundle size limits

Checks built front-end output files against per-pattern size budgets,
measured after gzip compression, and reports pass/fail per file.

Features:
- Glob patterns with human-readable limits in .bundlesizerc.json
- Gzip-compressed size as the enforced metric
- Colored table or JSON report
- Watch mode that re-checks on every change and shows size deltas

Usage:
    bundlesize                          # Check once, exit 1 if any file is over budget
    bundlesize --init                   # Create a default .bundlesizerc.json
    bundlesize --watch                  # Re-check whenever a matched file changes
    bundlesize --json                   # Machine-readable output
    bundlesize --config custom.json     # Use another config file
"""

import argparse
import logging
import pathlib
import signal
import sys
from typing import Optional

from rich import box
from rich.markup import escape
from rich.table import Table

from auxiliary import format_size, truncate_path
from bundlesize_config import ConfigManager
from bundlesize_errors import BundleSizeError
from console_ui import ConsoleUI, setup_logging
from size_checker import CheckReport, FileStatus, SizeChecker
from watch_session import WatchSession

logger = logging.getLogger(__name__)

PATH_COLUMN_WIDTH = 36


class BundleSize:
    """Main application class for bundlesize"""

    def __init__(self, args: argparse.Namespace, cwd: Optional[pathlib.Path] = None, ui: Optional[ConsoleUI] = None):
        self.args = args
        self.cwd = pathlib.Path(cwd) if cwd else pathlib.Path.cwd()
        self.ui = ui or ConsoleUI(no_color=getattr(args, "no_color", False))
        self.config_manager = ConfigManager(getattr(args, "config", None), self.cwd)
        self.checker = SizeChecker(cwd=self.cwd, warning_callback=self.ui.print_warning)
        self._session: Optional[WatchSession] = None

    # -- reporting -----------------------------------------------------------

    def report(self, report: CheckReport):
        """Render a report in the format selected on the command line"""
        if getattr(self.args, "json", False):
            self.ui.print_json(report.to_dict())
        else:
            self.report_table(report)

    def report_table(self, report: CheckReport):
        self.ui.print_plain()
        self.ui.print_plain("[bold]Bundle Size Check Results[/bold]")

        table = Table(box=box.SIMPLE_HEAD, show_lines=False)
        table.add_column("File", style="white", min_width=PATH_COLUMN_WIDTH, no_wrap=True)
        table.add_column("Raw", justify="right", style="dim", min_width=9)
        table.add_column("Gzip", justify="right", style="yellow", min_width=9)
        table.add_column("Limit", justify="right", style="cyan", min_width=9)
        table.add_column("Status", justify="center", min_width=6, no_wrap=True)

        for result in report.files:
            if result.status is FileStatus.PASS:
                status = "[green]✓ PASS[/green]"
            else:
                status = "[red]✗ FAIL[/red]"
            table.add_row(
                escape(truncate_path(result.path, PATH_COLUMN_WIDTH)),
                format_size(result.size),
                format_size(result.gzip_size),
                format_size(result.max_size),
                status,
            )

        self.ui.print_table(table)

        if report.passed:
            self.ui.print_success("✓ All files passed size checks")
        else:
            self.ui.print_failure("✗ Some files exceeded size limits")

        failed = len(report.failed_files)
        self.ui.print_progress(f"{len(report.files) - failed} passed, {failed} failed")

    # -- commands ------------------------------------------------------------

    def run_init(self) -> int:
        self.config_manager.init()
        self.ui.print_success(f"Created config file: {self.config_manager.display_path}")
        return 0

    def run_check(self) -> int:
        config = self.config_manager.load()
        report = self.checker.check(config)
        self.report(report)
        return 0 if report.passed else 1

    def run_watch(self) -> int:
        config = self.config_manager.load()
        session = WatchSession(
            config,
            self.checker,
            self.ui,
            render_report=self.report,
        )
        self._session = session

        previous = {}
        for signum in (signal.SIGINT, getattr(signal, "SIGTERM", None)):
            if signum is not None:
                previous[signum] = signal.signal(signum, self._signal_handler)

        try:
            session.start()
            session.run()
        finally:
            session.stop()
            for signum, handler in previous.items():
                if handler is not None:
                    signal.signal(signum, handler)
            self._session = None

        return 0

    def _signal_handler(self, signum, frame):
        self.ui.print_info("\nStopping watch mode...")
        if self._session is not None:
            self._session.request_stop()

    # -- main entry point ----------------------------------------------------

    def run(self) -> int:
        if getattr(self.args, "init", False):
            return self.run_init()
        if getattr(self.args, "watch", False):
            return self.run_watch()
        return self.run_check()


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bundlesize",
        description="bundlesize - Track and enforce bundle size limits",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  bundlesize
  bundlesize --init
  bundlesize --watch
  bundlesize --json
  bundlesize --config custom-config.json
        """,
    )
    parser.add_argument("--init", action="store_true", help="Create a default .bundlesizerc.json config file")
    parser.add_argument("--watch", action="store_true", help="Watch for file changes and re-check automatically")
    parser.add_argument("--json", action="store_true", help="Output results in JSON format")
    parser.add_argument("--config", metavar="PATH", default=None, help="Specify a custom config file path")
    parser.add_argument("--no-color", action="store_true", help="Disable colored output")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log scan and sizing details")
    return parser


def main(argv: Optional[list[str]] = None, cwd: Optional[pathlib.Path] = None) -> int:
    """Main entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    ui = ConsoleUI(no_color=args.no_color)
    setup_logging(ui, verbose=args.verbose)

    app = BundleSize(args, cwd=cwd, ui=ui)
    try:
        return app.run()
    except (BundleSizeError, OSError) as e:
        ui.print_error(f"Error: {e}")
        logger.debug("Run aborted", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
