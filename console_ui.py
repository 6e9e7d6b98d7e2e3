#!/usr/bin/env python3
"""
Console UI Module using Rich

Provides the console interface for bundlesize: styled status messages,
result tables, JSON output and log rendering. Errors and warnings go to
stderr so machine-readable output on stdout stays clean.
"""

import json
import logging
from typing import Any, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table


class ConsoleUI:
    """Console UI handler using Rich for CLI output"""

    def __init__(self, force_terminal: Optional[bool] = None, no_color: bool = False, width: Optional[int] = None):
        """Initialize stdout and stderr consoles with optional terminal forcing"""
        self.console = Console(force_terminal=force_terminal, no_color=no_color, width=width, highlight=False)
        self.err_console = Console(
            stderr=True, force_terminal=force_terminal, no_color=no_color, width=width, highlight=False
        )

    # Basic styled output methods
    def print_success(self, message: str):
        """Print success message in green"""
        self.console.print(message, style="green")

    def print_failure(self, message: str):
        """Print failure message in red on stdout"""
        self.console.print(message, style="red")

    def print_error(self, message: str):
        """Print error message in red to stderr"""
        self.err_console.print(message, style="red bold", markup=False, soft_wrap=True)

    def print_warning(self, message: str):
        """Print warning message in yellow to stderr"""
        self.err_console.print(message, style="yellow", markup=False, soft_wrap=True)

    def print_info(self, message: str):
        """Print info message in cyan"""
        self.console.print(message, style="cyan")

    def print_progress(self, message: str):
        """Print progress message in dim white"""
        self.console.print(message, style="white dim")

    def print_plain(self, message: str = ""):
        """Print message without styling"""
        self.console.print(message)

    def print_table(self, table: Table):
        """Print a table followed by a blank line"""
        self.console.print(table)
        self.console.print()

    def print_json(self, data: Any):
        """Print data as indented JSON, without markup or wrapping"""
        self.console.print_json(json.dumps(data), indent=2, highlight=False)


def setup_logging(ui: ConsoleUI, verbose: bool = False):
    """Route stdlib logging through Rich on the stderr console"""
    handler = RichHandler(console=ui.err_console, show_path=verbose, markup=False, rich_tracebacks=verbose)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))

    root = logging.getLogger()
    for existing in list(root.handlers):
        if isinstance(existing, RichHandler):
            root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG if verbose else logging.WARNING)
