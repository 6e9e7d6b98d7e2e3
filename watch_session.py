#!/usr/bin/env python3
"""
Watch Session Module

Re-runs bundle size checks whenever a matched file changes on disk.

The watchdog observer delivers events on its own thread. Events are only
queued there; run() handles them one at a time on the calling thread, so
re-checks never overlap and the debounce map is touched by one thread only.
"""

import logging
import pathlib
import queue
import threading
from datetime import datetime
from typing import Callable, Optional

from rich.markup import escape
from watchdog.events import FileSystemEvent, FileSystemEventHandler
from watchdog.observers import Observer

from auxiliary import format_path_for_display, format_size_delta
from bundlesize_config import BundleSizeConfig
from bundlesize_errors import WatchSetupError
from console_ui import ConsoleUI
from file_scanner import relative_path
from size_checker import CheckReport, SizeChecker

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.1


class _ChangeHandler(FileSystemEventHandler):
    """Forwards modification events for watched files to a queue"""

    def __init__(self, watched: set[pathlib.Path], events: "queue.Queue[pathlib.Path]"):
        super().__init__()
        self.watched = watched
        self.events = events

    def on_modified(self, event: FileSystemEvent):
        if event.is_directory:
            return
        path = pathlib.Path(event.src_path)
        if path in self.watched:
            self.events.put(path)

    def on_created(self, event: FileSystemEvent):
        # Editors and bundlers often replace files instead of writing in place
        self.on_modified(event)

    def on_moved(self, event: FileSystemEvent):
        # Atomic saves write a temp file and rename it over the target
        if event.is_directory:
            return
        dest = pathlib.Path(event.dest_path)
        if dest in self.watched:
            self.events.put(dest)


class WatchSession:
    """One watch-mode run: initial check, change monitoring and teardown"""

    def __init__(
        self,
        config: BundleSizeConfig,
        checker: SizeChecker,
        ui: ConsoleUI,
        render_report: Optional[Callable[[CheckReport], None]] = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
    ):
        self.config = config
        self.checker = checker
        self.ui = ui
        self.render_report = render_report or self._print_json
        self.debounce_seconds = debounce_seconds

        self.watched_files: list[pathlib.Path] = []
        self.last_report: Optional[CheckReport] = None
        self._last_modified: dict[pathlib.Path, float] = {}
        self._events: "queue.Queue[pathlib.Path]" = queue.Queue()
        self._observer: Optional[Observer] = None
        self._stop_requested = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._observer is not None

    def _print_json(self, report: CheckReport):
        self.ui.print_json(report.to_dict())

    def resolve_watch_paths(self) -> list[pathlib.Path]:
        """Resolve configured patterns to the files that currently match them"""
        return [path.resolve() for path in self.checker.find_all_files(self.config)]

    def start(self):
        """Run the initial check and begin monitoring matched files

        Raises:
            WatchSetupError: If no files match or the observer cannot start
        """
        if self.is_running:
            return

        self.watched_files = self.resolve_watch_paths()
        if not self.watched_files:
            raise WatchSetupError("No files to watch: no configured pattern matches an existing file")

        self.ui.print_info("Watching for changes...")
        self.ui.print_plain("Files being watched:")
        for path in self.watched_files:
            self.ui.print_plain(f"  - {escape(format_path_for_display(str(path)))}")
        self.ui.print_plain()
        self.ui.print_plain("Press Ctrl+C to stop")
        self.ui.print_plain()

        self.record_baseline()
        self.render_report(self.last_report)

        handler = _ChangeHandler(set(self.watched_files), self._events)
        observer = Observer()
        try:
            for directory in sorted({path.parent for path in self.watched_files}):
                observer.schedule(handler, str(directory), recursive=False)
            observer.start()
        except OSError as e:
            self._last_modified.clear()
            raise WatchSetupError(f"Could not start file watcher: {e}") from e

        self._observer = observer
        logger.debug("Watching %d files", len(self.watched_files))

    def record_baseline(self):
        """Run a check and remember each watched file's modification time"""
        self.last_report = self.checker.check(self.config)
        for path in self.watched_files:
            try:
                self._last_modified[path] = path.stat().st_mtime
            except OSError:
                self._last_modified[path] = 0.0

    def stop(self):
        """Release all file watches; safe to call more than once"""
        self._stop_requested.set()
        observer, self._observer = self._observer, None
        if observer is not None:
            observer.stop()
            observer.join()
        self._last_modified.clear()

    def request_stop(self):
        """Ask run() to return; callable from a signal handler"""
        self._stop_requested.set()

    def run(self, poll_interval: float = 0.5):
        """Process change events until stop is requested"""
        while not self._stop_requested.is_set():
            try:
                path = self._events.get(timeout=poll_interval)
            except queue.Empty:
                continue
            self.handle_change(path)

    def handle_change(self, path: pathlib.Path) -> bool:
        """Re-check after a change to *path*; returns True if a check ran

        Events for the same file within the debounce window (measured by
        modification time) are ignored. Errors are logged and swallowed so
        one bad re-check does not end the session.
        """
        if path not in self._last_modified:
            return False

        try:
            mtime = path.stat().st_mtime
        except OSError as e:
            logger.error("Error checking %s: %s", path, e)
            return False

        if mtime - self._last_modified[path] < self.debounce_seconds:
            return False
        self._last_modified[path] = mtime

        self.ui.print_plain()
        self.ui.console.print(f"Change detected: {escape(path.name)}", style="yellow")
        self.ui.print_progress(datetime.now().strftime("%H:%M:%S"))
        self.ui.print_plain()

        try:
            report = self.checker.check(self.config)
        except Exception as e:
            logger.error("Error checking %s: %s", path, e)
            return False

        self.render_report(report)
        self.show_size_changes(path, report)
        self.last_report = report

        self.ui.print_info("Watching for changes...")
        return True

    def show_size_changes(self, path: pathlib.Path, report: CheckReport):
        """Print raw and gzip size deltas for *path* against the last report"""
        if self.last_report is None:
            return

        rel = relative_path(path, self.checker.cwd)
        old = self.last_report.find(rel)
        new = report.find(rel)
        if old is None or new is None:
            return

        raw_diff = new.size - old.size
        gzip_diff = new.gzip_size - old.gzip_size
        if raw_diff == 0 and gzip_diff == 0:
            return

        self.ui.print_plain("Size Changes:")
        if raw_diff != 0:
            color = "red" if raw_diff > 0 else "green"
            self.ui.console.print(f"  Raw:  [{color}]{format_size_delta(raw_diff)}[/{color}]")
        if gzip_diff != 0:
            color = "red" if gzip_diff > 0 else "green"
            self.ui.console.print(f"  Gzip: [{color}]{format_size_delta(gzip_diff)}[/{color}]")
