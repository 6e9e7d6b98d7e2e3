#!/usr/bin/env python3
"""
File Scanner Module for bundlesize

Handles file discovery under the working directory, matching each file's path
(relative to the working directory) against a configured glob pattern.
"""

import logging
import os
import pathlib
from typing import Optional

from auxiliary import glob_to_regex

logger = logging.getLogger(__name__)


def relative_path(file_path: pathlib.Path, cwd: pathlib.Path) -> str:
    """Return *file_path* relative to *cwd* using forward slashes"""
    return pathlib.Path(os.path.relpath(file_path, cwd)).as_posix()


class FileScanner:
    """Best-effort recursive file discovery with glob matching"""

    def __init__(self, cwd: Optional[pathlib.Path] = None):
        """Initialize file scanner

        Args:
            cwd: Directory to scan; matched paths are made relative to it
        """
        self.cwd = pathlib.Path(cwd).resolve() if cwd else pathlib.Path.cwd()

    def find_files(self, pattern: str) -> list[pathlib.Path]:
        """Find all regular files whose relative path matches *pattern*

        Unreadable directories are skipped along with their subtree.

        Args:
            pattern: Glob pattern in the restricted dialect (see auxiliary.match_glob)

        Returns:
            Absolute paths of matching files
        """
        regex = glob_to_regex(pattern)
        matches: list[pathlib.Path] = []
        files_seen = 0

        # Explicit stack instead of recursion so deep trees can't exhaust it
        pending = [self.cwd]
        while pending:
            directory = pending.pop()
            try:
                with os.scandir(directory) as entries:
                    subdirs = []
                    for entry in entries:
                        try:
                            if entry.is_dir(follow_symlinks=False):
                                subdirs.append(pathlib.Path(entry.path))
                            elif entry.is_file():
                                files_seen += 1
                                file_path = pathlib.Path(entry.path)
                                if regex.fullmatch(relative_path(file_path, self.cwd)):
                                    matches.append(file_path)
                        except OSError:
                            continue
            except OSError as e:
                logger.debug("Skipping unreadable directory %s: %s", directory, e)
                continue

            # Reverse so the first listed subdirectory is visited next
            pending.extend(reversed(subdirs))

        logger.debug("Pattern %r matched %d of %d files", pattern, len(matches), files_seen)
        return matches
