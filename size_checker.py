#!/usr/bin/env python3
"""
Bundle Size Checking Module

Compresses every file matched by the configured patterns with gzip and
compares the compressed size against each group's limit.

Features:
- Per-group glob matching via FileScanner
- Gzip size at zlib's default compression level
- Structured, immutable per-file results
- Warnings for patterns that match nothing
"""

import gzip
import logging
import pathlib
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional

from auxiliary import parse_size
from bundlesize_config import BundleSizeConfig
from file_scanner import FileScanner, relative_path

logger = logging.getLogger(__name__)

# Same level zlib uses for Z_DEFAULT_COMPRESSION
DEFAULT_GZIP_LEVEL = 6


class FileStatus(Enum):
    """Outcome of a single file check"""

    PASS = "pass"
    FAIL = "fail"


@dataclass(frozen=True)
class FileResult:
    """Size check result for one matched file"""

    path: str
    size: int
    gzip_size: int
    max_size: int
    status: FileStatus

    @property
    def passed(self) -> bool:
        return self.status is FileStatus.PASS

    def to_dict(self) -> dict:
        return {
            "path": self.path,
            "size": self.size,
            "gzipSize": self.gzip_size,
            "maxSize": self.max_size,
            "status": self.status.value,
        }


@dataclass
class CheckReport:
    """All file results of one check run, in config order"""

    files: list[FileResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(result.passed for result in self.files)

    @property
    def failed_files(self) -> list[FileResult]:
        return [result for result in self.files if not result.passed]

    def find(self, path: str) -> Optional[FileResult]:
        """Return the first result for *path*, if any"""
        for result in self.files:
            if result.path == path:
                return result
        return None

    def to_dict(self) -> dict:
        return {"files": [result.to_dict() for result in self.files], "passed": self.passed}


def get_gzip_size(file_path: pathlib.Path, level: int = DEFAULT_GZIP_LEVEL) -> int:
    """Return the gzip-compressed size of a file in bytes

    Raises:
        OSError: If file cannot be read
    """
    try:
        data = pathlib.Path(file_path).read_bytes()
    except OSError as e:
        raise OSError(f"Cannot read file {file_path}: {e}") from e
    return len(gzip.compress(data, compresslevel=level, mtime=0))


class SizeChecker:
    """Runs size checks for every file group in a config"""

    def __init__(
        self,
        cwd: Optional[pathlib.Path] = None,
        warning_callback: Optional[Callable[[str], None]] = None,
    ):
        """Initialize size checker

        Args:
            cwd: Working directory that patterns are matched against
            warning_callback: Optional callback for non-fatal warnings
        """
        self.cwd = pathlib.Path(cwd).resolve() if cwd else pathlib.Path.cwd()
        self.warning_callback = warning_callback
        self.scanner = FileScanner(cwd=self.cwd)

    def _warn(self, message: str):
        if self.warning_callback:
            self.warning_callback(message)
        else:
            logger.warning(message)

    def check_file(self, file_path: pathlib.Path, max_size: int) -> FileResult:
        """Measure one file against a byte limit (the limit is inclusive)"""
        size = file_path.stat().st_size
        gzip_size = get_gzip_size(file_path)
        status = FileStatus.PASS if gzip_size <= max_size else FileStatus.FAIL
        logger.debug("%s: %d bytes raw, %d gzip, limit %d -> %s", file_path, size, gzip_size, max_size, status.value)

        return FileResult(
            path=relative_path(file_path, self.cwd),
            size=size,
            gzip_size=gzip_size,
            max_size=max_size,
            status=status,
        )

    def check(self, config: BundleSizeConfig) -> CheckReport:
        """Check all configured file groups

        Raises:
            InvalidSizeFormatError: If any group's maxSize cannot be parsed
            OSError: If a matched file cannot be read
        """
        report = CheckReport()

        for group in config.files:
            max_size = parse_size(group.max_size)
            files = self.scanner.find_files(group.path)

            if not files:
                self._warn(f'Warning: No files found for pattern "{group.path}"')
                continue

            for file_path in files:
                report.files.append(self.check_file(file_path, max_size))

        return report

    def find_all_files(self, config: BundleSizeConfig) -> list[pathlib.Path]:
        """Return every file matched by any group, without duplicates"""
        seen: dict[pathlib.Path, None] = {}
        for group in config.files:
            for file_path in self.scanner.find_files(group.path):
                seen.setdefault(file_path, None)
        return list(seen)
