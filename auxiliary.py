#!/usr/bin/env python3
"""
Auxiliary utility functions for bundlesize

Size string parsing and formatting, the restricted glob dialect used in
configuration files, and small path helpers for display.
"""

import pathlib
import re
from typing import Optional, Union

from bundlesize_errors import InvalidSizeFormatError

SIZE_UNITS = {
    "B": 1,
    "KB": 1024,
    "MB": 1024**2,
    "GB": 1024**3,
}

_SIZE_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*(B|KB|MB|GB)", re.IGNORECASE | re.ASCII)


def parse_size(value: str) -> int:
    """Parse a human-readable size string like '100KB' into bytes

    Args:
        value: Size string, a number followed by B, KB, MB or GB

    Returns:
        Size in bytes (units are powers of 1024)

    Raises:
        InvalidSizeFormatError: If the string is not <number><unit>
    """
    match = _SIZE_PATTERN.fullmatch(value) if isinstance(value, str) else None
    if not match:
        raise InvalidSizeFormatError(value)

    number = float(match.group(1))
    unit = match.group(2).upper()
    return int(number * SIZE_UNITS[unit])


def format_size(size_bytes: Union[int, float]) -> str:
    """Format byte size into the same units parse_size accepts

    Args:
        size_bytes: Size in bytes to format

    Returns:
        Formatted string like "2.50MB", "1.00KB" or "100B"
    """
    if size_bytes >= 1024**3:
        return f"{size_bytes / (1024**3):.2f}GB"
    if size_bytes >= 1024**2:
        return f"{size_bytes / (1024**2):.2f}MB"
    if size_bytes >= 1024:
        return f"{size_bytes / 1024:.2f}KB"
    return f"{int(size_bytes)}B"


def format_size_delta(delta_bytes: int) -> str:
    """Format a signed size difference, e.g. "+1.50KB" or "-200B" """
    sign = "+" if delta_bytes > 0 else "-" if delta_bytes < 0 else ""
    return f"{sign}{format_size(abs(delta_bytes))}"


def glob_to_regex(pattern: str) -> re.Pattern:
    """Translate a glob pattern into a regular expression for fullmatch()

    Only '*' (any run of characters, '/' included) and '?' (exactly one
    character) are special. Everything else matches literally.
    """
    parts = []
    for char in pattern:
        if char == "*":
            parts.append(".*")
        elif char == "?":
            parts.append(".")
        else:
            parts.append(re.escape(char))
    return re.compile("".join(parts), re.DOTALL)


def match_glob(pattern: str, file_path: str) -> bool:
    """Return True if the whole of *file_path* matches *pattern*"""
    return glob_to_regex(pattern).fullmatch(file_path) is not None


def format_path_for_display(path: str, home_path: Optional[str] = None) -> str:
    """Format file path for display by replacing home directory with ~

    Args:
        path: File path to format
        home_path: Home directory path (defaults to platform home)

    Returns:
        Path with home directory replaced by ~ if applicable
    """
    if home_path is None:
        home_path = str(pathlib.Path.home())

    if path == home_path or path.startswith(home_path.rstrip("/\\") + "/"):
        return "~" + path[len(home_path.rstrip("/\\")) :]
    return path


def truncate_path(path: str, max_length: int = 40) -> str:
    """Truncate long paths for display

    Args:
        path: Path to truncate
        max_length: Maximum length before truncation

    Returns:
        Truncated path with ... in the middle if too long
    """
    if len(path) <= max_length:
        return path

    # Account for "..."
    available = max_length - 3

    start_len = available // 2
    end_len = available - start_len

    return f"{path[:start_len]}...{path[-end_len:]}"
