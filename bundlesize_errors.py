"""Exceptions raised by bundlesize"""

import pathlib
from typing import Optional, Union

PathLike = Union[str, pathlib.Path]


class BundleSizeError(Exception):
    """Base exception for all bundlesize errors"""

    def __init__(self, message: str, path: Optional[PathLike] = None):
        self.message = message
        self.path = path
        super().__init__(message)


class ConfigNotFoundError(BundleSizeError):
    """Config file does not exist"""

    def __init__(self, path: PathLike):
        super().__init__(f"Config file not found: {path}", path=path)


class ConfigAlreadyExistsError(BundleSizeError):
    """Refusing to overwrite an existing config file"""

    def __init__(self, path: PathLike):
        super().__init__(f"Config file already exists: {path}", path=path)


class InvalidConfigShapeError(BundleSizeError):
    """Config content does not have the expected structure"""

    def __init__(self, message: str = 'Invalid config: "files" must be an array', path: Optional[PathLike] = None):
        super().__init__(message, path=path)


class ConfigParseError(InvalidConfigShapeError):
    """Config file is not valid JSON"""

    def __init__(self, path: PathLike, reason: str):
        super().__init__(f"Invalid config: {path} is not valid JSON ({reason})", path=path)


class InvalidSizeFormatError(BundleSizeError, ValueError):
    """Size string is not <number><B|KB|MB|GB>"""

    def __init__(self, value):
        self.value = value
        super().__init__(f"Invalid size format: {value}")


class WatchSetupError(BundleSizeError):
    """Watch mode could not be started"""
