#!/usr/bin/env python3
"""
Configuration management for bundlesize

Reads and writes the project-local .bundlesizerc.json file describing
which build outputs to check and their maximum gzip sizes.
"""

import json
import pathlib
from dataclasses import dataclass, field
from typing import Optional, Union

from bundlesize_errors import (
    ConfigAlreadyExistsError,
    ConfigNotFoundError,
    ConfigParseError,
    InvalidConfigShapeError,
)

DEFAULT_CONFIG_PATH = ".bundlesizerc.json"

DEFAULT_CONFIG = {
    "files": [
        {"path": "dist/*.js", "maxSize": "100KB"},
        {"path": "dist/*.css", "maxSize": "20KB"},
    ]
}


@dataclass(frozen=True)
class FileGroupConfig:
    """One glob pattern and its maximum compressed size"""

    path: str
    max_size: str

    def to_dict(self) -> dict:
        return {"path": self.path, "maxSize": self.max_size}

    @classmethod
    def from_dict(cls, data: dict, source: Optional[pathlib.Path] = None) -> "FileGroupConfig":
        """Create from a config entry, rejecting entries without string fields"""
        if not isinstance(data, dict):
            raise InvalidConfigShapeError('Invalid config: each entry in "files" must be an object', path=source)

        path = data.get("path")
        max_size = data.get("maxSize")
        if not isinstance(path, str) or not path:
            raise InvalidConfigShapeError('Invalid config: every entry needs a non-empty "path"', path=source)
        if not isinstance(max_size, str):
            raise InvalidConfigShapeError(f'Invalid config: entry "{path}" needs a "maxSize" string', path=source)

        return cls(path=path, max_size=max_size)


@dataclass
class BundleSizeConfig:
    """Configuration for bundlesize"""

    files: list[FileGroupConfig] = field(default_factory=list)
    source: Optional[pathlib.Path] = None

    def to_dict(self) -> dict:
        """Convert to dictionary in the on-disk format"""
        return {"files": [group.to_dict() for group in self.files]}

    @classmethod
    def from_dict(cls, data: dict, source: Optional[pathlib.Path] = None) -> "BundleSizeConfig":
        """Create from dictionary"""
        if not isinstance(data, dict) or not isinstance(data.get("files"), list):
            raise InvalidConfigShapeError(path=source)
        if not data["files"]:
            raise InvalidConfigShapeError('Invalid config: "files" must list at least one entry', path=source)

        return cls(
            files=[FileGroupConfig.from_dict(entry, source) for entry in data["files"]],
            source=source,
        )

    @classmethod
    def default(cls) -> "BundleSizeConfig":
        """Create default configuration"""
        return cls.from_dict(DEFAULT_CONFIG)


class ConfigManager:
    """Manages loading and creating the config file"""

    def __init__(self, config_path: Union[str, pathlib.Path, None] = None, cwd: Optional[pathlib.Path] = None):
        """Initialize configuration manager

        Args:
            config_path: Config file location, relative paths resolve against cwd
            cwd: Working directory (defaults to the process working directory)
        """
        self.cwd = pathlib.Path(cwd) if cwd else pathlib.Path.cwd()
        self.display_path = str(config_path or DEFAULT_CONFIG_PATH)
        self.config_file = (self.cwd / self.display_path).resolve()

    def load(self) -> BundleSizeConfig:
        """Load configuration from file"""
        if not self.config_file.is_file():
            raise ConfigNotFoundError(self.display_path)

        try:
            with self.config_file.open(encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigParseError(self.display_path, e.msg) from e
        except UnicodeDecodeError as e:
            raise ConfigParseError(self.display_path, f"undecodable byte at position {e.start}") from e

        return BundleSizeConfig.from_dict(data, source=self.config_file)

    def init(self) -> pathlib.Path:
        """Write the default configuration, never overwriting an existing file"""
        if self.config_file.exists():
            raise ConfigAlreadyExistsError(self.display_path)

        with self.config_file.open("x", encoding="utf-8") as f:
            json.dump(BundleSizeConfig.default().to_dict(), f, indent=2)
        return self.config_file


def load_config(config_path: Union[str, pathlib.Path, None] = None, cwd: Optional[pathlib.Path] = None) -> BundleSizeConfig:
    """Load the config file at *config_path* (default .bundlesizerc.json)"""
    return ConfigManager(config_path, cwd).load()


def init_config(config_path: Union[str, pathlib.Path, None] = None, cwd: Optional[pathlib.Path] = None) -> pathlib.Path:
    """Create a default config file and return its absolute path"""
    return ConfigManager(config_path, cwd).init()
