"""Shared fixtures for bundlesize tests."""

import json
import pathlib
import random

import pytest

from console_ui import ConsoleUI


def write_config(directory: pathlib.Path, files: list, name: str = ".bundlesizerc.json") -> pathlib.Path:
    """Write a config file with the given entries and return its path."""
    config_path = directory / name
    config_path.write_text(json.dumps({"files": files}), encoding="utf-8")
    return config_path


def incompressible_bytes(count: int, seed: int = 1234) -> bytes:
    """Deterministic pseudo-random bytes that gzip can barely shrink."""
    rng = random.Random(seed)
    return bytes(rng.getrandbits(8) for _ in range(count))


@pytest.fixture
def project(tmp_path):
    """A small front-end project with built files under dist/."""
    dist = tmp_path / "dist"
    (dist / "assets").mkdir(parents=True)
    (dist / "app.js").write_text("console.log('app');\n" * 200, encoding="utf-8")
    (dist / "style.css").write_text("body { margin: 0; }\n" * 50, encoding="utf-8")
    (dist / "assets" / "vendor.js").write_text("var vendor = 1;\n" * 100, encoding="utf-8")
    return tmp_path


@pytest.fixture
def ui():
    """Console UI with a wide, colorless console so output is easy to assert on."""
    return ConsoleUI(no_color=True, width=200)
