"""Common fixtures for testing the SVG sprite sheet builder."""

import logging
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from svg_sheet.constants import LOGGER_NAME
from svg_sheet.models.config import AppConfig, BuildConfig


@pytest.fixture(autouse=True)
def reset_package_logger() -> Generator[None, None, None]:
    """Undo handler and level changes made by setup_logging."""
    logger = logging.getLogger(LOGGER_NAME)
    handlers = list(logger.handlers)
    level = logger.level
    yield
    logger.handlers = handlers
    logger.setLevel(level)


@pytest.fixture()
def svg_dir(tmp_path: Path) -> Path:
    """Create an empty input directory."""
    directory = tmp_path / "svgs"
    directory.mkdir()
    return directory


@pytest.fixture()
def write_svg(svg_dir: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes an icon into the input directory."""

    def _write(name: str, content: str) -> Path:
        path = svg_dir / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def output_file(tmp_path: Path) -> Path:
    """Path of the sprite written by a build."""
    return tmp_path / "out" / "sprite.svg"


@pytest.fixture()
def build_config(svg_dir: Path, output_file: Path) -> BuildConfig:
    """Create a build configuration for the temporary directories."""
    return BuildConfig(directory=str(svg_dir), file=str(output_file))


@pytest.fixture()
def app_config(build_config: BuildConfig) -> AppConfig:
    """Create an application configuration for the temporary directories."""
    return AppConfig(build=build_config, watch={"debounce_ms": 1, "poll_interval_ms": 1})
