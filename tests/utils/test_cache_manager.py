"""Tests for the incremental sprite cache."""

import logging
import os
from collections.abc import Callable
from pathlib import Path
from unittest.mock import Mock

import pytest

from svg_sheet.exceptions import SvgParseError
from svg_sheet.svg.processor import load_svg
from svg_sheet.utils.cache_manager import SpriteCache

WriteSvg = Callable[[str, str], Path]

ICON = '<svg width="1" height="1" viewBox="0 0 1 1"><g id="{}"/></svg>'


def _touch(path: Path, seconds: int) -> None:
    os.utime(path, ns=(seconds * 1_000_000_000, seconds * 1_000_000_000))


class TestSpriteCache:
    """Test SpriteCache class."""

    def test_init(self) -> None:
        """Test cache initialization."""
        cache = SpriteCache()

        assert len(cache) == 0
        assert cache.hits == 0
        assert cache.misses == 0
        assert isinstance(cache.logger, logging.Logger)

    def test_reconcile_processes_new_files(self, write_svg: WriteSvg) -> None:
        """Test all files are processed on the first reconcile."""
        paths = [write_svg("a.svg", ICON.format("x")), write_svg("b.svg", ICON.format("y"))]
        cache = SpriteCache()

        results = cache.reconcile(paths)

        assert [r.unit.name for r in results] == ["a", "b"]
        assert cache.misses == 2
        assert cache.hits == 0
        assert paths[0] in cache
        assert cache.get(paths[1]).result.child_ids == ["y"]

    def test_unchanged_files_are_reused(self, write_svg: WriteSvg) -> None:
        """Test files with the same signature are not processed again."""
        paths = [write_svg("a.svg", ICON.format("x")), write_svg("b.svg", ICON.format("y"))]
        loader = Mock(side_effect=load_svg)
        cache = SpriteCache(loader=loader)
        cache.reconcile(paths)

        results = cache.reconcile(paths)

        assert loader.call_count == 2
        assert cache.hits == 2
        assert cache.misses == 0
        assert [r.unit.name for r in results] == ["a", "b"]

    def test_changed_file_is_reprocessed(self, write_svg: WriteSvg) -> None:
        """Test a changed modification time triggers processing."""
        path = write_svg("a.svg", ICON.format("x"))
        _touch(path, 1000)
        calls: list[Path] = []

        def loader(p: Path):
            calls.append(p)
            return load_svg(p)

        cache = SpriteCache(loader=loader)
        cache.reconcile([path])

        path.write_text(ICON.format("z"), encoding="utf-8")
        _touch(path, 2000)
        results = cache.reconcile([path])

        assert calls == [path, path]
        assert results[0].child_ids == ["z"]
        assert cache.misses == 1

    def test_removed_files_are_dropped(self, write_svg: WriteSvg) -> None:
        """Test entries for paths no longer listed are removed."""
        a = write_svg("a.svg", ICON.format("x"))
        b = write_svg("b.svg", ICON.format("y"))
        cache = SpriteCache()
        cache.reconcile([a, b])

        results = cache.reconcile([a])

        assert len(cache) == 1
        assert b not in cache
        assert [r.unit.name for r in results] == ["a"]

    def test_vanished_file_is_skipped(self, write_svg: WriteSvg, svg_dir: Path) -> None:
        """Test a file deleted after listing is skipped."""
        a = write_svg("a.svg", ICON.format("x"))
        gone = svg_dir / "gone.svg"

        results = SpriteCache().reconcile([a, gone])

        assert [r.unit.name for r in results] == ["a"]

    def test_error_keeps_other_entries(self, write_svg: WriteSvg) -> None:
        """Test a processing error propagates and leaves other entries intact."""
        a = write_svg("a.svg", ICON.format("x"))
        b = write_svg("b.svg", ICON.format("y"))
        cache = SpriteCache()
        cache.reconcile([a, b])
        previous_b = cache.get(b)

        b.write_text("<svg nope", encoding="utf-8")
        _touch(b, 3000)

        with pytest.raises(SvgParseError):
            cache.reconcile([a, b])

        assert cache.get(a) is not None
        assert cache.get(b) == previous_b

    def test_clear(self, write_svg: WriteSvg) -> None:
        """Test clearing the cache."""
        cache = SpriteCache()
        cache.reconcile([write_svg("a.svg", ICON.format("x"))])

        cache.clear()

        assert len(cache) == 0
