"""One-shot sprite builds.

Lists the candidate files of an input directory, processes them in listing
order, and streams the resulting patterns into the output file. The output is
replaced only when every file processed cleanly.
"""

import logging
from collections.abc import Iterable, Iterator, Sequence
from pathlib import Path

from svg_sheet.constants import SVG_EXTENSION
from svg_sheet.exceptions import (
    DirectoryReadError,
    FileWriteError,
    NoSvgFilesError,
    WarningsPresentError,
    chain_exception,
)
from svg_sheet.models.config import BuildConfig
from svg_sheet.models.sprite import BuildResult, ProcessedSvg, SpriteUnit
from svg_sheet.svg.assembler import IdRegistry, write_sprite
from svg_sheet.svg.processor import load_svg
from svg_sheet.utils.file_utils import NullWriter, atomic_text_writer, list_files

logger = logging.getLogger(__name__)


def list_svg_candidates(directory: str | Path, output_file: str | Path) -> list[Path]:
    """List the input files of a build.

    Args:
        directory: Input directory.
        output_file: Output path; a file with the same name is never an input.

    Returns:
        Paths of the ``.svg`` files directly inside ``directory``, sorted by name.

    Raises:
        DirectoryReadError: If the directory cannot be listed.
    """
    try:
        paths = list_files(directory, f"*{SVG_EXTENSION}")
    except OSError as e:
        raise chain_exception(
            DirectoryReadError(
                f"failed to read directory: {directory}",
                {"path": str(directory), "error": str(e)},
            ),
            e,
        ) from e

    output_name = Path(output_file).name
    return [path for path in paths if path.name != output_name]


def log_diagnostics(result: ProcessedSvg) -> int:
    """Log the warnings of one processed file.

    Args:
        result: The processed file.

    Returns:
        The number of warnings logged.
    """
    for warning in result.warnings:
        logger.warning(warning.message, extra={"path": warning.path, **warning.details})
    return result.warning_count


def write_sprite_file(
    output_file: str | Path, units: Iterable[SpriteUnit], dry_run: bool = False
) -> int:
    """Stream sprite units into the output file.

    The file is replaced atomically once all units are written. When
    ``units`` raises, the exception propagates and the existing file is kept.

    Args:
        output_file: Destination path.
        units: Units in output order, possibly produced lazily.
        dry_run: Discard the document instead of writing it.

    Returns:
        The number of patterns written.

    Raises:
        FileWriteError: If the output cannot be written.
    """
    if dry_run:
        return write_sprite(NullWriter(), units)

    try:
        with atomic_text_writer(output_file) as sink:
            return write_sprite(sink, units)
    except OSError as e:
        raise chain_exception(
            FileWriteError(
                f"failed to write file: {output_file}",
                {"path": str(output_file), "error": str(e)},
            ),
            e,
        ) from e


def check_warnings(warning_count: int, fail_on_warn: bool) -> None:
    """Raise if warnings occurred and warnings are treated as errors.

    Raises:
        WarningsPresentError: If ``fail_on_warn`` is set and ``warning_count`` is positive.
    """
    if fail_on_warn and warning_count > 0:
        raise WarningsPresentError(
            f"aborting due to {warning_count} warning(s) (use --no-fail-on-warn to ignore)",
            {"count": warning_count},
        )


class _BuildStream:
    """Lazily processes files, checking ids and counting warnings as it goes."""

    def __init__(self, paths: Sequence[Path]) -> None:
        self.paths = paths
        self.registry = IdRegistry()
        self.warning_count = 0

    def __iter__(self) -> Iterator[SpriteUnit]:
        for path in self.paths:
            result = load_svg(path)
            self.registry.register(result.child_ids, result.path)
            self.warning_count += log_diagnostics(result)
            yield result.unit


def build_sprite(config: BuildConfig) -> BuildResult:
    """Build the sprite for a directory in a single pass.

    Each file is read, processed, and written before the next one is read.
    Any error aborts the build and leaves a previously written output as it
    was.

    Args:
        config: Build configuration.

    Returns:
        A summary of the build.

    Raises:
        DirectoryReadError: If the input directory cannot be listed.
        NoSvgFilesError: If the directory holds no candidate files.
        FileReadError: If an input file cannot be read.
        SvgInputError: If an input file is invalid.
        IdCollisionError: If two files emit the same data-id.
        FileWriteError: If the output cannot be written.
        WarningsPresentError: If warnings occurred and ``fail_on_warn`` is set.
    """
    paths = list_svg_candidates(config.directory, config.file)
    if not paths:
        raise NoSvgFilesError(
            f"no SVG files found in directory: {config.directory}",
            {"path": config.directory},
        )

    logger.info(f"Building {config.file} from {len(paths)} file(s) in {config.directory}")
    stream = _BuildStream(paths)
    pattern_count = write_sprite_file(config.file, stream, dry_run=config.dry_run)

    if config.dry_run:
        logger.info(f"Dry run: validated {pattern_count} file(s), nothing written")
    else:
        logger.info(f"Wrote {config.file} with {pattern_count} pattern(s)")

    check_warnings(stream.warning_count, config.fail_on_warn)

    return BuildResult(
        output=config.file,
        pattern_count=pattern_count,
        warning_count=stream.warning_count,
        dry_run=config.dry_run,
    )
