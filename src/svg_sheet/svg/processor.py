"""Per-file processing of SVG icons into sprite units.

Turns the text of one icon file into a :class:`SpriteUnit` by parsing its root
tag, normalizing dimensions, validating and relocating the root id, and
rewriting child ids. Cross-file id collisions are not checked here; they need
the whole file set and are handled by the caller.
"""

import logging
from pathlib import Path

from svg_sheet.constants import DATA_ID_ATTRIBUTE, SVG_EXTENSION
from svg_sheet.exceptions import (
    FileReadError,
    InvalidDimensionError,
    InvalidIdAfterSanitizeError,
    InvalidViewBoxError,
    RootIdReferencedError,
    chain_exception,
)
from svg_sheet.models.sprite import (
    Attribute,
    Diagnostic,
    DiagnosticKind,
    ProcessedSvg,
    SpriteUnit,
)
from svg_sheet.svg.ids import references_id, rewrite_ids_to_data_ids
from svg_sheet.svg.normalize import normalize_length, normalize_viewbox
from svg_sheet.svg.parsing import parse_svg
from svg_sheet.svg.sanitize import sanitize_id
from svg_sheet.utils.file_utils import read_text

logger = logging.getLogger(__name__)

_MISSING_WARNINGS = (
    ("width", DiagnosticKind.MISSING_WIDTH, "Missing width on root <svg>"),
    ("height", DiagnosticKind.MISSING_HEIGHT, "Missing height on root <svg>"),
    ("viewBox", DiagnosticKind.MISSING_VIEWBOX, "Missing viewBox on root <svg>"),
)


def sprite_name(path: str | Path) -> str:
    """Derive the pattern id for a file.

    Args:
        path: Path of the input file.

    Returns:
        The file name without its ``.svg`` extension.
    """
    name = Path(path).name
    if name.endswith(SVG_EXTENSION):
        return name[: -len(SVG_EXTENSION)]
    return name


def process_svg(path: str | Path, text: str) -> ProcessedSvg:
    """Process the content of one SVG file.

    Args:
        path: Path of the file, used for the unit name and in errors.
        text: Full file content.

    Returns:
        The sprite unit, its emitted child ids, and any warnings.

    Raises:
        SvgParseError: If the root tag cannot be parsed.
        InvalidDimensionError: If width or height is not a positive length.
        InvalidViewBoxError: If viewBox is malformed.
        InvalidIdAfterSanitizeError: If the root id sanitizes to nothing.
        RootIdReferencedError: If the root id is referenced in the content.
    """
    path_str = str(path)
    parsed = parse_svg(text, path_str)
    content = parsed.content

    attributes: list[Attribute] = []
    root_id: str | None = None
    seen: set[str] = set()
    for key, value in parsed.attributes:
        if key == "id":
            root_id = value
            continue
        if key in ("width", "height"):
            normalized = normalize_length(value)
            if normalized is None:
                raise InvalidDimensionError(
                    f"invalid {key}='{value}' in {path_str}; "
                    "expected positive number (optionally 'px')",
                    {"path": path_str, "attribute": key, "value": value},
                )
            value = normalized
        elif key == "viewBox":
            normalized = normalize_viewbox(value)
            if normalized is None:
                raise InvalidViewBoxError(
                    f"invalid viewBox='{value}' in {path_str}; "
                    "expected four numbers with positive width/height",
                    {"path": path_str, "value": value},
                )
            value = normalized
        seen.add(key)
        attributes.append((key, value))

    warnings: list[Diagnostic] = []
    if root_id is not None:
        sanitized = sanitize_id(root_id)
        if not sanitized:
            raise InvalidIdAfterSanitizeError(
                f"id '{root_id}' in {path_str} is empty after sanitization",
                {"path": path_str, "original": root_id},
            )
        if references_id(content, root_id):
            raise RootIdReferencedError(
                f"root <svg> id '{root_id}' in {path_str} is referenced inside the document; "
                "root ids are moved to data-id",
                {"path": path_str, "id": root_id},
            )
        attributes.append((DATA_ID_ATTRIBUTE, sanitized))
        warnings.append(
            Diagnostic(
                kind=DiagnosticKind.ROOT_ID_MOVED,
                path=path_str,
                message="Root <svg> id moved to data-id",
                details={"original_id": root_id, "sanitized_id": sanitized},
            )
        )

    rewritten, child_ids = rewrite_ids_to_data_ids(content)

    for key, kind, message in _MISSING_WARNINGS:
        if key not in seen:
            warnings.append(Diagnostic(kind=kind, path=path_str, message=message))

    logger.debug(f"Processed {path_str}: {len(child_ids)} child id(s), {len(warnings)} warning(s)")

    return ProcessedSvg(
        path=path_str,
        unit=SpriteUnit(name=sprite_name(path), attributes=attributes, content=rewritten),
        child_ids=child_ids,
        warnings=warnings,
    )


def load_svg(path: str | Path) -> ProcessedSvg:
    """Read and process one SVG file.

    Args:
        path: Path of the file.

    Returns:
        The processed file.

    Raises:
        FileReadError: If the file cannot be read or is not valid UTF-8.
        SvgInputError: If the content fails processing.
    """
    try:
        text = read_text(path)
    except (OSError, UnicodeDecodeError) as e:
        raise chain_exception(
            FileReadError(f"failed to read file: {path}", {"path": str(path), "error": str(e)}),
            e,
        ) from e
    return process_svg(path, text)
