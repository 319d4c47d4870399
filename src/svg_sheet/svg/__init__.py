"""SVG parsing, normalization, and sprite assembly."""

from svg_sheet.svg.assembler import IdRegistry, SpriteWriter, build_id_registry, write_sprite
from svg_sheet.svg.ids import references_id, rewrite_ids_to_data_ids
from svg_sheet.svg.normalize import normalize_length, normalize_viewbox
from svg_sheet.svg.parsing import ParsedSvg, parse_svg, preprocess_svg_content
from svg_sheet.svg.processor import load_svg, process_svg, sprite_name
from svg_sheet.svg.sanitize import sanitize_id

__all__ = [
    # Parsing
    "ParsedSvg",
    "parse_svg",
    "preprocess_svg_content",
    # Identifiers
    "sanitize_id",
    "references_id",
    "rewrite_ids_to_data_ids",
    # Normalization
    "normalize_length",
    "normalize_viewbox",
    # Processing and assembly
    "load_svg",
    "process_svg",
    "sprite_name",
    "IdRegistry",
    "SpriteWriter",
    "build_id_registry",
    "write_sprite",
]
