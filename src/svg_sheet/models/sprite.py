"""Sprite data models.

Defines the units passed between the file processor, the incremental cache,
and the sprite assembler, along with the structured warnings emitted while
processing a file.
"""

from enum import Enum

from pydantic import BaseModel, Field

# A (key, value) pair from a root <svg> tag, in source order
Attribute = tuple[str, str]


class DiagnosticKind(str, Enum):
    """Kinds of non-fatal findings reported while processing a file."""

    ROOT_ID_MOVED = "root_id_moved"
    MISSING_WIDTH = "missing_width"
    MISSING_HEIGHT = "missing_height"
    MISSING_VIEWBOX = "missing_viewbox"


class Diagnostic(BaseModel):
    """A warning about one input file."""

    kind: DiagnosticKind
    path: str
    message: str
    details: dict[str, str] = Field(default_factory=dict)


class SpriteUnit(BaseModel):
    """One input file, ready to be rendered as a <pattern>."""

    name: str  # File name without the .svg extension
    attributes: list[Attribute] = Field(default_factory=list)
    content: str = ""  # Inner markup with ids rewritten to data-id

    def render(self) -> str:
        """Render the unit as a pattern element.

        Returns:
            The ``<pattern>`` markup for this unit.
        """
        attrs = "".join(f' {key}="{value}"' for key, value in self.attributes)
        return f'<pattern id="{self.name}"{attrs}>{self.content}</pattern>'


class ProcessedSvg(BaseModel):
    """Result of processing one input file."""

    path: str
    unit: SpriteUnit
    child_ids: list[str] = Field(default_factory=list)  # data-id values in emission order
    warnings: list[Diagnostic] = Field(default_factory=list)

    @property
    def warning_count(self) -> int:
        """Number of warnings recorded for this file."""
        return len(self.warnings)


class CacheEntry(BaseModel):
    """Cached processing result for one path in watch mode."""

    modified_time: int  # Nanoseconds since the epoch
    byte_length: int
    result: ProcessedSvg

    def matches(self, modified_time: int, byte_length: int) -> bool:
        """Check whether the entry was built from a file with this metadata.

        Args:
            modified_time: Current modification time of the file.
            byte_length: Current size of the file in bytes.

        Returns:
            True if the cached entry can be reused.
        """
        return self.modified_time == modified_time and self.byte_length == byte_length


class BuildResult(BaseModel):
    """Summary of one sprite build."""

    output: str
    pattern_count: int = 0
    warning_count: int = 0
    dry_run: bool = False
