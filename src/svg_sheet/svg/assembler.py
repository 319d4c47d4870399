"""Sprite assembly.

Streams sprite units into a single SVG document and tracks which file first
emitted each data-id so collisions across files can be reported.
"""

import logging
from collections.abc import Iterable
from typing import TextIO

from svg_sheet.constants import SPRITE_PREAMBLE, SPRITE_TRAILER
from svg_sheet.exceptions import IdCollisionError
from svg_sheet.models.sprite import ProcessedSvg, SpriteUnit


class IdRegistry:
    """Mapping from emitted data-id to the path that first defined it.

    A registry covers one build or one rebuild cycle and is never shared
    between them.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._owners: dict[str, str] = {}

    def register(self, ids: Iterable[str], path: str) -> None:
        """Record the ids emitted by one file.

        Args:
            ids: data-id values emitted by the file.
            path: Path of the file.

        Raises:
            IdCollisionError: If another file already emitted one of the ids.
        """
        for id_value in ids:
            owner = self._owners.setdefault(id_value, path)
            if owner != path:
                raise IdCollisionError(
                    f"duplicate id '{id_value}' found in {path}; already defined in {owner}",
                    {"id": id_value, "first_path": owner, "second_path": path},
                )

    def owner(self, id_value: str) -> str | None:
        """Return the path that defined an id, if any."""
        return self._owners.get(id_value)

    def __contains__(self, id_value: object) -> bool:
        return id_value in self._owners

    def __len__(self) -> int:
        return len(self._owners)


def build_id_registry(results: Iterable[ProcessedSvg]) -> IdRegistry:
    """Build a registry from processed files, in the given order.

    Args:
        results: Processed files in directory listing order.

    Returns:
        The populated registry.

    Raises:
        IdCollisionError: On the first id emitted by two files.
    """
    registry = IdRegistry()
    for result in results:
        registry.register(result.child_ids, result.path)
    return registry


class SpriteWriter:
    """Writes a sprite document to a text sink one unit at a time.

    Attributes:
        sink: Destination for the document
        unit_count: Number of units written so far
    """

    def __init__(self, sink: TextIO) -> None:
        """Initialize the writer.

        Args:
            sink: Destination for the document.
        """
        self.sink = sink
        self.unit_count = 0
        self._started = False
        self.logger = logging.getLogger(__name__)

    def begin(self) -> None:
        """Write the document preamble."""
        if not self._started:
            self.sink.write(SPRITE_PREAMBLE)
            self._started = True

    def write_unit(self, unit: SpriteUnit) -> None:
        """Write one unit as a pattern element.

        Args:
            unit: The unit to write.
        """
        self.begin()
        self.sink.write(unit.render())
        self.unit_count += 1

    def finish(self) -> None:
        """Write the document trailer and flush the sink."""
        self.begin()
        self.sink.write(SPRITE_TRAILER)
        self.sink.flush()
        self.logger.debug(f"Wrote sprite with {self.unit_count} pattern(s)")


def write_sprite(sink: TextIO, units: Iterable[SpriteUnit]) -> int:
    """Stream a complete sprite document.

    ``units`` may be a lazy iterable; each unit is written as soon as it is
    produced, so only one unit is held in memory at a time.

    Args:
        sink: Destination for the document.
        units: Units in output order.

    Returns:
        The number of patterns written.
    """
    writer = SpriteWriter(sink)
    writer.begin()
    for unit in units:
        writer.write_unit(unit)
    writer.finish()
    return writer.unit_count
