"""Incremental caching of processed SVG files.

Keeps the processing result of every input file keyed by absolute path and
by the file's (modification time, size) signature, so a rebuild only parses
files that changed since the previous rebuild.
"""

import logging
from collections.abc import Callable, Sequence
from pathlib import Path

from svg_sheet.models.sprite import CacheEntry, ProcessedSvg
from svg_sheet.svg.processor import load_svg
from svg_sheet.utils.file_utils import FileSignature, get_file_signature


class SpriteCache:
    """Processed-file store for incremental rebuilds.

    Entries are created or replaced when a file's signature changes, dropped
    when the file leaves the directory listing, and otherwise reused as-is.
    The cache belongs to a single watch loop and is not thread-safe.

    Attributes:
        logger: Logger instance
        hits: Files reused without reprocessing during the last reconcile
        misses: Files processed during the last reconcile
    """

    def __init__(
        self,
        loader: Callable[[Path], ProcessedSvg] = load_svg,
        signature: Callable[[Path], FileSignature] = get_file_signature,
    ) -> None:
        """Initialize an empty cache.

        Args:
            loader: Reads and processes one file
            signature: Returns the (mtime, size) signature of one file
        """
        self._entries: dict[str, CacheEntry] = {}
        self._loader = loader
        self._signature = signature
        self.hits = 0
        self.misses = 0
        self.logger = logging.getLogger(__name__)

    @staticmethod
    def key_for(path: Path) -> str:
        """Return the cache key for a path."""
        return str(path.absolute())

    def get(self, path: Path) -> CacheEntry | None:
        """Get the entry for a path, if cached."""
        return self._entries.get(self.key_for(path))

    def __contains__(self, path: object) -> bool:
        return isinstance(path, Path) and self.key_for(path) in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def reconcile(self, paths: Sequence[Path]) -> list[ProcessedSvg]:
        """Bring the cache in line with a fresh directory listing.

        Entries for paths missing from ``paths`` are dropped. Each listed file
        whose signature matches its entry is reused; any other file is
        processed and its entry replaced. A file that vanishes between listing
        and stat is skipped.

        Args:
            paths: Candidate files in listing order.

        Returns:
            Processing results for the listed files, in listing order.

        Raises:
            FileReadError: If a changed file cannot be read.
            SvgInputError: If a changed file fails processing. Entries of
                other files are left untouched.
        """
        live = {self.key_for(path) for path in paths}
        for key in [key for key in self._entries if key not in live]:
            self.logger.debug(f"Dropping cache entry for removed file: {key}")
            del self._entries[key]

        self.hits = 0
        self.misses = 0
        results: list[ProcessedSvg] = []
        for path in paths:
            key = self.key_for(path)
            try:
                modified_time, byte_length = self._signature(path)
            except FileNotFoundError:
                self.logger.debug(f"File disappeared before it could be read: {path}")
                self._entries.pop(key, None)
                continue

            entry = self._entries.get(key)
            if entry is not None and entry.matches(modified_time, byte_length):
                self.hits += 1
                results.append(entry.result)
                continue

            result = self._loader(path)
            self._entries[key] = CacheEntry(
                modified_time=modified_time, byte_length=byte_length, result=result
            )
            self.misses += 1
            results.append(result)

        self.logger.debug(f"Cache reconciled: {self.hits} reused, {self.misses} processed")
        return results

    def clear(self) -> None:
        """Clear all cached entries."""
        self._entries.clear()
