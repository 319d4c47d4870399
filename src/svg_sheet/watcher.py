"""Watch mode for the SVG sprite sheet builder.

Rebuilds the sprite whenever the input directory changes. Change detection
uses file system events through watchdog, or periodic re-scans of the
directory in polling mode. Only files whose modification time or size changed
since the previous rebuild are processed again.
"""

import logging
import os
import queue
import threading
import time
from collections.abc import Callable

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer
from watchdog.observers.api import BaseObserver

from svg_sheet.builder import (
    check_warnings,
    list_svg_candidates,
    log_diagnostics,
    write_sprite_file,
)
from svg_sheet.constants import (
    MILLISECONDS_PER_SECOND,
    STOP_CHECK_INTERVAL_MS,
    SVG_EXTENSION,
)
from svg_sheet.exceptions import DirectoryReadError, SvgSheetError, chain_exception
from svg_sheet.models.config import AppConfig
from svg_sheet.svg.assembler import build_id_registry
from svg_sheet.utils.cache_manager import SpriteCache
from svg_sheet.utils.file_utils import get_file_signature

# (file name, modification time in ns, size in bytes) for each candidate file
DirectoryFingerprint = tuple[tuple[str, int, int], ...]

_CHANGE_EVENTS = frozenset(
    {EVENT_TYPE_CREATED, EVENT_TYPE_DELETED, EVENT_TYPE_MODIFIED, EVENT_TYPE_MOVED}
)


class SvgChangeHandler(FileSystemEventHandler):
    """Forwards changes to input files, ignoring everything else.

    Writes to the output file and to its temporary sibling are filtered out so
    a rebuild never triggers another rebuild.
    """

    def __init__(self, notify: Callable[[str], None], output_name: str) -> None:
        """Initialize the handler.

        Args:
            notify: Called with the path of each relevant change.
            output_name: File name of the sprite being written.
        """
        super().__init__()
        self._notify = notify
        self.output_name = output_name

    def is_relevant(self, path: str | bytes) -> bool:
        """Check whether a path names an input file."""
        if not path:
            return False
        name = os.path.basename(os.fsdecode(path))
        return name.endswith(SVG_EXTENSION) and name != self.output_name

    def on_any_event(self, event: FileSystemEvent) -> None:
        if event.is_directory or event.event_type not in _CHANGE_EVENTS:
            return
        for path in (event.src_path, getattr(event, "dest_path", "")):
            if self.is_relevant(path):
                self._notify(os.fsdecode(path))
                return


class SpriteWatcher:
    """Keeps the sprite up to date while the input directory changes.

    The watcher thread is the only user of the cache and the output file.
    Event notifications arrive from the observer thread through a queue.

    Attributes:
        config: Application configuration
        cache: Processed files from previous rebuilds
        rebuild_count: Number of rebuild attempts so far
        logger: Logger instance
    """

    def __init__(
        self,
        config: AppConfig,
        cache: SpriteCache | None = None,
        observer_factory: Callable[[], BaseObserver] = Observer,
    ) -> None:
        """Initialize the watcher.

        Args:
            config: Application configuration.
            cache: Cache to use, a fresh one when omitted.
            observer_factory: Creates the watchdog observer for event mode.
        """
        self.config = config
        self.cache = cache if cache is not None else SpriteCache()
        self.rebuild_count = 0
        self.logger = logging.getLogger(__name__)
        self._observer_factory = observer_factory
        self._events: queue.Queue[str] = queue.Queue()
        self._stop = threading.Event()
        self._last_fingerprint: DirectoryFingerprint | None = None

    @property
    def debounce_seconds(self) -> float:
        return self.config.watch.debounce_ms / MILLISECONDS_PER_SECOND

    def rebuild_once(self) -> bool:
        """Bring the sprite in line with the current directory contents.

        Returns:
            True if a sprite was written, False if there was nothing to build.

        Raises:
            SvgSheetError: If listing, processing, id checks, or writing fail.
                The cache keeps every entry that was still valid and the
                previous sprite is left in place.
        """
        self.rebuild_count += 1
        build = self.config.build

        paths = list_svg_candidates(build.directory, build.file)
        if not paths:
            self.logger.warning(f"No SVG files found in {build.directory}")
            return False

        results = self.cache.reconcile(paths)
        if not results:
            self.logger.warning(f"No SVG files found in {build.directory}")
            return False

        # A fresh registry per cycle; ids of removed files must not linger
        build_id_registry(results)

        warning_count = sum(log_diagnostics(result) for result in results)
        pattern_count = write_sprite_file(
            build.file, (result.unit for result in results), dry_run=build.dry_run
        )
        self.logger.info(
            f"Rebuilt sprite with {pattern_count} pattern(s) "
            f"({self.cache.hits} reused, {self.cache.misses} processed)"
        )

        check_warnings(warning_count, build.fail_on_warn)
        return True

    def safe_rebuild(self) -> bool:
        """Run one rebuild cycle, logging any failure instead of raising.

        Returns:
            True if a sprite was written.
        """
        try:
            return self.rebuild_once()
        except SvgSheetError as e:
            self.logger.error(f"Rebuild failed: {e}")
            if e.__cause__ is not None:
                self.logger.error(f"Caused by: {e.__cause__}")
            return False

    def notify(self, path: str = "") -> None:
        """Record a change notification. Safe to call from any thread."""
        self._events.put(path)

    def process_pending(self, timeout: float) -> bool:
        """Wait for a notification and rebuild once the changes settle.

        Notifications keep extending the wait until none has arrived for the
        debounce interval. Notifications that arrive during the rebuild stay
        queued and trigger the next one.

        Args:
            timeout: Seconds to wait for a first notification.

        Returns:
            True if a rebuild was attempted.
        """
        try:
            self._events.get(timeout=timeout)
        except queue.Empty:
            return False

        deadline = time.monotonic() + self.debounce_seconds
        while True:
            remaining = deadline - time.monotonic()
            if remaining <= 0:
                break
            try:
                self._events.get(timeout=remaining)
            except queue.Empty:
                break
            deadline = time.monotonic() + self.debounce_seconds

        self.safe_rebuild()
        return True

    def directory_fingerprint(self) -> DirectoryFingerprint:
        """Summarize the names, sizes, and modification times of the input files.

        Raises:
            DirectoryReadError: If the directory cannot be listed.
        """
        build = self.config.build
        entries = []
        for path in list_svg_candidates(build.directory, build.file):
            try:
                modified_time, byte_length = get_file_signature(path)
            except FileNotFoundError:
                continue
            entries.append((path.name, modified_time, byte_length))
        return tuple(entries)

    def poll_once(self) -> bool:
        """Rebuild if the directory changed since the previous check.

        Returns:
            True if a rebuild was attempted.

        Raises:
            DirectoryReadError: If the directory cannot be listed.
        """
        fingerprint = self.directory_fingerprint()
        if fingerprint == self._last_fingerprint:
            return False
        self._last_fingerprint = fingerprint
        self.safe_rebuild()
        return True

    def run_poll(self) -> None:
        """Re-scan the directory on a fixed interval until stopped."""
        interval = self.config.watch.poll_interval_ms / MILLISECONDS_PER_SECOND
        while not self._stop.is_set():
            try:
                self.poll_once()
            except SvgSheetError as e:
                self.logger.error(f"Watch error: {e}")
            self._stop.wait(interval)

    def run_events(self) -> None:
        """Rebuild on file system events until stopped.

        Raises:
            DirectoryReadError: If the directory cannot be watched.
        """
        build = self.config.build
        handler = SvgChangeHandler(self.notify, os.path.basename(build.file))
        observer = self._observer_factory()
        try:
            observer.schedule(handler, build.directory, recursive=False)
            observer.start()
        except OSError as e:
            raise chain_exception(
                DirectoryReadError(
                    f"failed to read directory: {build.directory}",
                    {"path": build.directory, "error": str(e)},
                ),
                e,
            ) from e

        wait = STOP_CHECK_INTERVAL_MS / MILLISECONDS_PER_SECOND
        try:
            self.safe_rebuild()
            while not self._stop.is_set():
                self.process_pending(timeout=wait)
        finally:
            observer.stop()
            observer.join()

    def run(self) -> None:
        """Watch the input directory until stopped or interrupted."""
        build = self.config.build
        mode = "poll" if self.config.watch.poll else "event"
        self.logger.info(
            f"Watching {build.directory} for changes, writing {build.file} "
            f"(mode={mode}, Ctrl+C to stop)"
        )
        if self.config.watch.poll:
            self.run_poll()
        else:
            self.run_events()

    def stop(self) -> None:
        """Ask the running loop to exit after its current step."""
        self._stop.set()
