"""Logging configuration module for the SVG sprite sheet builder.

Routes the package's standard library loggers through structlog so build
diagnostics come out either as JSON lines or as readable console text. Values
passed through ``extra=`` (the file path, original and sanitized ids) become
separate fields of the rendered event.
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import TextIO

import structlog
from structlog.stdlib import ProcessorFormatter
from structlog.typing import Processor

from svg_sheet.constants import BYTES_PER_MEGABYTE
from svg_sheet.models.config import LoggingConfig
from svg_sheet.utils.early_error_handler import handle_startup_error
from svg_sheet.utils.path_utils import path_resolver

# Applied to records from stdlib loggers before rendering
_PRE_CHAIN: list[Processor] = [
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.ExtraAdder(),
    structlog.processors.TimeStamper(fmt="iso"),
]


def _make_renderer(log_format: str, stream: TextIO | None) -> Processor:
    """Pick the final renderer for a handler.

    Args:
        log_format: "json" for JSON lines, anything else for console text.
        stream: Stream the handler writes to; colors are used only on a terminal.

    Returns:
        The structlog renderer.
    """
    if log_format.lower() == "json":
        return structlog.processors.JSONRenderer()
    colors = stream is not None and hasattr(stream, "isatty") and stream.isatty()
    return structlog.dev.ConsoleRenderer(colors=colors)


def _make_formatter(log_format: str, stream: TextIO | None = None) -> ProcessorFormatter:
    return ProcessorFormatter(
        processor=_make_renderer(log_format, stream),
        foreign_pre_chain=_PRE_CHAIN,
    )


def _stream_handler(config: LoggingConfig, level: int) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(_make_formatter(config.format, sys.stderr))
    handler.setLevel(level)
    return handler


def _file_handler(config: LoggingConfig, level: int) -> logging.Handler:
    """Create a rotating file handler, creating the log directory if needed.

    Raises:
        OSError: If the directory or the file cannot be created.
    """
    from svg_sheet.utils import file_utils

    log_path = path_resolver.normalize_path(str(config.file))
    file_utils.ensure_dir_exists(log_path.parent)

    handler = RotatingFileHandler(
        log_path,
        maxBytes=config.max_size_mb * BYTES_PER_MEGABYTE,
        backupCount=config.backup_count,
        encoding="utf-8",
    )
    handler.setFormatter(_make_formatter(config.format))
    handler.setLevel(level)
    return handler


def setup_logging(config: LoggingConfig, name: str) -> logging.Logger:
    """Set up logging with the specified configuration.

    The handlers are attached to the named logger, so passing the package name
    routes every module logger of the package through them. Console output
    goes to stderr; a configured log file replaces it.

    Args:
        config: Logging configuration.
        name: Logger name.

    Returns:
        Configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.handlers = []

    level = getattr(logging, config.effective_level, logging.WARNING)
    logger.setLevel(level)

    if not config.file:
        logger.addHandler(_stream_handler(config, level))
        return logger

    try:
        logger.addHandler(_file_handler(config, level))
    except OSError as e:
        error_msg = f"Failed to set up file logging: {e}"
        handle_startup_error("LOGGING_FILE_ERROR", error_msg, {"log_file": str(config.file)})

        # Keep diagnostics visible on stderr instead
        logger.addHandler(_stream_handler(config, level))
        logger.error(error_msg)

    return logger
