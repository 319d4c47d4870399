"""Error reporting that does not depend on configured logging.

Errors that end a command, and failures that happen while logging itself is
being set up, are written straight to stderr so they stay visible whatever
the log level or destination.
"""

import sys
from datetime import datetime
from typing import Any

from svg_sheet.exceptions import SvgSheetError

ERROR_PREFIX = "\x1b[1;31mError:\x1b[0m"


def handle_startup_error(
    error_type: str, message: str, details: dict[str, Any] | None = None
) -> None:
    """Handle errors that occur before logging is configured.

    Args:
        error_type: Type of error (e.g., "LOGGING_FILE_ERROR")
        message: Main error message
        details: Optional dictionary of additional error details
    """
    timestamp = datetime.now().isoformat()

    sys.stderr.write(f"\n[{timestamp}] {error_type}: {message}\n")

    if details:
        sys.stderr.write("Details:\n")
        for key, value in details.items():
            sys.stderr.write(f"  {key}: {value}\n")

    sys.stderr.flush()


def report_error(error: SvgSheetError) -> None:
    """Print a command-ending error and its direct cause.

    Args:
        error: The error that ended the command
    """
    prefix = ERROR_PREFIX if sys.stderr.isatty() else "Error:"
    sys.stderr.write(f"{prefix} {error.message}\n")
    if error.__cause__ is not None:
        sys.stderr.write(f"Caused by: {error.__cause__}\n")
    sys.stderr.flush()


def handle_keyboard_interrupt() -> None:
    """Handle keyboard interrupt gracefully."""
    sys.stderr.write("\n\nStopped by user (Ctrl+C)\n")
    sys.stderr.flush()
