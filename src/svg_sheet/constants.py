"""Application-wide constants for the SVG sprite sheet builder.

This module centralizes all constants used throughout the application to
ensure consistency and maintainability. Constants are organized into logical
categories for easier reference and documentation.

Constants are grouped into the following categories:
- Path Constants: Default input/output locations and configuration file names
- Sprite Constants: Fixed markup written around the assembled patterns
- Id Constants: Values used when rewriting identifiers
- Watch Constants: Debounce and polling intervals
- Logging Constants: Size units and level defaults
"""

# Path constants
APP_DIR_NAME = "svg-sheet"  # Directory name for user configuration
DEFAULT_CONFIG_FILENAME = "svg-sheet.yaml"  # Configuration file searched for by default
DEFAULT_INPUT_DIR = "svgs"  # Directory scanned for icons
DEFAULT_OUTPUT_FILE = "sprite.svg"  # Sprite written when no file is given
SVG_EXTENSION = ".svg"  # Only files with this suffix are candidates

# Sprite constants
SVG_NAMESPACE = "http://www.w3.org/2000/svg"
SPRITE_PREAMBLE = f'<svg xmlns="{SVG_NAMESPACE}"><defs>'
SPRITE_TRAILER = "</defs></svg>"
SVG_OPEN_TOKEN = "<svg"  # Literal that starts the root tag
SVG_CLOSE_TOKEN = "</svg>"  # First occurrence ends the root content

# Id constants
DATA_ID_ATTRIBUTE = "data-id"  # Replacement for id attributes inside merged content
FALLBACK_ID = "id"  # Used when a child id sanitizes to an empty string
FIRST_DUPLICATE_SUFFIX = 2  # First suffix appended to a repeated id

# Watch constants
DEFAULT_DEBOUNCE_MS = 300  # Coalescing window for change notifications
MIN_DEBOUNCE_MS = 1  # Smallest debounce interval, avoids busy looping
DEFAULT_POLL_INTERVAL_MS = 500  # Re-scan interval in polling mode
STOP_CHECK_INTERVAL_MS = 100  # How often an idle watch loop checks for a stop request
MILLISECONDS_PER_SECOND = 1000

# Logging constants
BYTES_PER_MEGABYTE = 1024 * 1024
DEFAULT_LOG_LEVEL = "WARNING"  # Used when neither quiet nor verbose is set
QUIET_LOG_LEVEL = "ERROR"
VERBOSE_LOG_LEVEL = "INFO"
LOGGER_NAME = "svg_sheet"  # Parent of every module logger in the package
LOG_LEVEL_CHOICES = ("error", "warn", "info", "debug", "trace")

# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130
