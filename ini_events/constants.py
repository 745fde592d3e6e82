"""Constants used across the ini-events package."""

from __future__ import annotations

# INI syntax
COMMENT_PREFIX = "#"
SECTION_START = "["
SECTION_END = "]"
PAIR_SEPARATOR = "="
LINE_SEPARATOR = "\n"

# pacman-conf helper
DEFAULT_PACMAN_CONF_BIN = "pacman-conf"
OPTIONS_SECTION = "options"
EMPTY_PACMAN_CONF = "/dev/null"
DEFAULT_USE_DELTA = 0.7

# Limits
DEFAULT_MAX_FILE_SIZE = 10 * 1024 * 1024
