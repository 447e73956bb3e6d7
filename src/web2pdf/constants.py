"""
Single place for constants that are used across the package.
"""

from typing import Final

# CSS absolute length units: 1in == 96px
CSS_DPI: Final[float] = 96.0

# 1cm, the margin applied when the caller does not choose one
DEFAULT_MARGIN_IN: Final[float] = 0.3937

# mono mode falls back to a rounder margin for unset sides
MONO_DEFAULT_MARGIN_IN: Final[float] = 0.4

# some pages force an empty trailing page once a very tall paper is used
MONO_PAGE_RANGES: Final[str] = "1"

# --------------------------- viewport defaults -------------------------- #
# A4 minus the default border: (8.268 - 2*0.4) x (11.693 - 2*0.4) in * 96
DEFAULT_VIEWPORT_WIDTH: Final[int] = 717
DEFAULT_VIEWPORT_HEIGHT: Final[int] = 1046
DEFAULT_DEVICE_SCALE: Final[float] = 1.0

# Netscape cookie jar
HTTPONLY_PREFIX: Final[str] = "#HttpOnly_"
COOKIE_FIELD_COUNT: Final[int] = 7

MEDIA_TYPES: Final[frozenset[str]] = frozenset({"screen", "print"})

LOGLEVEL_ENV: Final[str] = "W2P_LOGLEVEL"

# POSIX keeps only the low 8 bits of an exit status
MAX_EXIT_CODE: Final[int] = 255
