#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Global constants for Hardsub OCR
All arbitrary values are centralized here for easy tracking and modification
"""

# =============================================================================
# APPLICATION METADATA
# =============================================================================

APP_NAME = "HardsubOCR"                  # Used for the user data directory and log files
APP_VERSION = "0.3.0"                    # Application version


# =============================================================================
# PIXEL CLASSIFICATION CONSTANTS
# =============================================================================

# HSL lightness/saturation thresholds, all in [0, 1]
NEARLY_WHITE_LIGHTNESS = 0.95            # Seed pixels must be brighter than this
CLOSELY_WHITE_LIGHTNESS = 0.80           # Bright enough to be glyph ink regardless of hue
SOMEWHAT_WHITE_SATURATION = 0.20         # Low-saturation pixels may still be ink...
SOMEWHAT_WHITE_LIGHTNESS = 0.35          # ...when at least this light
CLOSELY_BLACK_LIGHTNESS = 0.20           # Outline pixels, skipped during flood fill
GREYISH_SATURATION = 0.20                # Anti-aliased ink/outline transition pixels


# =============================================================================
# SHAPE CONSTANTS
# =============================================================================

INK_COVERAGE_THRESHOLD = 0.001           # Coverage below this is background


# =============================================================================
# GLYPH TEMPLATE CONSTANTS
# =============================================================================

# 52 Latin letters plus comma and period
CHARACTER_ALPHABET = (
    "qwertyuiopasdfghjklzxcvbnm"
    "QWERTYUIOPASDFGHJKLZXCVBNM"
    ",."
)

# Sub-pixel start positions each glyph is rendered at
GLYPH_SHIFTS = (
    (0.0, 0.0),
    (0.5, 0.0),
    (0.0, 0.5),
    (0.5, 0.5),
)

GLYPH_RENDER_SIZE = 24                   # Font size in points used for templates
GLYPH_CANVAS_PADDING = 8                 # Blank margin around a rendered glyph (px)

# Font search order per platform (first existing file wins)
FONT_PATHS = {
    'darwin': [
        "/System/Library/Fonts/Helvetica.ttc",
        "/Library/Fonts/Arial.ttf",
        "/System/Library/Fonts/Supplemental/Arial.ttf",
    ],
    'linux': [
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        "/usr/share/fonts/truetype/liberation/LiberationSans-Regular.ttf",
        "/usr/share/fonts/truetype/freefont/FreeSans.ttf",
        "/usr/share/fonts/TTF/DejaVuSans.ttf",
    ],
    'win32': [
        "C:/Windows/Fonts/arial.ttf",
        "C:/Windows/Fonts/tahoma.ttf",
        "C:/Windows/Fonts/verdana.ttf",
    ],
}


# =============================================================================
# MATCHING CONSTANTS
# =============================================================================

MATCH_SCORE_SCALE = 10_000_000           # Fixed-point scale of all match scores
MATCH_ACCEPT_RATIO = 0.8                 # Share of the scale a confident match must reach
MATCH_ACCEPT_THRESHOLD = int(MATCH_SCORE_SCALE * MATCH_ACCEPT_RATIO)
OUT_OF_BOUNDS_PENALTY_DIVISOR = 100.0    # Template ink outside the image costs coverage * d^2 / this

# Integer alignment offsets tried for every template (3x3 neighborhood)
MATCH_OFFSETS = tuple((dx, dy) for dy in (-1, 0, 1) for dx in (-1, 0, 1))

LIGATURE_MAX_DEPTH = 3                   # Maximum nested prefix splits per blob


# =============================================================================
# LAYOUT CONSTANTS
# =============================================================================

SAME_LINE_THRESHOLD_PX = 15              # Reading order: vertical starts closer than this share a line
MERGE_OVERLAP_RATIO = 0.5                # Horizontal overlap (of the narrower shape) needed to merge
LINE_GROUP_THRESHOLD_PX = 20             # Line assembly: max vertical start distance to the line head
WORD_GAP_PX = 5                          # Empty columns between characters that make a space


# =============================================================================
# DEBUG OUTPUT CONSTANTS
# =============================================================================

DEBUG_COMPARISON_GAP_PX = 2              # Black columns between shape and template in comparisons
DEBUG_SHEET_COLUMNS = 16                 # Templates per row in the template contact sheet


# =============================================================================
# LOGGING CONSTANTS
# =============================================================================

LOG_MAX_FILE_SIZE_MB_DEFAULT = 10        # Roll over to a new log file after this size
LOG_MAX_AGE_HOURS = 24                   # Delete log files older than this on startup
LOG_SEPARATOR_WIDTH = 80                 # Width of separator lines in logs (e.g., "=" * 80)
LOG_FILE_PATTERN = "hardsub_ocr_*.log"
LOG_TIMESTAMP_FORMAT = "%d-%m-%Y_%H-%M-%S"


# =============================================================================
# DEFAULT ARGUMENTS
# =============================================================================

DEFAULT_VERBOSE = False
DEFAULT_WRITE_LOGS = False
