#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Command line argument parsing
"""

import argparse
from typing import Optional, Sequence

from config import (
    APP_NAME,
    APP_VERSION,
    DEFAULT_VERBOSE,
    DEFAULT_WRITE_LOGS,
    GLYPH_RENDER_SIZE,
    LINE_GROUP_THRESHOLD_PX,
    WORD_GAP_PX,
)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog=APP_NAME,
        description="Hardsub OCR - recognize burned-in subtitle text by glyph template matching"
    )
    ap.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")

    # Input frames
    ap.add_argument("frame", help="Full-color frame image (PPM, PNG, ...)")
    ap.add_argument("mask", help="Change mask image of the same size (changed pixels keep their color)")

    # Font arguments
    ap.add_argument("--font", dest="font_path", type=str, default=None,
                   help="TrueType font the subtitles are rendered in (default: first system font found)")
    ap.add_argument("--font-size", type=int, default=GLYPH_RENDER_SIZE,
                   help="Glyph render size in points")

    # Layout arguments
    ap.add_argument("--word-gap", type=int, default=WORD_GAP_PX,
                   help="Empty columns between characters that insert a space")
    ap.add_argument("--line-threshold", type=int, default=LINE_GROUP_THRESHOLD_PX,
                   help="Max vertical distance (px) for a character to join a line")

    # Output arguments
    ap.add_argument("--debug-output", type=str, default=None,
                   help="Write the selected ink pixels to this image file")
    ap.add_argument("--dump-matches", type=str, default=None,
                   help="Write a shape/template comparison per character into this directory")
    ap.add_argument("--mark-uncertain", action="store_true", default=False,
                   help="Append '?' after low-confidence characters")
    ap.add_argument("--show-scores", action="store_true", default=False,
                   help="Print the top candidates of every character after the text")

    # Logging arguments
    ap.add_argument("--verbose", action="store_true", default=DEFAULT_VERBOSE,
                   help="Enable verbose logging (developer mode - shows all technical details)")
    ap.add_argument("--debug", action="store_true", default=False,
                   help="Enable ultra-detailed debug logging (includes per-template traces)")
    ap.add_argument("--write-logs", action="store_true", default=DEFAULT_WRITE_LOGS,
                   help="Also write a log file under the user data directory")
    return ap


def setup_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse and return command line arguments"""
    return build_parser().parse_args(argv)
