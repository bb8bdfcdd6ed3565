#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Main entry point for Hardsub OCR
"""

import sys
from typing import Optional, Sequence

# Python version check
MIN_PYTHON = (3, 8)
if sys.version_info < MIN_PYTHON:
    raise RuntimeError(
        f"Hardsub OCR requires Python {MIN_PYTHON[0]}.{MIN_PYTHON[1]} or newer. "
        "Please upgrade your interpreter."
    )

from .setup.arguments import setup_arguments
from .setup.initialization import setup_logging_and_cleanup
from .core.initialization import initialize_recognizer
from .core.pipeline import run_frame

from subtitle_recognition import GlyphRasterizationError, RasterFormatError, UnsupportedCharacterError
from utils.logging import get_logger, flush_logging

log = get_logger()


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Program entry point: recognize one frame and print its text. Returns the exit code."""
    args = setup_arguments(argv)
    setup_logging_and_cleanup(args)

    try:
        recognizer = initialize_recognizer(args)
        run_frame(args, recognizer)
    except RasterFormatError as e:
        log.error(f"Cannot read input frames: {e}")
        return 1
    except (FileNotFoundError, GlyphRasterizationError) as e:
        log.error(f"Cannot prepare glyph templates: {e}")
        return 1
    except UnsupportedCharacterError as e:
        log.error(f"Template lookup failed: {e}")
        return 1
    finally:
        flush_logging()
    return 0
