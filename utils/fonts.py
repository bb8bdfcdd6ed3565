#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Font utilities for cross-platform font loading
"""

import os
import sys
from functools import lru_cache
from typing import List, Optional

from PIL import ImageFont

from config import FONT_PATHS, GLYPH_RENDER_SIZE
from utils.logging import get_logger

log = get_logger()


def _get_platform_fonts() -> List[str]:
    """Get font paths for the current platform."""
    platform = sys.platform
    if platform.startswith('linux'):
        platform = 'linux'
    return FONT_PATHS.get(platform, FONT_PATHS['linux'])


def find_font_path() -> Optional[str]:
    """
    Get the path of the first installed font from the search list.

    Returns:
        Font file path, or None when no candidate exists on this machine
    """
    for path in _get_platform_fonts():
        if os.path.exists(path):
            return path

    # Try all platforms as fallback
    for platform_fonts in FONT_PATHS.values():
        for path in platform_fonts:
            if os.path.exists(path):
                return path
    return None


@lru_cache(maxsize=8)
def get_font(font_path: Optional[str] = None, size: int = GLYPH_RENDER_SIZE) -> ImageFont.FreeTypeFont:
    """
    Load a TrueType font for glyph rendering.

    Args:
        font_path: Explicit font file; searched in FONT_PATHS when omitted
        size: Font size in points

    Returns:
        PIL FreeTypeFont object

    Raises:
        FileNotFoundError: no font file is available
        OSError: the font file could not be parsed
    """
    if font_path is None:
        font_path = find_font_path()
        if font_path is None:
            raise FileNotFoundError(
                "No TrueType font found; pass an explicit font path (--font)"
            )
    log.debug(f"Loading font {font_path} at size {size}")
    return ImageFont.truetype(font_path, size)
